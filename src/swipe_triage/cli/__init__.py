"""Command line interface for Swipe Triage."""
