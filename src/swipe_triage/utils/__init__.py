"""Utility modules for Swipe Triage."""

from .config import Settings, settings
from .logger import get_logger, setup_logging
from .security import generate_session_id, retrieve_secret, store_secret

__all__ = [
    "Settings",
    "settings",
    "get_logger",
    "setup_logging",
    "generate_session_id",
    "retrieve_secret",
    "store_secret",
]
