"""Core Gmail triage functionality."""

from .gmail_auth import AuthConfigurationError, GmailAuth
from .gmail_manager import GmailManager
from .draft_parser import DraftParser, DraftRecord, format_body
from .session import SessionStore, UserSession

__all__ = [
    "AuthConfigurationError",
    "GmailAuth",
    "GmailManager",
    "DraftParser",
    "DraftRecord",
    "format_body",
    "SessionStore",
    "UserSession",
]
