"""
Swipe Triage - card-by-card review of Gmail drafts

A small gateway in front of Google OAuth2 and the Gmail API, plus a client
that shows drafts labeled "Review" one at a time and either sends or flags
each of them.
"""

__version__ = "0.1.0"
__description__ = "Swipe-to-triage review of Gmail drafts"

from .core.gmail_manager import GmailManager
from .core.draft_parser import DraftParser, DraftRecord
from .api.app import create_app

__all__ = [
    "GmailManager",
    "DraftParser",
    "DraftRecord",
    "create_app",
]
