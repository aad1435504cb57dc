"""Gateway route modules."""

from . import auth, drafts

__all__ = ["auth", "drafts"]
