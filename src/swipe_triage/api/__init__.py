"""REST gateway in front of Google OAuth2 and the Gmail API."""

from .app import create_app
from .errors import GatewayError

__all__ = [
    "create_app",
    "GatewayError",
]
