"""Gmail OAuth2 web-flow authentication."""

from typing import Optional, Tuple

from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow
from googleapiclient.discovery import build

from ..utils.config import Settings, settings as default_settings
from ..utils.logger import get_logger
from ..utils.security import CLIENT_SECRET_KEY, retrieve_secret

logger = get_logger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/gmail.readonly",
    "https://www.googleapis.com/auth/gmail.send",
    "https://www.googleapis.com/auth/gmail.modify",
    "https://www.googleapis.com/auth/gmail.compose",
]

AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
TOKEN_URI = "https://oauth2.googleapis.com/token"


class AuthConfigurationError(RuntimeError):
    """Raised when the OAuth client is not configured."""


class GmailAuth:
    """Builds consent URLs, exchanges codes and creates Gmail services."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or default_settings

    def client_config(self) -> dict:
        """OAuth client configuration in Google's "web" format."""
        client_id = self.settings.google_client_id
        client_secret = self.settings.google_client_secret or retrieve_secret(CLIENT_SECRET_KEY)
        if not client_id or not client_secret:
            raise AuthConfigurationError(
                "Google OAuth client is not configured. "
                "Set GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET."
            )

        return {
            "web": {
                "client_id": client_id,
                "client_secret": client_secret,
                "redirect_uris": [self.settings.google_redirect_uri],
                "auth_uri": AUTH_URI,
                "token_uri": TOKEN_URI,
            }
        }

    def create_flow(self) -> Flow:
        flow = Flow.from_client_config(self.client_config(), scopes=SCOPES)
        flow.redirect_uri = self.settings.google_redirect_uri
        return flow

    def authorization_url(self) -> Tuple[str, str, Optional[str]]:
        """Return the consent URL, its state and the PKCE code verifier."""
        flow = self.create_flow()
        flow.autogenerate_code_verifier = True
        url, state = flow.authorization_url(
            access_type="offline",
            prompt="consent",
        )
        logger.debug("Generated consent URL")
        return url, state, flow.code_verifier

    def exchange_code(self, code: str, code_verifier: Optional[str] = None) -> Credentials:
        """Exchange an authorization code for a token set."""
        flow = self.create_flow()
        flow.code_verifier = code_verifier
        flow.fetch_token(code=code)
        logger.info("Completed OAuth2 code exchange")
        return flow.credentials

    def get_gmail_service(self, credentials: Credentials):
        """Get a Gmail API service bound to the given credentials."""
        service = build("gmail", "v1", credentials=credentials, cache_discovery=False)
        logger.debug("Created Gmail API service")
        return service
