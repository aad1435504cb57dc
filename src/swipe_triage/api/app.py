"""FastAPI application for the triage gateway."""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .errors import GatewayError, gateway_error_handler
from .routes import auth, drafts
from ..core.gmail_auth import GmailAuth
from ..core.session import SessionStore
from ..utils.config import Settings, settings as default_settings
from ..utils.logger import get_logger

logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    sessions: Optional[SessionStore] = None,
    gmail_auth: Optional[GmailAuth] = None,
) -> FastAPI:
    """Create the gateway with its session store and OAuth helper."""
    settings = settings or default_settings

    app = FastAPI(title="Swipe Triage Gateway")
    app.state.settings = settings
    app.state.sessions = sessions if sessions is not None else SessionStore(
        session_ttl=settings.session_ttl,
        login_state_ttl=settings.login_state_ttl,
    )
    app.state.auth = gmail_auth or GmailAuth(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.client_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(GatewayError, gateway_error_handler)

    app.include_router(auth.router)
    app.include_router(drafts.router)

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    logger.debug(f"Gateway configured for client {settings.client_url}")
    return app
