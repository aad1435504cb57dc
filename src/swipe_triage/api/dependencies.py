"""Request-scoped dependencies for the gateway routes."""

from typing import Optional

from fastapi import Depends, Request, Response

from .errors import GatewayError, NOT_AUTHENTICATED
from ..core.gmail_auth import GmailAuth
from ..core.gmail_manager import GmailManager
from ..core.session import SessionStore, UserSession
from ..utils.config import Settings
from ..utils.logger import get_logger

logger = get_logger(__name__)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.sessions


def get_auth(request: Request) -> GmailAuth:
    return request.app.state.auth


def set_session_cookie(response: Response, session: UserSession, settings: Settings) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session.session_id,
        httponly=True,
        samesite="lax",
    )


def get_optional_session(
    request: Request,
    settings: Settings = Depends(get_settings),
    store: SessionStore = Depends(get_session_store),
) -> Optional[UserSession]:
    """The caller's existing session, if its cookie names one."""
    return store.get(request.cookies.get(settings.session_cookie_name))


def get_session(
    response: Response,
    session: Optional[UserSession] = Depends(get_optional_session),
    settings: Settings = Depends(get_settings),
    store: SessionStore = Depends(get_session_store),
) -> UserSession:
    """The caller's session, creating one and issuing its cookie if needed."""
    if session is None:
        session = store.create()
        set_session_cookie(response, session, settings)
    return session


def require_session(session: Optional[UserSession] = Depends(get_optional_session)) -> UserSession:
    """The caller's session, which must hold a token set."""
    if session is None or not session.is_authenticated:
        raise GatewayError(401, NOT_AUTHENTICATED)
    return session


def get_gmail_manager(
    session: UserSession = Depends(require_session),
    auth: GmailAuth = Depends(get_auth),
    settings: Settings = Depends(get_settings),
) -> GmailManager:
    try:
        service = auth.get_gmail_service(session.credentials)
    except Exception as e:
        logger.error(f"Failed to create Gmail service: {e}")
        raise GatewayError(500, "Failed to connect to Gmail")
    return GmailManager(service, settings=settings)
