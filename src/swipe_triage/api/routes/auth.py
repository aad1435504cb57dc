"""OAuth login, status and logout routes."""

from typing import Optional

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import RedirectResponse

from ..dependencies import (
    get_auth,
    get_optional_session,
    get_session,
    get_session_store,
    get_settings,
    set_session_cookie,
)
from ..errors import GatewayError
from ...core.gmail_auth import AuthConfigurationError, GmailAuth
from ...core.session import SessionStore, UserSession
from ...utils.config import Settings
from ...utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _client_redirect(settings: Settings, outcome: str) -> RedirectResponse:
    return RedirectResponse(f"{settings.client_url}?auth={outcome}")


@router.get("/google")
def google_login(
    session: UserSession = Depends(get_session),
    store: SessionStore = Depends(get_session_store),
    auth: GmailAuth = Depends(get_auth),
) -> dict:
    """Return the Google consent URL for this session."""
    try:
        url, state, code_verifier = auth.authorization_url()
    except AuthConfigurationError as e:
        logger.error(f"Cannot start login: {e}")
        raise GatewayError(500, "Failed to start login")

    store.register_login(session, state, code_verifier)
    return {"url": url}


@router.get("/google/callback")
def google_callback(
    request: Request,
    code: Optional[str] = None,
    state: Optional[str] = None,
    settings: Settings = Depends(get_settings),
    store: SessionStore = Depends(get_session_store),
    auth: GmailAuth = Depends(get_auth),
) -> RedirectResponse:
    """Exchange the authorization code and store the token set."""
    if state:
        session = store.pop_pending(state)
    else:
        session = store.get(request.cookies.get(settings.session_cookie_name))

    if session is None:
        logger.error("Auth error: no session is waiting for this callback")
        return _client_redirect(settings, "error")
    if not code:
        logger.error("Auth error: callback carried no authorization code")
        return _client_redirect(settings, "error")

    try:
        credentials = auth.exchange_code(code, session.code_verifier)
    except Exception as e:
        logger.error(f"Auth error: {e}")
        return _client_redirect(settings, "error")

    session.complete_login(credentials)
    logger.info("User signed in")

    response = _client_redirect(settings, "success")
    set_session_cookie(response, session, settings)
    return response


@router.get("/status")
def auth_status(session: Optional[UserSession] = Depends(get_optional_session)) -> dict:
    return {"authenticated": bool(session and session.is_authenticated)}


@router.post("/logout")
def logout(
    response: Response,
    session: Optional[UserSession] = Depends(get_optional_session),
    settings: Settings = Depends(get_settings),
    store: SessionStore = Depends(get_session_store),
) -> dict:
    if session is not None:
        session.clear()
        store.discard(session.session_id)
        logger.info("User signed out")
    response.delete_cookie(settings.session_cookie_name)
    return {"success": True}
