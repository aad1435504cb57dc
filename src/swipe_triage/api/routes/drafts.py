"""Draft listing and action routes."""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..dependencies import get_gmail_manager, require_session
from ..errors import GatewayError
from ...core.gmail_manager import GmailManager
from ...core.session import UserSession
from ...utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/drafts", tags=["drafts"])


class FlagRequest(BaseModel):
    messageId: str
    reviewLabelId: Optional[str] = None


@router.get("")
def list_drafts(manager: GmailManager = Depends(get_gmail_manager)) -> dict:
    """Drafts labeled for review, freshly fetched from Gmail."""
    try:
        drafts, message = manager.list_review_drafts()
    except Exception as e:
        logger.error(f"Error fetching drafts: {e}")
        raise GatewayError(500, "Failed to fetch drafts")

    body = {"drafts": [draft.to_dict() for draft in drafts]}
    if message:
        body["message"] = message
    return body


@router.post("/{draft_id}/send")
def send_draft(draft_id: str, manager: GmailManager = Depends(get_gmail_manager)) -> dict:
    try:
        manager.send_draft(draft_id)
    except Exception as e:
        logger.error(f"Error sending draft {draft_id}: {e}")
        raise GatewayError(500, "Failed to send draft")

    return {"success": True, "message": "Email sent successfully!"}


@router.post("/{draft_id}/flag")
def flag_draft(
    draft_id: str,
    request: FlagRequest,
    session: UserSession = Depends(require_session),
    manager: GmailManager = Depends(get_gmail_manager),
) -> dict:
    try:
        manager.flag_message(
            request.messageId,
            review_label_id=request.reviewLabelId,
            lock=session.lock,
        )
    except Exception as e:
        logger.error(f"Error flagging draft {draft_id}: {e}")
        raise GatewayError(500, "Failed to flag draft")

    return {"success": True, "message": "Draft flagged for your review!"}
