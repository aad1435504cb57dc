"""Triage screen state: auth, queue, card gestures and in-flight actions."""

import asyncio
from typing import Awaitable, Callable, Optional

from .api_client import ApiError, TriageApiClient
from .gesture import CardGesture, Direction, GestureState
from .notifications import ToastCenter, ToastKind
from .review_queue import ReviewQueue
from ..core.draft_parser import DraftRecord
from ..utils.config import Settings, settings as default_settings
from ..utils.logger import get_logger

logger = get_logger(__name__)

SENT_TOAST = "✉️ Email sent!"
FLAGGED_TOAST = "🚩 Flagged for review"
ACTION_FAILED_TOAST = "Action failed. Please try again."
FETCH_FAILED_TOAST = "Failed to fetch drafts"
LOGIN_FAILED_TOAST = "Failed to start login"


class TriageController:
    """Drives one triage session against the gateway.

    At most one send/flag call is outstanding at a time; while it is,
    further swipes and button presses are rejected and the card refuses
    to be dragged.
    """

    def __init__(
        self,
        api: TriageApiClient,
        settings: Optional[Settings] = None,
        toasts: Optional[ToastCenter] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.api = api
        self.settings = settings or default_settings
        self.toasts = toasts or ToastCenter(duration=self.settings.toast_duration)
        self.queue = ReviewQueue()
        self.gesture = self._new_gesture()
        self.authenticated = False
        self.loading = False
        self.action_in_progress = False
        self._sleep = sleep

    def _new_gesture(self) -> CardGesture:
        return CardGesture(threshold=self.settings.swipe_threshold)

    @property
    def current_draft(self) -> Optional[DraftRecord]:
        return self.queue.current

    @property
    def remaining(self) -> int:
        return self.queue.remaining

    async def check_auth(self) -> bool:
        try:
            self.authenticated = await self.api.auth_status()
        except ApiError as e:
            logger.error(f"Auth check failed: {e}")
        return self.authenticated

    async def start_login(self) -> Optional[str]:
        """Consent URL to open, or None when the gateway could not provide one."""
        try:
            return await self.api.login_url()
        except ApiError as e:
            logger.error(f"Login failed: {e}")
            self.toasts.show(LOGIN_FAILED_TOAST, ToastKind.ERROR)
            return None

    async def wait_for_login(self, timeout: float, interval: float = 2.0) -> bool:
        """Poll auth status until the consent flow completes or time runs out."""
        waited = 0.0
        while waited < timeout:
            await self._sleep(interval)
            waited += interval
            if await self.check_auth():
                return True
        return False

    async def logout(self) -> None:
        try:
            await self.api.logout()
        except ApiError as e:
            logger.error(f"Logout failed: {e}")
            return
        self.authenticated = False
        self.queue.clear()
        self.gesture = self._new_gesture()

    async def refresh(self) -> bool:
        """Refetch drafts and start again from the first card.

        Refused while a send/flag is in flight.
        """
        if self.action_in_progress:
            return False

        self.loading = True
        try:
            result = await self.api.fetch_drafts()
        except ApiError as e:
            logger.error(f"Failed to fetch drafts: {e}")
            self.toasts.show(FETCH_FAILED_TOAST, ToastKind.ERROR)
            return False
        finally:
            self.loading = False

        self.queue.reset(result.drafts)
        self.gesture = self._new_gesture()
        if result.message:
            self.toasts.show(result.message, ToastKind.INFO)
        return True

    async def handle_swipe(self, direction: Direction) -> bool:
        """Send (right) or flag (left) the current draft.

        Returns False when the action was rejected or failed.
        """
        draft = self.queue.current
        if self.action_in_progress or draft is None:
            return False

        self.action_in_progress = True
        try:
            try:
                if direction is Direction.RIGHT:
                    await self.api.send_draft(draft.id)
                    self.toasts.show(SENT_TOAST, ToastKind.SUCCESS)
                else:
                    await self.api.flag_draft(draft.id, draft.message_id)
                    self.toasts.show(FLAGGED_TOAST, ToastKind.WARNING)
            except ApiError as e:
                logger.error(f"Action failed: {e}")
                self.toasts.show(ACTION_FAILED_TOAST, ToastKind.ERROR)
                return False

            await self._sleep(self.settings.advance_delay)
            self.queue.advance()
            return True
        finally:
            self.gesture = self._new_gesture()
            self.action_in_progress = False

    async def release_card(self, offset: float) -> GestureState:
        """Run a complete drag of the current card ending at ``offset``.

        A drag that is refused (no card, or an action in flight) leaves the
        gesture idle.
        """
        if self.queue.current is None:
            return self.gesture.state
        if not self.gesture.start_drag(disabled=self.action_in_progress):
            return self.gesture.state

        state = self.gesture.release(offset)
        if state is GestureState.RETURNING:
            self.gesture.settle()
        elif self.gesture.committed is not None:
            await self.handle_swipe(self.gesture.committed)
        return state
