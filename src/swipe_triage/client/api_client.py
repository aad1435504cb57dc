"""Async HTTP client for the triage gateway."""

from dataclasses import dataclass
from typing import Dict, List, Optional

import httpx

from ..core.draft_parser import DraftRecord
from ..utils.config import Settings, settings as default_settings
from ..utils.logger import get_logger

logger = get_logger(__name__)


class ApiError(Exception):
    """Raised when the gateway call fails or reports an error."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass
class DraftList:
    drafts: List[DraftRecord]
    message: Optional[str] = None


class TriageApiClient:
    """Talks to the gateway's REST surface on behalf of one user session.

    The session cookie issued by the gateway is kept in the underlying
    ``httpx`` cookie jar, so one client instance is one signed-in user.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        settings = settings or default_settings
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.api_base_url,
            timeout=timeout if timeout is not None else settings.request_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "TriageApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Dict:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Request to {path} failed: {e}")
            raise ApiError(f"Could not reach gateway: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.is_error:
            message = data.get("error") or f"Gateway returned {response.status_code}"
            raise ApiError(message, status_code=response.status_code)
        return data

    async def auth_status(self) -> bool:
        data = await self._request("GET", "/auth/status")
        return bool(data.get("authenticated"))

    async def login_url(self) -> str:
        data = await self._request("GET", "/auth/google")
        return data["url"]

    async def logout(self) -> None:
        await self._request("POST", "/auth/logout")

    async def fetch_drafts(self) -> DraftList:
        data = await self._request("GET", "/api/drafts")
        drafts = [DraftRecord.from_dict(d) for d in data.get("drafts", [])]
        return DraftList(drafts=drafts, message=data.get("message"))

    async def send_draft(self, draft_id: str) -> str:
        data = await self._request("POST", f"/api/drafts/{draft_id}/send")
        if not data.get("success"):
            raise ApiError(data.get("error") or "Failed to send draft")
        return data.get("message", "")

    async def flag_draft(self, draft_id: str, message_id: str) -> str:
        data = await self._request(
            "POST",
            f"/api/drafts/{draft_id}/flag",
            json={"messageId": message_id},
        )
        if not data.get("success"):
            raise ApiError(data.get("error") or "Failed to flag draft")
        return data.get("message", "")
