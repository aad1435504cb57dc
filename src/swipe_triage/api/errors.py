"""Gateway error responses."""

from fastapi import Request
from fastapi.responses import JSONResponse


class GatewayError(Exception):
    """An error reported to the client as ``{"error": message}``.

    The message is a fixed human-readable string; provider details are
    logged, never returned.
    """

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


NOT_AUTHENTICATED = "Not authenticated"


async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})
