"""Error responses for the HTTP surface.

Error response format:
{
    "error": {
        "message": "<error_message>",
        "type": "<error_type>"
    }
}
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse, PlainTextResponse

from relay.api.services.streaming import CORS_HEADERS
from relay.core.error_types import ErrorType
from relay.core.errors import GatewayError

logger = logging.getLogger(__name__)


class ErrorResponseBuilder:
    """Centralized builder for consistent error responses across all endpoints."""

    @staticmethod
    def envelope(status_code: int, message: str, error_type: ErrorType) -> JSONResponse:
        return JSONResponse(
            status_code=status_code,
            content={"error": {"message": message, "type": error_type.value}},
        )

    @staticmethod
    def server_error(message: str = "Internal Server Error") -> JSONResponse:
        return ErrorResponseBuilder.envelope(500, message, ErrorType.SERVER_ERROR)

    @staticmethod
    def from_exception(exc: GatewayError) -> JSONResponse:
        return ErrorResponseBuilder.envelope(exc.status_code, exc.public_message, exc.error_type)


async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    """Render GatewayError subclasses raised by route handlers."""
    if exc.status_code >= 500:
        # Public message is generic; keep the detail in the log only.
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return ErrorResponseBuilder.from_exception(exc)


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler for anything a route did not turn into a GatewayError.

    Starlette runs it outside the app middleware stack, so the CORS headers
    are added here.
    """
    logger.exception(f"{request.method} {request.url.path} raised {type(exc).__name__}: {exc}")
    response = ErrorResponseBuilder.server_error()
    response.headers.update(CORS_HEADERS)
    return response


def plain_text(body: str, status_code: int) -> PlainTextResponse:
    """Plain text response used by the legacy /chat endpoint and 404s."""
    return PlainTextResponse(body, status_code=status_code)
