"""
API Error Responses
===================
Standardized error bodies for rejected submissions.

Only static texts reach the client; request values are never echoed.
"""

from typing import Optional

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import structlog

logger = structlog.get_logger(__name__)


def _error_body(code: str, message: str, error: str) -> dict:
    return {"error": error, "message": message, "code": code}


def create_user_error(
    internal_code: str,
    message: str,
    status_code: int = 400,
    error: str = "Request rejected",
    log_message: Optional[str] = None,
) -> HTTPException:
    """
    Create an HTTPException with the standard error body.

    Args:
        internal_code: Machine-readable code (e.g. "QUEUE_FULL")
        message: Static, client-safe description
        status_code: HTTP status code
        error: Short error title
        log_message: Technical detail for logs only
    """
    if log_message:
        logger.warning("request_rejected", code=internal_code, detail=log_message)

    return HTTPException(
        status_code=status_code,
        detail=_error_body(internal_code, message, error),
    )


def create_user_error_response(
    internal_code: str,
    message: str,
    status_code: int = 400,
    error: str = "Request rejected",
) -> JSONResponse:
    """Same body as `create_user_error`, for exception handlers."""
    return JSONResponse(
        status_code=status_code,
        content={"detail": _error_body(internal_code, message, error)},
    )


class RelayErrors:
    """Standard error factory methods."""

    @staticmethod
    def message_too_long(log_detail: Optional[str] = None) -> HTTPException:
        """Body does not fit into the max number of segments."""
        return create_user_error(
            "MESSAGE_TOO_LONG",
            "message does not fit into 9 concatenated SMS",
            log_message=log_detail,
        )

    @staticmethod
    def queue_full(log_detail: Optional[str] = None) -> HTTPException:
        """Delivery queue had no room in time."""
        return create_user_error(
            "QUEUE_FULL",
            "too many messages queued, try again later",
            status_code=429,
            error="Too many requests",
            log_message=log_detail,
        )

    @staticmethod
    def shutting_down(log_detail: Optional[str] = None) -> HTTPException:
        """Service no longer accepts messages."""
        return create_user_error(
            "SHUTTING_DOWN",
            "service is shutting down",
            status_code=503,
            error="Service unavailable",
            log_message=log_detail,
        )


def _first_error_text(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "request is not valid"

    first = errors[0]
    if first.get("type") == "json_invalid":
        return "request body is not valid JSON"

    ctx = first.get("ctx") or {}
    if first.get("type") == "value_error" and "error" in ctx:
        return str(ctx["error"])

    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    if field:
        return f"{field}: {first.get('msg', 'invalid value')}"
    return first.get("msg", "request is not valid")


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Answer malformed or invalid submissions with 400 instead of 422."""
    message = _first_error_text(exc)
    logger.info("request_invalid", path=request.url.path, reason=message)
    return create_user_error_response("INVALID_REQUEST", message)
