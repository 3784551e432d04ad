"""
Error handling — maps error codes to HTTP statuses and renders the
``{"error": message, "code": CODE}`` body every failure uses.
"""

from __future__ import annotations

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from lofi_books.core.errors import LofiError
from lofi_books.core.logging import get_logger

logger = get_logger(__name__)

# ── Error code → HTTP status mapping ─────────────────────────────────────

ERROR_CODE_TO_STATUS: dict[str, int] = {
    "NOT_FOUND": 404,
    "FILE_MISSING": 404,
    "VALIDATION_FAILED": 400,
    "UNAUTHORIZED": 401,
    "PAYLOAD_TOO_LARGE": 413,
    "BACKUP_FAILED": 502,
    "INTERNAL": 500,
}


def status_for_error_code(code: str) -> int:
    """Resolve an ops error code to HTTP status, defaulting to 500."""
    return ERROR_CODE_TO_STATUS.get(code, 500)


def error_response(code: str, message: str, *, status: int | None = None) -> JSONResponse:
    """Build the JSON error body."""
    return JSONResponse(
        status_code=status or status_for_error_code(code),
        content={"error": message, "code": code},
    )


async def lofi_error_handler(request: Request, exc: LofiError) -> JSONResponse:
    """Errors raised at the transport boundary (request parsing, auth)."""
    return error_response(exc.code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed JSON or missing body → 400 instead of FastAPI's 422."""
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return error_response("VALIDATION_FAILED", f"Invalid request body: {message}")


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions."""
    logger.exception("unhandled_exception", path=request.url.path, error=str(exc))
    detail = str(exc) if request.app.state.settings.debug else "Internal server error"
    return error_response("INTERNAL", detail, status=500)
