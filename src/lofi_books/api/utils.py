"""
Shared API router utilities.

- ``_handle_error()`` — convert a failed OperationResult to an error response
- ``respond()`` — success payload or error response in one call
"""

from __future__ import annotations

from typing import Any

from fastapi.responses import JSONResponse, Response

from lofi_books.api.middleware.errors import error_response
from lofi_books.ops.result import OperationResult


def _handle_error(result: OperationResult[Any]) -> JSONResponse:
    """Convert a failed ``OperationResult`` into ``{"error", "code"}``."""
    if result.error is None:
        return error_response("INTERNAL", "Operation failed")
    return error_response(result.error.code, result.error.message)


def respond(result: OperationResult[Any], *, status_code: int = 200) -> Response:
    """Render *result*: its data on success, the mapped error otherwise."""
    if not result.success:
        return _handle_error(result)
    return JSONResponse(content=result.data, status_code=status_code)
