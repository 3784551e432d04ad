"""
Authentication middleware.

Resolves the caller's identity before any route runs and stores it on
``request.state.user_id`` / ``request.state.user_email``.

Provider mode (a :class:`~lofi_books.core.protocols.TokenVerifier` is
configured): requests need ``Authorization: Bearer <token>``.

Local development (no verifier): the caller names itself with
``X-User-Id``.

Bypass paths (no auth required):
  - ``/health/*``
  - ``/docs``, ``/redoc``, ``/openapi.json``
"""

from __future__ import annotations

import re

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from lofi_books.core.auth import identity_from_headers, parse_bearer
from lofi_books.core.errors import AuthError
from lofi_books.core.logging import bind_context, get_logger, unbind_context
from lofi_books.core.protocols import Identity, TokenVerifier

logger = get_logger(__name__)

# Paths that never require authentication
_BYPASS_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"^/health"),
    re.compile(r"/docs$"),
    re.compile(r"/redoc$"),
    re.compile(r"/openapi\.json$"),
]


def _is_bypass(path: str) -> bool:
    """Return True if *path* should skip authentication."""
    return any(p.search(path) for p in _BYPASS_PATTERNS)


def _unauthorized(message: str) -> JSONResponse:
    return JSONResponse(status_code=401, content={"error": message, "code": "UNAUTHORIZED"})


class AuthMiddleware(BaseHTTPMiddleware):
    """Reject requests without a verifiable identity.

    Parameters
    ----------
    app:
        The ASGI application to wrap.
    verifier:
        Bearer-token verifier.  ``None`` selects local development mode.
    """

    def __init__(self, app: object, verifier: TokenVerifier | None = None) -> None:
        super().__init__(app)  # type: ignore[arg-type]
        self._verifier = verifier

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method == "OPTIONS" or _is_bypass(request.url.path):
            return await call_next(request)

        if self._verifier is None:
            identity = identity_from_headers(request.headers)
            if identity is None:
                return _unauthorized("Missing X-User-Id header")
        else:
            token = parse_bearer(request.headers.get("Authorization"))
            if token is None:
                return _unauthorized("Missing authorization header")
            try:
                identity = await self._verifier.verify(token)
            except AuthError as exc:
                logger.warning("token_rejected", reason=exc.message)
                return _unauthorized("Invalid token")

        return await self._forward(request, call_next, identity)

    async def _forward(self, request: Request, call_next: RequestResponseEndpoint, identity: Identity) -> Response:
        request.state.user_id = identity.user_id
        request.state.user_email = identity.email
        bind_context(user_id=identity.user_id)
        try:
            return await call_next(request)
        finally:
            unbind_context("user_id")
