"""
Identity resolution.

Modes, chosen by configuration:

* **JWKS mode** — the client sends ``Authorization: Bearer <jwt>`` and
  :class:`JwksVerifier` checks it locally: RS256 signature against the
  provider's published keys (cached), ``exp``, and the configured
  ``aud`` / ``iss``.
* **Userinfo mode** — :class:`UserInfoVerifier` exchanges the token at
  the OIDC ``userinfo`` endpoint instead; :class:`CachingVerifier`
  remembers verified tokens for a short TTL.
* **Local development** — no provider configured; the caller names
  itself with ``X-User-Id`` (and optionally ``X-User-Email``).

With a provider, the user id comes from ``oid`` or ``sub`` and the email
from ``preferred_username`` or ``email``.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping, Sequence
from typing import Any

import httpx
import jwt
from jwt import PyJWKClient

from lofi_books.core.cache import TTLCache
from lofi_books.core.errors import AuthenticationError
from lofi_books.core.logging import get_logger
from lofi_books.core.protocols import Identity, TokenVerifier

logger = get_logger(__name__)

USER_ID_HEADER = "x-user-id"
USER_EMAIL_HEADER = "x-user-email"


def identity_from_claims(claims: Mapping[str, Any]) -> Identity:
    """Build an :class:`Identity` from OIDC claims."""
    user_id = claims.get("oid") or claims.get("sub") or ""
    if not user_id:
        raise AuthenticationError("Token has no subject")
    email = claims.get("preferred_username") or claims.get("email") or ""
    return Identity(user_id=str(user_id), email=str(email))


def parse_bearer(header: str | None) -> str | None:
    """Extract the token from an ``Authorization`` header value."""
    if not header:
        return None
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def identity_from_headers(headers: Mapping[str, str]) -> Identity | None:
    """Local-development identity from ``X-User-Id`` / ``X-User-Email``."""
    user_id = headers.get(USER_ID_HEADER)
    if not user_id:
        return None
    return Identity(user_id=user_id, email=headers.get(USER_EMAIL_HEADER, ""))


class JwksVerifier:
    """Verify bearer JWTs locally against the provider's JWKS.

    Signing keys are fetched from *jwks_url* on first use and cached by
    key id for *key_cache_s* seconds; an unknown ``kid`` triggers one
    refetch, which follows provider key rotation.  ``aud`` is checked
    only when *audience* is set, ``iss`` only when *issuer* is set.
    """

    def __init__(
        self,
        jwks_url: str,
        *,
        audience: str | None = None,
        issuer: str | None = None,
        algorithms: Sequence[str] = ("RS256",),
        leeway_s: float = 0.0,
        key_cache_s: int = 600,
        jwks_client: PyJWKClient | None = None,
    ) -> None:
        self.audience = audience
        self.issuer = issuer
        self.algorithms = list(algorithms)
        self.leeway_s = leeway_s
        self._jwks = jwks_client or PyJWKClient(
            jwks_url, cache_keys=True, max_cached_keys=5, lifespan=key_cache_s
        )

    async def verify(self, token: str) -> Identity:
        # key fetches are blocking urllib calls
        return await asyncio.to_thread(self._verify_sync, token)

    def _verify_sync(self, token: str) -> Identity:
        try:
            signing_key = self._jwks.get_signing_key_from_jwt(token)
            claims = jwt.decode(
                token,
                signing_key.key,
                algorithms=self.algorithms,
                audience=self.audience,
                issuer=self.issuer,
                leeway=self.leeway_s,
                options={"require": ["exp"], "verify_aud": self.audience is not None},
            )
        except jwt.PyJWTError as exc:
            raise AuthenticationError(f"JWT verification failed: {exc}", cause=exc) from exc
        return identity_from_claims(claims)


class UserInfoVerifier:
    """Verify bearer tokens against an OIDC userinfo endpoint."""

    def __init__(
        self,
        userinfo_url: str,
        *,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.userinfo_url = userinfo_url
        self._timeout = timeout
        self._transport = transport

    async def verify(self, token: str) -> Identity:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.get(
                    self.userinfo_url,
                    headers={"Authorization": f"Bearer {token}"},
                )
        except httpx.HTTPError as exc:
            raise AuthenticationError("Identity provider unreachable", cause=exc) from exc

        if resp.status_code != 200:
            raise AuthenticationError(f"Identity provider rejected token ({resp.status_code})")
        try:
            claims = resp.json()
        except ValueError as exc:
            raise AuthenticationError("Identity provider returned malformed claims", cause=exc) from exc
        return identity_from_claims(claims)


class CachingVerifier:
    """Wrap a :class:`TokenVerifier`, caching successful verifications."""

    def __init__(self, inner: TokenVerifier, *, ttl_seconds: float = 300, max_size: int = 1024) -> None:
        self._inner = inner
        self._cache = TTLCache(max_size=max_size, default_ttl_seconds=ttl_seconds)

    async def verify(self, token: str) -> Identity:
        cached = self._cache.get(token)
        if cached is not None:
            return cached
        identity = await self._inner.verify(token)
        self._cache.set(token, identity)
        logger.debug("token_verified", user_id=identity.user_id)
        return identity


__all__ = [
    "CachingVerifier",
    "JwksVerifier",
    "UserInfoVerifier",
    "identity_from_claims",
    "identity_from_headers",
    "parse_bearer",
]
