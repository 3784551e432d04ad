"""
Service settings.

All values can be overridden via environment variables prefixed with
``LOFI_`` (``LOFI_DATABASE_URL``, ``LOFI_AUTH_USERINFO_URL``, ...) or a
``.env`` file in the working directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings


class LofiBooksSettings(BaseSettings):
    """Settings for the lofi-books HTTP service.

    Order of precedence (highest → lowest):
        1. Environment variables (``LOFI_API_PREFIX``, etc.)
        2. ``.env`` file
        3. Defaults below
    """

    # ── Server ───────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=3001, description="Bind port")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Log level")
    log_json: bool = Field(default=False, description="Emit JSON logs instead of console output")

    # ── API ──────────────────────────────────────────────────────────────
    api_prefix: str = Field(default="/api", description="URL prefix for all endpoints")
    api_title: str = Field(default="lofi-books API", description="OpenAPI title")
    api_version: str = Field(default="0.3.0", description="OpenAPI version string")

    # ── Storage ──────────────────────────────────────────────────────────
    database_url: str = Field(
        default="sqlite:///lofi-books.db",
        description="SQLite URL or path (relative paths resolve inside data_dir)",
    )
    data_dir: str = Field(default="./data", description="Directory for the database and image files")
    max_upload_bytes: int = Field(default=10 * 1024 * 1024, description="Image upload size limit")

    # ── CORS ─────────────────────────────────────────────────────────────
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")

    # ── Auth ─────────────────────────────────────────────────────────────
    auth_jwks_url: str | None = Field(
        default=None,
        description="JWKS endpoint; bearer JWTs are verified locally (RS256). Takes precedence over userinfo",
    )
    auth_audience: str | None = Field(default=None, description="Required `aud` claim (the app's client id)")
    auth_issuer: str | None = Field(default=None, description="Required `iss` claim")
    auth_jwks_cache_s: int = Field(default=600, description="How long fetched signing keys are reused")
    auth_userinfo_url: str | None = Field(
        default=None,
        description="OIDC userinfo endpoint; with no JWKS URL either, X-User-Id local development mode is used",
    )
    auth_timeout_s: float = Field(default=5.0, description="Identity provider request timeout")
    auth_cache_ttl_s: float = Field(default=300.0, description="How long a verified token is remembered")

    # ── Backup ───────────────────────────────────────────────────────────
    backup_webhook_url: str | None = Field(default=None, description="URL notified after mutations")
    backup_debounce_s: float = Field(default=30.0, description="Quiet period before notifying backup")
    backup_timeout_s: float = Field(default=10.0, description="Backup webhook request timeout")

    model_config: dict[str, Any] = {
        "env_prefix": "LOFI_",
        "env_file": ".env",
        "extra": "ignore",
    }

    @property
    def images_dir(self) -> Path:
        return Path(self.data_dir).expanduser() / "images"

    @property
    def auth_enabled(self) -> bool:
        return bool(self.auth_jwks_url or self.auth_userinfo_url)
