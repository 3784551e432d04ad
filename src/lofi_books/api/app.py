"""
FastAPI application factory.

``create_app()`` wires middleware, routers, error handlers, the event bus
and the backup notifier into a single ``FastAPI`` instance.  Nothing
else in the codebase touches ``FastAPI`` construction directly.
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from lofi_books.api.deps import get_settings
from lofi_books.api.middleware.auth import AuthMiddleware
from lofi_books.api.middleware.errors import (
    lofi_error_handler,
    request_validation_handler,
    unhandled_exception_handler,
)
from lofi_books.api.middleware.request_id import RequestIDMiddleware
from lofi_books.api.middleware.timing import TimingMiddleware
from lofi_books.api.routers import (
    backup,
    books,
    chapters,
    characters,
    ideas,
    illustrations,
    images,
    timeline,
    wishlist,
)
from lofi_books.api.settings import LofiBooksSettings
from lofi_books.core.auth import CachingVerifier, JwksVerifier, UserInfoVerifier
from lofi_books.core.backup import BackupNotifier, WebhookBackupClient
from lofi_books.core.connection import create_connection
from lofi_books.core.errors import LofiError
from lofi_books.core.events.memory import InMemoryEventBus
from lofi_books.core.health import HealthCheck, create_health_router
from lofi_books.core.logging import configure_logging, get_logger
from lofi_books.core.protocols import TokenVerifier

logger = get_logger("lofi_books.api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan — schema on startup, notifier flush on shutdown."""
    settings: LofiBooksSettings = app.state.settings
    configure_logging(level=settings.log_level, json_format=settings.log_json)
    logger.info("lofi_books_starting", version=app.version, port=settings.port)

    conn, info = create_connection(settings.database_url, init_schema=True, data_dir=settings.data_dir)
    conn.close()
    logger.info("database_initialized", backend=info.backend, path=info.resolved_path)

    notifier: BackupNotifier = app.state.backup_notifier
    notifier.attach(app.state.event_bus)

    yield

    notifier.detach()
    app.state.event_bus.close()
    logger.info("lofi_books_stopped")


def _build_verifier(settings: LofiBooksSettings) -> TokenVerifier | None:
    if settings.auth_jwks_url:
        return JwksVerifier(
            settings.auth_jwks_url,
            audience=settings.auth_audience,
            issuer=settings.auth_issuer,
            key_cache_s=settings.auth_jwks_cache_s,
        )
    if not settings.auth_userinfo_url:
        return None
    return CachingVerifier(
        UserInfoVerifier(settings.auth_userinfo_url, timeout=settings.auth_timeout_s),
        ttl_seconds=settings.auth_cache_ttl_s,
    )


def _build_notifier(settings: LofiBooksSettings) -> BackupNotifier:
    client = None
    if settings.backup_webhook_url:
        client = WebhookBackupClient(settings.backup_webhook_url, timeout=settings.backup_timeout_s)
    return BackupNotifier(client, debounce_s=settings.backup_debounce_s)


def _database_check(settings: LofiBooksSettings) -> HealthCheck:
    async def check_db() -> bool:
        conn, _info = create_connection(settings.database_url, data_dir=settings.data_dir)
        try:
            conn.execute("SELECT 1")
        finally:
            conn.close()
        return True

    return HealthCheck("database", check_db)


def _image_storage_check(settings: LofiBooksSettings) -> HealthCheck:
    async def check_images() -> bool:
        settings.images_dir.mkdir(parents=True, exist_ok=True)
        if not os.access(settings.images_dir, os.W_OK):
            raise PermissionError(f"{settings.images_dir} is not writable")
        return True

    return HealthCheck("image_storage", check_images, required=False)


def create_app(*, settings: LofiBooksSettings | None = None) -> FastAPI:
    """Build and return a fully-configured FastAPI application.

    Parameters
    ----------
    settings : LofiBooksSettings | None
        Override settings (useful for testing).  When ``None`` the cached
        singleton from :func:`get_settings` is used.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        lifespan=lifespan,
        docs_url=f"{settings.api_prefix}/docs",
        redoc_url=f"{settings.api_prefix}/redoc",
        openapi_url=f"{settings.api_prefix}/openapi.json",
    )

    app.state.settings = settings
    app.dependency_overrides[get_settings] = lambda: settings

    # One bus per application; ops publish to it, the notifier listens.
    app.state.event_bus = InMemoryEventBus()
    app.state.backup_notifier = _build_notifier(settings)

    # ── Middleware (last added runs first) ────────────────────────────
    app.add_middleware(TimingMiddleware)
    app.add_middleware(AuthMiddleware, verifier=_build_verifier(settings))
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Exception handlers ───────────────────────────────────────────
    app.add_exception_handler(LofiError, lofi_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # ── Routers ──────────────────────────────────────────────────────
    health_checks = [_database_check(settings), _image_storage_check(settings)]
    app.include_router(create_health_router("lofi-books", version=settings.api_version, checks=health_checks))

    prefix = settings.api_prefix
    for module in (books, chapters, characters, ideas, illustrations, timeline, wishlist, images, backup):
        app.include_router(module.router, prefix=prefix)

    return app
