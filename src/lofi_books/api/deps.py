"""
FastAPI dependency injection — shared singletons and per-request factories.

Usage in routers::

    from lofi_books.api.deps import JsonBody, OpContext

    @router.put("/chapters/{chapter_id}")
    def update_chapter(chapter_id: str, payload: JsonBody, ctx: OpContext):
        ...
"""

from __future__ import annotations

import uuid
from collections.abc import Generator
from functools import lru_cache
from typing import Annotated, Any

from fastapi import Body, Depends, Request

from lofi_books.api.settings import LofiBooksSettings
from lofi_books.core.backup import BackupNotifier
from lofi_books.core.connection import create_connection
from lofi_books.core.files import ImageStore
from lofi_books.ops.context import OperationContext

# ── Settings (singleton) ─────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_settings() -> LofiBooksSettings:
    """Cached settings — loaded once per process."""
    return LofiBooksSettings()


# ── Database connection (per-request) ────────────────────────────────────


def get_connection(
    settings: Annotated[LofiBooksSettings, Depends(get_settings)],
) -> Generator[Any, None, None]:
    """Yield a database connection for the request lifespan."""
    conn, _info = create_connection(settings.database_url, data_dir=settings.data_dir)
    try:
        yield conn
    finally:
        conn.close()


# ── Operation context (per-request) ──────────────────────────────────────


def get_operation_context(
    request: Request,
    conn: Annotated[Any, Depends(get_connection)],
    settings: Annotated[LofiBooksSettings, Depends(get_settings)],
) -> OperationContext:
    """Build an :class:`OperationContext` from the authenticated request."""
    return OperationContext(
        conn=conn,
        request_id=getattr(request.state, "request_id", str(uuid.uuid4())),
        caller="api",
        user=getattr(request.state, "user_id", None),
        user_email=getattr(request.state, "user_email", ""),
        events=getattr(request.app.state, "event_bus", None),
        images=ImageStore(settings.images_dir),
    )


def get_backup_notifier(request: Request) -> BackupNotifier | None:
    return getattr(request.app.state, "backup_notifier", None)


# ── Convenience type aliases ─────────────────────────────────────────────

Settings = Annotated[LofiBooksSettings, Depends(get_settings)]
Conn = Annotated[Any, Depends(get_connection)]
OpContext = Annotated[OperationContext, Depends(get_operation_context)]
Notifier = Annotated[BackupNotifier | None, Depends(get_backup_notifier)]
JsonBody = Annotated[Any, Body()]
