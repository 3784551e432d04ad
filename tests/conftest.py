"""
Shared pytest fixtures for lofi-books tests.

- ``conn``: in-memory SQLite with the schema applied
- ``image_store``: blob storage rooted in a temp directory
- ``make_ctx``: builds an ``OperationContext`` for a given user
- ``bus``: a fresh in-memory event bus
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any

import pytest

from lofi_books.core.events.memory import InMemoryEventBus
from lofi_books.core.files import ImageStore
from lofi_books.core.schema import create_tables
from lofi_books.core.sqlite_conn import SqliteConnection
from lofi_books.ops.context import OperationContext


@pytest.fixture
def conn() -> Generator[SqliteConnection, None, None]:
    connection = SqliteConnection(":memory:")
    create_tables(connection)
    yield connection
    connection.close()


@pytest.fixture
def image_store(tmp_path) -> ImageStore:
    return ImageStore(tmp_path / "images")


@pytest.fixture
def bus() -> Generator[InMemoryEventBus, None, None]:
    event_bus = InMemoryEventBus()
    yield event_bus
    event_bus.close()


@pytest.fixture
def make_ctx(conn, image_store, bus) -> Callable[..., OperationContext]:
    def _make(user: str | None = "u1", **kwargs: Any) -> OperationContext:
        kwargs.setdefault("user_email", f"{user}@example.com" if user else "")
        return OperationContext(conn=conn, user=user, events=bus, images=image_store, **kwargs)

    return _make


@pytest.fixture
def ctx(make_ctx) -> OperationContext:
    """Context for user ``u1``."""
    return make_ctx("u1")
