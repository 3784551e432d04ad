"""Fixtures for operation tests: seeded books for two users."""

from __future__ import annotations

import pytest

from lofi_books.ops import books


@pytest.fixture
def other_ctx(make_ctx):
    """Context for user ``u2``."""
    return make_ctx("u2")


@pytest.fixture
def book_id(ctx) -> str:
    result = books.create_book(ctx, {"title": "Night Train", "genre": "lofi"})
    assert result.success, result.error
    return result.data["id"]


@pytest.fixture
def other_book_id(other_ctx) -> str:
    result = books.create_book(other_ctx, {"title": "Someone Else's"})
    assert result.success, result.error
    return result.data["id"]
