"""
Ownership resolver.

Every read or mutation of a book-scoped record first walks the record's
ownership chain up to its book and compares the book's ``user_id`` with
the caller.  Each lookup is a single SELECT:

    book / wishlist_item   WHERE t.id = ? AND t.user_id = ?
    chapter, idea, ...     JOIN books ON books.id = t.book_id
    illustration           JOIN chapters ... JOIN books ...

A record that does not exist and a record owned by somebody else both
resolve to ``None``.  Callers turn that into ``NotFoundError`` without
distinguishing the two.
"""

from __future__ import annotations

from typing import Any

from lofi_books.core.protocols import Connection
from lofi_books.core.repository import BaseRepository
from lofi_books.core.resources import Ownership, ResourceSpec, get_resource


def _owned_query(spec: ResourceSpec) -> str:
    t = spec.table
    if spec.owner is Ownership.DIRECT:
        return f"SELECT t.* FROM {t} t WHERE t.id = ? AND t.user_id = ?"
    if spec.owner is Ownership.BOOK:
        return (
            f"SELECT t.* FROM {t} t "
            "JOIN books b ON b.id = t.book_id "
            "WHERE t.id = ? AND b.user_id = ?"
        )
    return (
        f"SELECT t.* FROM {t} t "
        "JOIN chapters c ON c.id = t.chapter_id "
        "JOIN books b ON b.id = c.book_id "
        "WHERE t.id = ? AND b.user_id = ?"
    )


def find_owned(
    conn: Connection,
    kind: str | ResourceSpec,
    record_id: str,
    user_id: str,
) -> dict[str, Any] | None:
    """Return the storage row for *record_id* if *user_id* owns it, else ``None``."""
    spec = kind if isinstance(kind, ResourceSpec) else get_resource(kind)
    return BaseRepository(conn).query_one(_owned_query(spec), (record_id, user_id))


def find_any(conn: Connection, kind: str | ResourceSpec, record_id: str) -> dict[str, Any] | None:
    """Unscoped lookup by id.  Only the shared wishlist toggle uses this."""
    spec = kind if isinstance(kind, ResourceSpec) else get_resource(kind)
    return BaseRepository(conn).query_one(f"SELECT * FROM {spec.table} WHERE id = ?", (record_id,))


def owns_book(conn: Connection, book_id: str, user_id: str) -> bool:
    """Whether *user_id* owns *book_id* (used by create, list and reorder)."""
    row = BaseRepository(conn).scalar(
        "SELECT 1 FROM books WHERE id = ? AND user_id = ?",
        (book_id, user_id),
    )
    return row is not None


__all__ = ["find_any", "find_owned", "owns_book"]
