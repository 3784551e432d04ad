"""
Book operations.

Books are the root aggregate: ownership is a direct ``user_id`` match.
Deleting a book removes every descendant row in one transaction and
then the book's image blobs.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from lofi_books.core.logging import get_logger
from lofi_books.core.projection import rows_to_wire
from lofi_books.core.resources import BOOK
from lofi_books.core.schema import BOOK_CHILD_TABLES
from lofi_books.core.timestamps import now_iso
from lofi_books.ops.context import OperationContext
from lofi_books.ops.result import OperationResult, operation, run_operation
from lofi_books.ops.scoped import ScopedResource

logger = get_logger(__name__)


class BookResource(ScopedResource):
    """Books: listed per owner, cascading delete."""

    def list_mine(self, ctx: OperationContext) -> OperationResult[list[dict]]:
        return run_operation(ctx, "list_books", self._list_mine, ctx)

    def _list_mine(self, ctx: OperationContext) -> list[dict[str, Any]]:
        rows = self._repo(ctx).query(
            f"SELECT * FROM books WHERE user_id = ? ORDER BY {self.spec.order_by}",
            (ctx.require_user(),),
        )
        return rows_to_wire(self.spec, rows)

    def _delete_dependents(self, ctx: OperationContext, row: Mapping[str, Any]) -> None:
        book_id = row["id"]
        repo = self._repo(ctx)
        for table in BOOK_CHILD_TABLES:
            repo.execute(f"DELETE FROM {table} WHERE book_id = ?", (book_id,))

    def _after_delete(self, ctx: OperationContext, row: Mapping[str, Any]) -> None:
        if ctx.images is not None:
            ctx.images.delete_book(row["id"])


books = BookResource(BOOK, source="ops.books")

list_books = books.list_mine
get_book = books.get
update_book = books.update
delete_book = books.delete


def create_book(ctx: OperationContext, payload: Any) -> OperationResult[dict]:
    """Create a book owned by the caller.  ``title`` is required."""
    return books.create(ctx, None, payload)


@operation("claim_orphaned_books")
def claim_orphaned(ctx: OperationContext) -> dict[str, Any]:
    """Assign every book with an empty owner to the caller.

    Honors ``ctx.dry_run``: reports how many would be claimed without
    writing.
    """
    user_id = ctx.require_user()
    if ctx.dry_run:
        cursor = ctx.conn.execute("SELECT COUNT(*) FROM books WHERE user_id = ''")
        row = cursor.fetchone()
        return {"claimed": row[0] if row else 0, "dryRun": True}

    cursor = ctx.conn.execute(
        "UPDATE books SET user_id = ?, updated_at = ? WHERE user_id = ''",
        (user_id, now_iso()),
    )
    claimed = cursor.rowcount
    ctx.conn.commit()

    logger.info("books_claimed", user_id=user_id, count=claimed)
    if claimed:
        ctx.publish("book", "claimed", user_id, "ops.books")
    return {"claimed": claimed}


@operation("check_has_data")
def has_data(ctx: OperationContext) -> dict[str, Any]:
    """Whether the caller owns any books (first-load restore prompt)."""
    cursor = ctx.conn.execute("SELECT COUNT(*) FROM books WHERE user_id = ?", (ctx.require_user(),))
    row = cursor.fetchone()
    count = row[0] if row else 0
    return {"hasData": count > 0, "bookCount": count}


__all__ = [
    "BookResource",
    "books",
    "claim_orphaned",
    "create_book",
    "delete_book",
    "get_book",
    "has_data",
    "list_books",
    "update_book",
]
