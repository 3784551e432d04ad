"""
Shared wishlist operations.

The wishlist is not book-scoped: every user sees every item.  Editing
and deleting are limited to the item's creator; flipping the status
(``open`` ↔ ``done``) is open to anyone.
"""

from __future__ import annotations

from typing import Any

from lofi_books.core.errors import NotFoundError
from lofi_books.core.logging import get_logger
from lofi_books.core.ownership import find_any
from lofi_books.core.projection import rows_to_wire
from lofi_books.core.repository import BaseRepository
from lofi_books.core.resources import WISHLIST_ITEM
from lofi_books.core.timestamps import now_iso
from lofi_books.ops.context import OperationContext
from lofi_books.ops.result import OperationResult, operation
from lofi_books.ops.scoped import ScopedResource

logger = get_logger(__name__)

STATUS_FLIP = {"open": "done", "done": "open"}


class WishlistResource(ScopedResource):
    def _before_insert(self, ctx: OperationContext, values: dict[str, Any]) -> None:
        values["status"] = "open"
        if not values.get("created_by_name"):
            values["created_by_name"] = ctx.user_email or ""


wishlist = WishlistResource(WISHLIST_ITEM, source="ops.wishlist")

update_wishlist_item = wishlist.update
delete_wishlist_item = wishlist.delete


@operation("list_wishlist")
def list_wishlist(ctx: OperationContext) -> list[dict[str, Any]]:
    """Every wishlist item, newest first, regardless of creator."""
    ctx.require_user()
    rows = BaseRepository(ctx.conn).query(f"SELECT * FROM wishlist_items ORDER BY {WISHLIST_ITEM.order_by}")
    return rows_to_wire(WISHLIST_ITEM, rows)


def create_wishlist_item(ctx: OperationContext, payload: Any) -> OperationResult[dict]:
    """Create an item credited to the caller (``createdByName`` defaults to their email)."""
    return wishlist.create(ctx, None, payload)


@operation("toggle_wishlist_item")
def toggle_status(ctx: OperationContext, item_id: str) -> dict[str, Any]:
    """Flip ``open`` ↔ ``done`` on any item, whoever created it."""
    ctx.require_user()
    row = find_any(ctx.conn, WISHLIST_ITEM, item_id)
    if row is None:
        raise NotFoundError(WISHLIST_ITEM.not_found_message).with_context(
            resource="wishlist_item", record_id=item_id
        )

    new_status = STATUS_FLIP.get(row["status"], "open")
    ctx.conn.execute(
        "UPDATE wishlist_items SET status = ?, updated_at = ? WHERE id = ?",
        (new_status, now_iso(), item_id),
    )
    ctx.conn.commit()

    logger.info("wishlist_toggled", id=item_id, status=new_status, user_id=ctx.user)
    ctx.publish("wishlist_item", "updated", item_id, "ops.wishlist")
    return {"ok": True, "status": new_status}


__all__ = [
    "create_wishlist_item",
    "delete_wishlist_item",
    "list_wishlist",
    "toggle_status",
    "update_wishlist_item",
    "wishlist",
]
