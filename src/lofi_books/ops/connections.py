"""
Idea connection operations.

A connection is an edge between two ideas of the same book; only its
colour is editable after creation.
"""

from __future__ import annotations

from typing import Any

from lofi_books.core.errors import ValidationError
from lofi_books.core.repository import BaseRepository
from lofi_books.core.resources import CONNECTION
from lofi_books.ops.context import OperationContext
from lofi_books.ops.scoped import ScopedResource


class ConnectionResource(ScopedResource):
    def _before_insert(self, ctx: OperationContext, values: dict[str, Any]) -> None:
        endpoints = (values["from_idea_id"], values["to_idea_id"])
        rows = BaseRepository(ctx.conn).query(
            "SELECT id FROM ideas WHERE book_id = ? AND id IN (?, ?)",
            (values["book_id"], *endpoints),
        )
        found = {row["id"] for row in rows}
        missing = [idea_id for idea_id in endpoints if idea_id not in found]
        if missing:
            raise ValidationError(
                "Both ideas must belong to the same book",
                field="fromIdeaId" if missing[0] == endpoints[0] else "toIdeaId",
            )


connections = ConnectionResource(CONNECTION, source="ops.connections")

list_connections = connections.list_for_parent
create_connection = connections.create
update_connection = connections.update
delete_connection = connections.delete

__all__ = [
    "connections",
    "create_connection",
    "delete_connection",
    "list_connections",
    "update_connection",
]
