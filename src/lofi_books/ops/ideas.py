"""
Storyboard idea operations.

New ideas land on top of the stack (``z_index`` = max + 1).
:func:`bring_to_front` re-stacks an existing idea atomically.  Deleting
an idea removes every connection that touches it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from lofi_books.core.errors import NotFoundError
from lofi_books.core.ordering import bring_to_front as _bring_to_front
from lofi_books.core.resources import IDEA
from lofi_books.ops.context import OperationContext
from lofi_books.ops.result import operation
from lofi_books.ops.scoped import ScopedResource


class IdeaResource(ScopedResource):
    def _delete_dependents(self, ctx: OperationContext, row: Mapping[str, Any]) -> None:
        ctx.conn.execute(
            "DELETE FROM connections WHERE from_idea_id = ? OR to_idea_id = ?",
            (row["id"], row["id"]),
        )


ideas = IdeaResource(IDEA, source="ops.ideas")

list_ideas = ideas.list_for_parent
create_idea = ideas.create
update_idea = ideas.update
delete_idea = ideas.delete


@operation("bring_idea_to_front")
def bring_to_front(ctx: OperationContext, idea_id: str) -> dict[str, Any]:
    """Put an idea above all its siblings; returns ``{ok, zIndex}``."""
    ideas.require_owned(ctx, idea_id)
    z_index = _bring_to_front(ctx.conn, IDEA.table, IDEA.parent_column, idea_id)
    if z_index is None:
        raise NotFoundError(IDEA.not_found_message)
    ctx.publish("idea", "updated", idea_id, "ops.ideas")
    return {"ok": True, "zIndex": z_index}


__all__ = [
    "bring_to_front",
    "create_idea",
    "delete_idea",
    "ideas",
    "list_ideas",
    "update_idea",
]
