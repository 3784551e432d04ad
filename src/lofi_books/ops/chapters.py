"""Chapter operations.

Deleting a chapter removes its illustrations and clears references to it
from timeline events and storyboard ideas.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from lofi_books.core.resources import CHAPTER
from lofi_books.ops.context import OperationContext
from lofi_books.ops.scoped import ScopedResource


class ChapterResource(ScopedResource):
    def _delete_dependents(self, ctx: OperationContext, row: Mapping[str, Any]) -> None:
        ctx.conn.execute("DELETE FROM chapter_illustrations WHERE chapter_id = ?", (row["id"],))
        ctx.conn.execute("UPDATE timeline_events SET chapter_id = NULL WHERE chapter_id = ?", (row["id"],))
        ctx.conn.execute("UPDATE ideas SET linked_chapter_id = NULL WHERE linked_chapter_id = ?", (row["id"],))


chapters = ChapterResource(CHAPTER, source="ops.chapters")

get_chapter = chapters.get
list_chapters = chapters.list_for_parent
create_chapter = chapters.create
update_chapter = chapters.update
delete_chapter = chapters.delete
reorder_chapters = chapters.reorder

__all__ = [
    "chapters",
    "create_chapter",
    "delete_chapter",
    "get_chapter",
    "list_chapters",
    "reorder_chapters",
    "update_chapter",
]
