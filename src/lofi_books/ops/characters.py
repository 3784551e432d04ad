"""
Character operations.

Characters carry three list-valued profile fields
(``personalityTraits``, ``relationships``, ``specialAbilities``) stored
as JSON text.  Deleting a character also deletes its main image, blob
included.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from lofi_books.core.repository import BaseRepository
from lofi_books.core.resources import CHARACTER
from lofi_books.ops.context import OperationContext
from lofi_books.ops.images import remove_image_row
from lofi_books.ops.scoped import ScopedResource


class CharacterResource(ScopedResource):
    def _delete_dependents(self, ctx: OperationContext, row: Mapping[str, Any]) -> None:
        image_id = row.get("main_image_id")
        if not image_id:
            return
        image = BaseRepository(ctx.conn).query_one(
            "SELECT * FROM images WHERE id = ? AND book_id = ?",
            (image_id, row["book_id"]),
        )
        if image is not None:
            remove_image_row(ctx, image)


characters = CharacterResource(CHARACTER, source="ops.characters")

get_character = characters.get
list_characters = characters.list_for_parent
create_character = characters.create
update_character = characters.update
delete_character = characters.delete
reorder_characters = characters.reorder

__all__ = [
    "characters",
    "create_character",
    "delete_character",
    "get_character",
    "list_characters",
    "reorder_characters",
    "update_character",
]
