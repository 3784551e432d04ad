"""Chapter illustration operations.  Ownership runs chapter → book → user."""

from __future__ import annotations

from typing import Any

from lofi_books.core.errors import NotFoundError
from lofi_books.core.resources import ILLUSTRATION
from lofi_books.ops.context import OperationContext
from lofi_books.ops.result import OperationResult, run_operation
from lofi_books.ops.scoped import ScopedResource


class IllustrationResource(ScopedResource):
    def require_chapter_in_book(self, ctx: OperationContext, book_id: str, chapter_id: str) -> None:
        inherited = self.require_parent(ctx, chapter_id)
        if inherited["book_id"] != book_id:
            raise NotFoundError("Chapter not found").with_context(
                resource="chapter", record_id=chapter_id
            )

    def list_for_chapter(
        self, ctx: OperationContext, book_id: str, chapter_id: str
    ) -> OperationResult[list[dict]]:
        def _run() -> list[dict[str, Any]]:
            self.require_chapter_in_book(ctx, book_id, chapter_id)
            return self._list(ctx, chapter_id)

        return run_operation(ctx, "list_illustration", _run)

    def create_for_chapter(
        self, ctx: OperationContext, book_id: str, chapter_id: str, payload: Any
    ) -> OperationResult[dict]:
        def _run() -> dict[str, Any]:
            self.require_chapter_in_book(ctx, book_id, chapter_id)
            return self._create(ctx, chapter_id, payload)

        return run_operation(ctx, "create_illustration", _run)


illustrations = IllustrationResource(ILLUSTRATION, source="ops.illustrations")

list_illustrations = illustrations.list_for_chapter
create_illustration = illustrations.create_for_chapter
update_illustration = illustrations.update
delete_illustration = illustrations.delete

__all__ = [
    "create_illustration",
    "delete_illustration",
    "illustrations",
    "list_illustrations",
    "update_illustration",
]
