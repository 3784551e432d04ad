"""
Generic ownership-scoped resource service.

:class:`ScopedResource` implements the operations every book-scoped
kind shares, configured by a :class:`~lofi_books.core.resources.ResourceSpec`:

    get(ctx, id)                      → wire row
    list_for_parent(ctx, parent_id)   → wire rows in sibling order
    create(ctx, parent_id, payload)   → {"id": ...}
    update(ctx, id, payload)          → {"ok": True}
    delete(ctx, id)                   → {"ok": True}
    reorder(ctx, parent_id, request)  → {"ok": True}

Each public method returns an :class:`~lofi_books.ops.result.OperationResult`.
The flow is always ownership check, then projection, then the write.
Subclasses hook into :meth:`ScopedResource._before_insert` and
:meth:`ScopedResource._delete_dependents` for kind-specific rules.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from lofi_books.core.errors import NotFoundError, ValidationError
from lofi_books.core.logging import get_logger
from lofi_books.core.ordering import next_sort_order, next_z_index, reorder
from lofi_books.core.ownership import find_owned, owns_book
from lofi_books.core.projection import project, project_fields, row_to_wire, rows_to_wire
from lofi_books.core.repository import BaseRepository
from lofi_books.core.resources import CHAPTER, Ownership, ResourceSpec
from lofi_books.core.timestamps import new_id, now_iso
from lofi_books.ops.context import OperationContext
from lofi_books.ops.requests import ReorderRequest, require_object
from lofi_books.ops.result import OperationResult, run_operation

logger = get_logger(__name__)


class ScopedResource:
    """CRUD + reorder for one resource kind, scoped to the caller."""

    def __init__(self, spec: ResourceSpec, *, source: str | None = None) -> None:
        self.spec = spec
        self.source = source or f"ops.{spec.kind}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.spec.kind!r})"

    # ------------------------------------------------------------------ #
    # Public operations
    # ------------------------------------------------------------------ #

    def get(self, ctx: OperationContext, record_id: str) -> OperationResult[dict]:
        return run_operation(ctx, f"get_{self.spec.kind}", self._get, ctx, record_id)

    def list_for_parent(self, ctx: OperationContext, parent_id: str) -> OperationResult[list[dict]]:
        return run_operation(ctx, f"list_{self.spec.kind}", self._list, ctx, parent_id)

    def create(self, ctx: OperationContext, parent_id: str | None, payload: Any) -> OperationResult[dict]:
        return run_operation(ctx, f"create_{self.spec.kind}", self._create, ctx, parent_id, payload)

    def update(self, ctx: OperationContext, record_id: str, payload: Any) -> OperationResult[dict]:
        return run_operation(ctx, f"update_{self.spec.kind}", self._update, ctx, record_id, payload)

    def delete(self, ctx: OperationContext, record_id: str) -> OperationResult[dict]:
        return run_operation(ctx, f"delete_{self.spec.kind}", self._delete, ctx, record_id)

    def reorder(self, ctx: OperationContext, parent_id: str, request: ReorderRequest) -> OperationResult[dict]:
        return run_operation(ctx, f"reorder_{self.spec.kind}", self._reorder, ctx, parent_id, request)

    # ------------------------------------------------------------------ #
    # Ownership
    # ------------------------------------------------------------------ #

    def require_owned(self, ctx: OperationContext, record_id: str) -> dict[str, Any]:
        """Storage row for *record_id*, or :class:`NotFoundError`."""
        user_id = ctx.require_user()
        row = find_owned(ctx.conn, self.spec, record_id, user_id)
        if row is None:
            raise NotFoundError(self.spec.not_found_message).with_context(
                resource=self.spec.kind, record_id=record_id, user_id=user_id
            )
        return row

    def require_parent(self, ctx: OperationContext, parent_id: str | None) -> dict[str, Any]:
        """Verify the caller owns the parent; return the columns a child inherits."""
        user_id = ctx.require_user()
        column = self.spec.parent_column
        if column is None:
            return {}
        if column == "book_id":
            if not parent_id or not owns_book(ctx.conn, parent_id, user_id):
                raise NotFoundError("Book not found").with_context(
                    resource="book", record_id=parent_id, user_id=user_id
                )
            return {"book_id": parent_id}
        chapter = find_owned(ctx.conn, CHAPTER, parent_id or "", user_id)
        if chapter is None:
            raise NotFoundError("Chapter not found").with_context(
                resource="chapter", record_id=parent_id, user_id=user_id
            )
        return {"chapter_id": chapter["id"], "book_id": chapter["book_id"]}

    # ------------------------------------------------------------------ #
    # Implementations
    # ------------------------------------------------------------------ #

    def _repo(self, ctx: OperationContext) -> BaseRepository:
        return BaseRepository(ctx.conn)

    def _get(self, ctx: OperationContext, record_id: str) -> dict[str, Any]:
        return row_to_wire(self.spec, self.require_owned(ctx, record_id))

    def _list(self, ctx: OperationContext, parent_id: str) -> list[dict[str, Any]]:
        spec = self.spec
        self.require_parent(ctx, parent_id)
        rows = self._repo(ctx).query(
            f"SELECT * FROM {spec.table} WHERE {spec.parent_column} = ? ORDER BY {spec.order_by}",
            (parent_id,),
        )
        return rows_to_wire(spec, rows)

    def _create(self, ctx: OperationContext, parent_id: str | None, payload: Any) -> dict[str, Any]:
        spec = self.spec
        body = require_object(payload)
        inherited = self.require_parent(ctx, parent_id)

        for wire_name in spec.required:
            if body.get(wire_name) in (None, ""):
                raise ValidationError(f"{wire_name} is required", field=wire_name)

        projection = project_fields(spec.creatable, body)
        if projection.dropped:
            logger.debug("fields_dropped", resource=spec.kind, fields=projection.dropped)

        values: dict[str, Any] = dict(spec.defaults)
        values.update(projection.as_dict())
        values.update(inherited)
        if spec.owner is Ownership.DIRECT:
            values["user_id"] = ctx.require_user()
        if spec.sequence and spec.sequence not in projection.columns:
            values[spec.sequence] = self._next_sequence(ctx, inherited)
        self._before_insert(ctx, values)

        record_id = new_id()
        now = now_iso()
        row = {"id": record_id, **values, "created_at": now}
        if spec.has_updated_at:
            row["updated_at"] = now

        repo = self._repo(ctx)
        repo.insert(spec.table, row)
        repo.commit()

        logger.info("record_created", resource=spec.kind, id=record_id, user_id=ctx.user)
        ctx.publish(spec.kind, "created", record_id, self.source)
        return {"id": record_id}

    def _next_sequence(self, ctx: OperationContext, inherited: Mapping[str, Any]) -> int:
        spec = self.spec
        parent_id = inherited[spec.parent_column]
        if spec.sequence == "z_index":
            return next_z_index(ctx.conn, spec.table, spec.parent_column, parent_id)
        return next_sort_order(ctx.conn, spec.table, spec.parent_column, parent_id)

    def _update(self, ctx: OperationContext, record_id: str, payload: Any) -> dict[str, Any]:
        spec = self.spec
        body = require_object(payload)
        self.require_owned(ctx, record_id)

        projection = project(spec, body)
        if projection.dropped:
            logger.debug("fields_dropped", resource=spec.kind, id=record_id, fields=projection.dropped)

        clause, params = projection.to_set_clause(now_iso())
        repo = self._repo(ctx)
        repo.execute(f"UPDATE {spec.table} SET {clause} WHERE id = ?", (*params, record_id))
        repo.commit()

        ctx.publish(spec.kind, "updated", record_id, self.source)
        return {"ok": True}

    def _delete(self, ctx: OperationContext, record_id: str) -> dict[str, Any]:
        spec = self.spec
        row = self.require_owned(ctx, record_id)

        repo = self._repo(ctx)
        self._delete_dependents(ctx, row)
        repo.execute(f"DELETE FROM {spec.table} WHERE id = ?", (record_id,))
        repo.commit()
        self._after_delete(ctx, row)

        logger.info("record_deleted", resource=spec.kind, id=record_id, user_id=ctx.user)
        ctx.publish(spec.kind, "deleted", record_id, self.source)
        return {"ok": True}

    def _reorder(self, ctx: OperationContext, parent_id: str, request: ReorderRequest) -> dict[str, Any]:
        spec = self.spec
        if spec.sequence != "sort_order":
            raise ValidationError(f"{spec.label} does not support reordering")
        self.require_parent(ctx, parent_id)
        reorder(ctx.conn, spec.table, spec.parent_column, parent_id, request.ordered_ids)
        ctx.publish(spec.kind, "reordered", parent_id, self.source)
        return {"ok": True}

    # ------------------------------------------------------------------ #
    # Hooks
    # ------------------------------------------------------------------ #

    def _before_insert(self, ctx: OperationContext, values: dict[str, Any]) -> None:
        """Adjust or validate a new row before it is written."""

    def _delete_dependents(self, ctx: OperationContext, row: Mapping[str, Any]) -> None:
        """Remove rows that hang off *row*, inside the delete transaction."""

    def _after_delete(self, ctx: OperationContext, row: Mapping[str, Any]) -> None:
        """Clean up outside the database once the delete has committed."""


__all__ = ["ScopedResource"]
