"""
Database operations.

Thin wrappers around :mod:`lofi_books.core.schema` for the ``db`` CLI
commands.
"""

from __future__ import annotations

from typing import Any

from lofi_books.core.schema import DDL, create_tables, table_counts
from lofi_books.ops.context import OperationContext
from lofi_books.ops.result import operation


@operation("initialize_database")
def initialize_database(ctx: OperationContext) -> dict[str, Any]:
    """Create all tables and indexes (idempotent)."""
    if ctx.dry_run:
        return {"tablesCreated": list(DDL), "dryRun": True}
    return {"tablesCreated": create_tables(ctx.conn), "dryRun": False}


@operation("get_table_counts")
def get_table_counts(ctx: OperationContext) -> list[dict[str, Any]]:
    return [{"table": table, "count": count} for table, count in table_counts(ctx.conn).items()]


__all__ = ["get_table_counts", "initialize_database"]
