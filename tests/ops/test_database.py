"""Tests for database maintenance operations."""

from __future__ import annotations

from lofi_books.core.schema import TABLES
from lofi_books.core.sqlite_conn import SqliteConnection
from lofi_books.ops.context import OperationContext
from lofi_books.ops.database import get_table_counts, initialize_database


class TestDatabaseOps:
    def test_init_is_idempotent(self):
        ctx = OperationContext(conn=SqliteConnection(":memory:"), caller="cli")
        first = initialize_database(ctx).data
        second = initialize_database(ctx).data
        assert "books" in first["tablesCreated"]
        assert first == second

    def test_dry_run(self):
        ctx = OperationContext(conn=SqliteConnection(":memory:"), caller="cli", dry_run=True)
        assert initialize_database(ctx).data["dryRun"] is True
        assert get_table_counts(ctx).error.code == "INTERNAL"

    def test_counts(self, ctx, book_id):
        counts = {row["table"]: row["count"] for row in get_table_counts(ctx).data}
        assert set(counts) == set(TABLES.values())
        assert counts["books"] == 1
        assert counts["chapters"] == 0
