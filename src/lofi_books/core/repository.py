"""Base repository for parameterized SQL access.

Provides :class:`BaseRepository` — a thin base class over a
:class:`~lofi_books.core.protocols.Connection` so services can express
their queries as plain SQL with ``?`` placeholders and get rows back as
dicts.

Architecture::

    ┌────────────────────────────────────────────────────────────────────┐
    │                       BaseRepository                               │
    │                                                                    │
    │   conn: Connection         ← protocol from lofi_books.core.protocols│
    │                                                                    │
    │   execute(sql, params)     → cursor                                │
    │   execute_many(sql, rows)  → cursor                                │
    │   query(sql, params)       → list[dict]                            │
    │   query_one(sql, params)   → dict | None                           │
    │   scalar(sql, params)      → first column of first row             │
    │   insert(table, data)      → cursor                                │
    │   commit() / rollback()                                            │
    └────────────────────────────────────────────────────────────────────┘

Tags:
    repository, database, sqlite
"""

from __future__ import annotations

from typing import Any

from lofi_books.core.protocols import Connection


def placeholders(count: int) -> str:
    """``placeholders(3)`` → ``"?, ?, ?"``."""
    return ", ".join("?" for _ in range(count))


class BaseRepository:
    """Base class for data-access helpers.

    Parameters:
        conn: Any object satisfying the :class:`Connection` protocol.
    """

    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    # -- Query helpers -----------------------------------------------------

    def execute(self, sql: str, params: tuple = ()) -> Any:
        """Execute a statement and return the raw cursor."""
        return self.conn.execute(sql, params)

    def execute_many(self, sql: str, params: list[tuple]) -> Any:
        """Execute a statement with multiple parameter sets."""
        return self.conn.executemany(sql, params)

    def query(self, sql: str, params: tuple = ()) -> list[dict[str, Any]]:
        """Execute a SELECT and return rows as dicts.

        ``sqlite3.Row`` converts directly; plain tuples are zipped against
        ``cursor.description``.
        """
        cursor = self.conn.execute(sql, params)
        rows = cursor.fetchall()
        if not rows:
            return []

        try:
            return [dict(row) for row in rows]
        except (TypeError, ValueError):
            pass

        columns = [desc[0] for desc in cursor.description]
        return [dict(zip(columns, row, strict=False)) for row in rows]

    def query_one(self, sql: str, params: tuple = ()) -> dict[str, Any] | None:
        """Execute a SELECT and return the first row as a dict (or None)."""
        results = self.query(sql, params)
        return results[0] if results else None

    def scalar(self, sql: str, params: tuple = ()) -> Any:
        """Execute a SELECT and return the first column of the first row."""
        cursor = self.conn.execute(sql, params)
        row = cursor.fetchone()
        if row is None:
            return None
        return row[0]

    # -- Write helpers -----------------------------------------------------

    def insert(self, table: str, data: dict[str, Any]) -> Any:
        """Insert a single row from a dict (column names from the keys)."""
        columns = list(data.keys())
        sql = f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders(len(columns))})"
        return self.conn.execute(sql, tuple(data.values()))

    def commit(self) -> None:
        """Commit the current transaction."""
        self.conn.commit()

    def rollback(self) -> None:
        """Roll back the current transaction."""
        self.conn.rollback()


__all__ = ["BaseRepository", "placeholders"]
