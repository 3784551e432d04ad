"""Open the lofi-books relational store from a URL or path.

    conn, info = create_connection()                              # in-memory
    conn, info = create_connection("sqlite:///lofi-books.db", data_dir="./data")
    conn, info = create_connection("/srv/books.db", init_schema=True)

Accepted forms:

- ``None``, ``""``, ``"memory"``, ``":memory:"`` or ``"sqlite://"``: in-memory SQLite.
- ``sqlite:///<path>``: SQLite file.
- a bare path: SQLite file.

Relative file paths are placed inside ``data_dir`` when one is given.
Anything with another ``scheme://`` is rejected.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from lofi_books.core.logging import get_logger
from lofi_books.core.sqlite_conn import SqliteConnection

logger = get_logger(__name__)

_MEMORY_ALIASES = {"", "memory", ":memory:"}


@dataclass(frozen=True)
class ConnectionInfo:
    """Where a connection points.

    ``resolved_path`` is ``None`` for in-memory databases.
    """

    backend: str
    url: str
    resolved_path: str | None = None

    @property
    def persistent(self) -> bool:
        return self.resolved_path is not None


def _sqlite_target(db: str | None) -> str | None:
    """File path named by *db*, or ``None`` for an in-memory database."""
    if db is None or db in _MEMORY_ALIASES:
        return None
    for prefix in ("sqlite:///", "sqlite://"):
        if db.startswith(prefix):
            path = db[len(prefix):]
            return None if path in _MEMORY_ALIASES else path
    if "://" in db:
        raise ValueError(f"Unsupported database URL: {db!r} (only SQLite is supported)")
    return db


def create_connection(
    db: str | None = None,
    *,
    init_schema: bool = False,
    data_dir: str | None = None,
) -> tuple[SqliteConnection, ConnectionInfo]:
    """Return ``(conn, info)`` for *db*.

    With ``init_schema=True`` the lofi-books tables are created if missing.

    Raises:
        ValueError: *db* uses a non-SQLite scheme.
    """
    target = _sqlite_target(db)

    if target is None:
        conn = SqliteConnection(":memory:")
        info = ConnectionInfo(backend="sqlite", url=":memory:")
    else:
        path = Path(target).expanduser()
        if data_dir and not path.is_absolute():
            path = Path(data_dir).expanduser() / path
        path.parent.mkdir(parents=True, exist_ok=True)
        resolved = str(path.resolve())
        conn = SqliteConnection(resolved)
        info = ConnectionInfo(backend="sqlite", url=db or "", resolved_path=resolved)

    if init_schema:
        from lofi_books.core.schema import create_tables

        created = create_tables(conn)
        logger.debug("schema_applied", tables=len(created), path=info.resolved_path)

    return conn, info


__all__ = ["ConnectionInfo", "create_connection"]
