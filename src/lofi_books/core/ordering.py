"""
Ordering engine: sibling ``sort_order`` and per-book ``z_index``.

Two independent mechanisms:

``sort_order``
    Explicit rank among children of one parent.  New children are
    appended (``MAX + 1``, first child gets ``0``); :func:`reorder`
    rewrites every listed child to its 0-based position in one batch.

``z_index``
    Stacking counter for storyboard ideas.  :func:`bring_to_front`
    assigns ``MAX + 1`` among siblings in a single compound UPDATE so
    the read of the maximum and the write cannot interleave with a
    concurrent call.

Table and column names come from :mod:`lofi_books.core.resources`,
never from client input.
"""

from __future__ import annotations

from collections.abc import Sequence

from lofi_books.core.errors import ReorderError
from lofi_books.core.logging import get_logger
from lofi_books.core.protocols import Connection
from lofi_books.core.repository import BaseRepository, placeholders
from lofi_books.core.timestamps import now_iso

logger = get_logger(__name__)


def next_sort_order(conn: Connection, table: str, parent_column: str, parent_id: str) -> int:
    """Position for a new last child under *parent_id*."""
    value = BaseRepository(conn).scalar(
        f"SELECT COALESCE(MAX(sort_order), -1) + 1 FROM {table} WHERE {parent_column} = ?",
        (parent_id,),
    )
    return int(value or 0)


def next_z_index(conn: Connection, table: str, parent_column: str, parent_id: str) -> int:
    """Stacking value that puts a new item on top of its siblings."""
    value = BaseRepository(conn).scalar(
        f"SELECT COALESCE(MAX(z_index), 0) + 1 FROM {table} WHERE {parent_column} = ?",
        (parent_id,),
    )
    return int(value or 1)


def reorder(
    conn: Connection,
    table: str,
    parent_column: str,
    parent_id: str,
    ordered_ids: Sequence[str],
) -> int:
    """Set each child's ``sort_order`` to its index in *ordered_ids*.

    Every id must be a child of *parent_id* and appear once; otherwise
    :class:`ReorderError` is raised before anything is written.  The
    updates are committed together and rolled back together.

    Returns:
        Number of rows reordered.
    """
    ids = list(ordered_ids)
    if len(set(ids)) != len(ids):
        raise ReorderError("Reorder list contains duplicate ids", field="orderedIds")
    if not ids:
        return 0

    repo = BaseRepository(conn)
    rows = repo.query(
        f"SELECT id FROM {table} WHERE {parent_column} = ? AND id IN ({placeholders(len(ids))})",
        (parent_id, *ids),
    )
    known = {row["id"] for row in rows}
    unknown = [i for i in ids if i not in known]
    if unknown:
        raise ReorderError(
            f"Reorder list contains {len(unknown)} id(s) not under this parent",
            field="orderedIds",
        ).with_context(unknown=unknown)

    now = now_iso()
    try:
        repo.execute_many(
            f"UPDATE {table} SET sort_order = ?, updated_at = ? WHERE id = ?",
            [(position, now, item_id) for position, item_id in enumerate(ids)],
        )
        repo.commit()
    except Exception:
        repo.rollback()
        raise

    logger.debug("reordered", table=table, parent_id=parent_id, count=len(ids))
    return len(ids)


def bring_to_front(conn: Connection, table: str, parent_column: str, item_id: str) -> int | None:
    """Raise *item_id* above every sibling and return its new ``z_index``.

    Returns ``None`` when the item does not exist.
    """
    repo = BaseRepository(conn)
    try:
        cursor = repo.execute(
            f"""
            UPDATE {table}
               SET z_index = (
                       SELECT COALESCE(MAX(s.z_index), 0) + 1
                         FROM {table} s
                        WHERE s.{parent_column} = (
                              SELECT {parent_column} FROM {table} WHERE id = ?
                        )
                   ),
                   updated_at = ?
             WHERE id = ?
            """,
            (item_id, now_iso(), item_id),
        )
        if getattr(cursor, "rowcount", 1) == 0:
            repo.rollback()
            return None
        z_index = repo.scalar(f"SELECT z_index FROM {table} WHERE id = ?", (item_id,))
        repo.commit()
    except Exception:
        repo.rollback()
        raise
    return z_index


__all__ = ["bring_to_front", "next_sort_order", "next_z_index", "reorder"]
