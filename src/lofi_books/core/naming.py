"""Naming normalizer — wire (camelCase) ↔ storage (snake_case) keys.

Rows come out of SQLite with ``snake_case`` column names; JSON payloads
travel with ``camelCase`` keys.  These helpers convert between the two,
one key at a time or one flat row at a time.

Only top-level keys are converted.  Values are never touched, so a
``None`` stays ``None`` and nested structures pass through as-is.

Examples:
    >>> to_wire_key("position_x")
    'positionX'
    >>> to_storage_key("linkedChapterId")
    'linked_chapter_id'
    >>> project_row_to_wire({"book_id": "b1", "z_index": None})
    {'bookId': 'b1', 'zIndex': None}

Tags:
    lofi-books, naming, serialization
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

_SNAKE_SEGMENT = re.compile(r"_([a-z])")
_CAMEL_CAPITAL = re.compile(r"[A-Z]")


def to_wire_key(storage_key: str) -> str:
    """Convert a ``snake_case`` column name to its ``camelCase`` wire name."""
    return _SNAKE_SEGMENT.sub(lambda m: m.group(1).upper(), storage_key)


def to_storage_key(wire_key: str) -> str:
    """Convert a ``camelCase`` wire name to its ``snake_case`` column name."""
    return _CAMEL_CAPITAL.sub(lambda m: f"_{m.group(0).lower()}", wire_key)


def project_row_to_wire(row: Mapping[str, Any]) -> dict[str, Any]:
    """Rename every top-level key of *row* to wire form, values unchanged."""
    return {to_wire_key(key): value for key, value in row.items()}


def project_rows_to_wire(rows: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """List form of :func:`project_row_to_wire`."""
    return [project_row_to_wire(row) for row in rows]


__all__ = [
    "project_row_to_wire",
    "project_rows_to_wire",
    "to_storage_key",
    "to_wire_key",
]
