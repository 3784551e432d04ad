"""
Field projector.

Turns a free-form client payload into the column assignments a resource
allows, and turns storage rows back into wire records.

    >>> p = project("chapter", {"title": "x", "secretField": "y"})
    >>> p.assignments
    [('title', 'x')]
    >>> p.dropped
    ['secretField']

Keys are matched in wire form against the resource whitelist.  Lists and
tuples are stored as JSON text, as is every non-null value bound for a
JSON column; other values (``None`` included) pass through untouched.
No type or range checks happen here.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from lofi_books.core.naming import project_row_to_wire
from lofi_books.core.resources import FieldSpec, ResourceSpec, get_resource


@dataclass(frozen=True)
class Projection:
    """Result of :func:`project`.

    Attributes:
        assignments: ``(column, value)`` pairs in payload order.
        dropped: Wire keys that were not on the whitelist.
    """

    assignments: list[tuple[str, Any]] = field(default_factory=list)
    dropped: list[str] = field(default_factory=list)

    @property
    def columns(self) -> list[str]:
        return [column for column, _ in self.assignments]

    def as_dict(self) -> dict[str, Any]:
        return dict(self.assignments)

    def to_set_clause(self, now: str) -> tuple[str, tuple[Any, ...]]:
        """Build ``"col = ?, ..., updated_at = ?"`` plus its parameters.

        ``updated_at`` is always appended, so an empty projection still
        refreshes the timestamp.
        """
        parts = [f"{column} = ?" for column, _ in self.assignments]
        parts.append("updated_at = ?")
        params = tuple(value for _, value in self.assignments) + (now,)
        return ", ".join(parts), params


def _storage_value(value: Any, as_json: bool) -> Any:
    if isinstance(value, (list, tuple)):
        return json.dumps(list(value))
    if as_json and value is not None:
        # scalars too, so "5" reads back as "5" rather than 5
        return json.dumps(value)
    return value


def project_fields(whitelist: Mapping[str, FieldSpec], payload: Mapping[str, Any]) -> Projection:
    """Project *payload* onto an explicit whitelist."""
    assignments: list[tuple[str, Any]] = []
    dropped: list[str] = []
    for key, value in payload.items():
        spec = whitelist.get(key)
        if spec is None:
            dropped.append(key)
            continue
        assignments.append((spec.column, _storage_value(value, spec.json)))
    return Projection(assignments=assignments, dropped=dropped)


def project(kind: str | ResourceSpec, payload: Mapping[str, Any]) -> Projection:
    """Project an update payload onto *kind*'s writable fields."""
    spec = kind if isinstance(kind, ResourceSpec) else get_resource(kind)
    return project_fields(spec.fields, payload)


def _decode_json(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    if not value:
        return []
    try:
        return json.loads(value)
    except ValueError:
        return value


def row_to_wire(kind: str | ResourceSpec, row: Mapping[str, Any]) -> dict[str, Any]:
    """Decode JSON columns and rename keys to wire form."""
    spec = kind if isinstance(kind, ResourceSpec) else get_resource(kind)
    json_columns = spec.json_columns
    if json_columns:
        row = {k: (_decode_json(v) if k in json_columns else v) for k, v in row.items()}
    return project_row_to_wire(row)


def rows_to_wire(kind: str | ResourceSpec, rows: list[Mapping[str, Any]]) -> list[dict[str, Any]]:
    return [row_to_wire(kind, row) for row in rows]


__all__ = ["Projection", "project", "project_fields", "row_to_wire", "rows_to_wire"]
