"""
Typed request objects for operations.

Most create/update operations take the client's free-form JSON object
directly (the field projector decides what is writable).  The
dataclasses below cover inputs with a fixed shape.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from lofi_books.core.errors import ValidationError


def require_object(body: Any) -> dict[str, Any]:
    """Reject request bodies that are not JSON objects."""
    if not isinstance(body, Mapping):
        raise ValidationError("Request body must be a JSON object")
    return dict(body)


@dataclass(frozen=True, slots=True)
class ReorderRequest:
    """Full ordered list of sibling ids for a reorder call."""

    ordered_ids: tuple[str, ...] = ()

    @classmethod
    def from_payload(cls, body: Any) -> ReorderRequest:
        payload = require_object(body)
        ids = payload.get("orderedIds")
        if not isinstance(ids, list) or not all(isinstance(i, str) for i in ids):
            raise ValidationError("orderedIds must be a list of ids", field="orderedIds")
        return cls(ordered_ids=tuple(ids))


@dataclass(frozen=True, slots=True)
class UploadImageRequest:
    """Request for :func:`lofi_books.ops.images.upload_image`.

    Attributes:
        book_id: Target book.
        filename: Original client filename (metadata only).
        mime_type: Declared content type; decides the stored extension.
        data: Raw bytes.
    """

    book_id: str
    filename: str
    mime_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)
