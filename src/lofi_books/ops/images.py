"""
Image operations: upload, fetch, delete.

Metadata rows live in ``images``; blobs live in the
:class:`~lofi_books.core.files.ImageStore` at
``<bookId>/<imageId>.<ext>``.  Fetching distinguishes a missing row
(``NOT_FOUND``) from a row whose blob is gone (``FILE_MISSING``).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from lofi_books.core.errors import (
    ImageFileMissingError,
    NotFoundError,
    PayloadTooLargeError,
    StorageError,
)
from lofi_books.core.files import ImageStore
from lofi_books.core.logging import get_logger
from lofi_books.core.ownership import find_owned, owns_book
from lofi_books.core.repository import BaseRepository
from lofi_books.core.resources import IMAGE
from lofi_books.core.timestamps import new_id, now_iso
from lofi_books.ops.context import OperationContext
from lofi_books.ops.requests import UploadImageRequest
from lofi_books.ops.result import operation

logger = get_logger(__name__)

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024
CACHE_CONTROL = "public, max-age=31536000, immutable"


@dataclass(frozen=True, slots=True)
class ImageFile:
    """A servable image: where the blob is and how to label it."""

    id: str
    path: Path
    mime_type: str
    filename: str
    size: int


def _store(ctx: OperationContext) -> ImageStore:
    if ctx.images is None:
        raise StorageError("Image storage is not configured")
    return ctx.images


def remove_image_row(ctx: OperationContext, row: dict[str, Any]) -> None:
    """Delete an image's blob (tolerating absence) and then its row.

    Does not commit.
    """
    if ctx.images is not None:
        ctx.images.delete(row["book_id"], row["id"], row["mime_type"])
    ctx.conn.execute("DELETE FROM images WHERE id = ?", (row["id"],))


@operation("upload_image")
def upload_image(
    ctx: OperationContext,
    request: UploadImageRequest,
    *,
    max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
    url_prefix: str = "/api/images",
) -> dict[str, Any]:
    """Store an uploaded image under an owned book; returns ``{id, url}``."""
    user_id = ctx.require_user()
    if not owns_book(ctx.conn, request.book_id, user_id):
        raise NotFoundError("Book not found").with_context(
            resource="book", record_id=request.book_id, user_id=user_id
        )
    if request.size > max_bytes:
        raise PayloadTooLargeError(
            f"Image exceeds the {max_bytes // (1024 * 1024)} MB upload limit",
            field="image",
        ).with_context(size=request.size, limit=max_bytes)

    store = _store(ctx)
    image_id = new_id()
    store.write(request.book_id, image_id, request.mime_type, request.data)

    repo = BaseRepository(ctx.conn)
    try:
        repo.insert(
            "images",
            {
                "id": image_id,
                "book_id": request.book_id,
                "filename": request.filename,
                "mime_type": request.mime_type,
                "size": request.size,
                "created_at": now_iso(),
            },
        )
        repo.commit()
    except Exception:
        store.delete(request.book_id, image_id, request.mime_type)
        raise

    logger.info("image_uploaded", id=image_id, book_id=request.book_id, size=request.size)
    ctx.publish("image", "created", image_id, "ops.images")
    return {"id": image_id, "url": f"{url_prefix.rstrip('/')}/{image_id}"}


@operation("get_image")
def get_image(ctx: OperationContext, image_id: str) -> ImageFile:
    """Resolve an owned image to its blob on disk."""
    row = find_owned(ctx.conn, IMAGE, image_id, ctx.require_user())
    if row is None:
        raise NotFoundError("Image not found").with_context(resource="image", record_id=image_id)

    store = _store(ctx)
    path = store.path_for(row["book_id"], row["id"], row["mime_type"])
    if not path.is_file():
        raise ImageFileMissingError("Image file not found").with_context(
            resource="image", record_id=image_id, path=str(path)
        )
    return ImageFile(
        id=row["id"],
        path=path,
        mime_type=row["mime_type"],
        filename=row["filename"],
        size=row["size"],
    )


@operation("delete_image")
def delete_image(ctx: OperationContext, image_id: str) -> dict[str, Any]:
    """Delete an owned image.  Reports success even when nothing matched."""
    row = find_owned(ctx.conn, IMAGE, image_id, ctx.require_user())
    if row is None:
        return {"ok": True}

    remove_image_row(ctx, row)
    ctx.conn.commit()
    ctx.publish("image", "deleted", image_id, "ops.images")
    return {"ok": True}


__all__ = [
    "CACHE_CONTROL",
    "DEFAULT_MAX_UPLOAD_BYTES",
    "ImageFile",
    "delete_image",
    "get_image",
    "remove_image_row",
    "upload_image",
]
