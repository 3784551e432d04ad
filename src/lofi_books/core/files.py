"""
Flat-file image storage.

Blobs live under ``<root>/<bookId>/<imageId>.<ext>``.  The extension is
derived from the declared MIME type, so the path of any image can be
re-derived from its metadata row alone.

    >>> store = ImageStore("/data/images")
    >>> store.write("b1", "i1", "image/png", b"...")
    PosixPath('/data/images/b1/i1.png')
    >>> store.delete("b1", "i1", "image/png")   # tolerant of absence
"""

from __future__ import annotations

import shutil
from pathlib import Path

from lofi_books.core.errors import StorageError
from lofi_books.core.logging import get_logger

logger = get_logger(__name__)

MIME_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/svg+xml": "svg",
}
DEFAULT_EXTENSION = "bin"


def ext_from_mime(mime_type: str | None) -> str:
    """File extension for *mime_type*; unknown types get ``bin``."""
    return MIME_EXTENSIONS.get(mime_type or "", DEFAULT_EXTENSION)


class ImageStore:
    """Stores image blobs keyed by book id, image id and MIME type."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root).expanduser()

    def path_for(self, book_id: str, image_id: str, mime_type: str | None) -> Path:
        return self.root / book_id / f"{image_id}.{ext_from_mime(mime_type)}"

    def write(self, book_id: str, image_id: str, mime_type: str | None, data: bytes) -> Path:
        path = self.path_for(book_id, image_id, mime_type)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            raise StorageError(f"Failed to write image {image_id}", cause=exc) from exc
        logger.debug("image_written", path=str(path), size=len(data))
        return path

    def exists(self, book_id: str, image_id: str, mime_type: str | None) -> bool:
        return self.path_for(book_id, image_id, mime_type).is_file()

    def delete(self, book_id: str, image_id: str, mime_type: str | None) -> bool:
        """Remove one blob.  Returns ``False`` when it was already gone."""
        path = self.path_for(book_id, image_id, mime_type)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise StorageError(f"Failed to delete image {image_id}", cause=exc) from exc
        return True

    def delete_book(self, book_id: str) -> None:
        """Remove a book's whole asset directory, if present."""
        directory = self.root / book_id
        if directory.is_dir():
            shutil.rmtree(directory, ignore_errors=True)


__all__ = ["DEFAULT_EXTENSION", "MIME_EXTENSIONS", "ImageStore", "ext_from_mime"]
