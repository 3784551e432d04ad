"""Tests for image upload, fetch and delete."""

from __future__ import annotations

from lofi_books.core.repository import BaseRepository
from lofi_books.ops import images
from lofi_books.ops.requests import UploadImageRequest


def _upload(ctx, book_id, data=b"\x89PNG", mime="image/png", **kwargs):
    return images.upload_image(ctx, UploadImageRequest(book_id, "cover.png", mime, data), **kwargs)


class TestUpload:
    def test_stores_blob_and_row(self, ctx, conn, image_store, book_id):
        result = _upload(ctx, book_id)
        image_id = result.data["id"]
        assert result.data["url"] == f"/api/images/{image_id}"
        assert (image_store.root / book_id / f"{image_id}.png").read_bytes() == b"\x89PNG"
        row = BaseRepository(conn).query_one("SELECT * FROM images WHERE id = ?", (image_id,))
        assert (row["filename"], row["mime_type"], row["size"]) == ("cover.png", "image/png", 4)

    def test_unknown_mime_gets_bin(self, ctx, image_store, book_id):
        image_id = _upload(ctx, book_id, mime="application/x-thing").data["id"]
        assert (image_store.root / book_id / f"{image_id}.bin").exists()

    def test_too_large(self, ctx, conn, image_store, book_id):
        result = _upload(ctx, book_id, data=b"x" * 11, max_bytes=10)
        assert result.error.code == "PAYLOAD_TOO_LARGE"
        assert BaseRepository(conn).scalar("SELECT COUNT(*) FROM images") == 0
        assert not (image_store.root / book_id).exists()

    def test_foreign_book(self, other_ctx, book_id):
        assert _upload(other_ctx, book_id).error.code == "NOT_FOUND"


class TestFetch:
    def test_get(self, ctx, book_id):
        image_id = _upload(ctx, book_id).data["id"]
        image = images.get_image(ctx, image_id).data
        assert image.mime_type == "image/png"
        assert image.path.read_bytes() == b"\x89PNG"

    def test_missing_row(self, ctx):
        result = images.get_image(ctx, "nope")
        assert (result.error.code, result.error.message) == ("NOT_FOUND", "Image not found")

    def test_missing_file(self, ctx, image_store, book_id):
        image_id = _upload(ctx, book_id).data["id"]
        image_store.path_for(book_id, image_id, "image/png").unlink()
        result = images.get_image(ctx, image_id)
        assert (result.error.code, result.error.message) == ("FILE_MISSING", "Image file not found")

    def test_foreign(self, ctx, other_ctx, book_id):
        image_id = _upload(ctx, book_id).data["id"]
        assert images.get_image(other_ctx, image_id).error.code == "NOT_FOUND"


class TestDelete:
    def test_delete(self, ctx, conn, image_store, book_id):
        image_id = _upload(ctx, book_id).data["id"]
        assert images.delete_image(ctx, image_id).data == {"ok": True}
        assert not image_store.exists(book_id, image_id, "image/png")
        assert images.get_image(ctx, image_id).error.code == "NOT_FOUND"
        assert images.delete_image(ctx, image_id).data == {"ok": True}

    def test_foreign_delete_is_noop(self, ctx, other_ctx, image_store, book_id):
        image_id = _upload(ctx, book_id).data["id"]
        assert images.delete_image(other_ctx, image_id).data == {"ok": True}
        assert image_store.exists(book_id, image_id, "image/png")
        assert images.get_image(ctx, image_id).success
