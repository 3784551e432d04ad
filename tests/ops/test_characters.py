"""Tests for character operations."""

from __future__ import annotations

from lofi_books.core.repository import BaseRepository
from lofi_books.ops import characters, images
from lofi_books.ops.requests import ReorderRequest, UploadImageRequest


class TestCharacters:
    def test_list_fields_round_trip(self, ctx, book_id):
        cid = characters.create_character(
            ctx, book_id, {"name": "Ada", "personalityTraits": ["curious", "stubborn"]}
        ).data["id"]
        character = characters.get_character(ctx, cid).data
        assert character["personalityTraits"] == ["curious", "stubborn"]
        assert character["relationships"] == []
        assert character["specialAbilities"] == []
        assert character["role"] == "supporting"

    def test_update_lists(self, ctx, book_id):
        cid = characters.create_character(ctx, book_id, {"name": "Ada"}).data["id"]
        characters.update_character(ctx, cid, {"relationships": ["sister of Bea"], "role": "protagonist"})
        character = characters.get_character(ctx, cid).data
        assert character["relationships"] == ["sister of Bea"]
        assert character["role"] == "protagonist"

    def test_reorder(self, ctx, book_id):
        a = characters.create_character(ctx, book_id, {"name": "A"}).data["id"]
        b = characters.create_character(ctx, book_id, {"name": "B"}).data["id"]
        characters.reorder_characters(ctx, book_id, ReorderRequest((b, a)))
        assert [c["id"] for c in characters.list_characters(ctx, book_id).data] == [b, a]

    def test_delete_removes_main_image(self, ctx, conn, image_store, book_id):
        upload = images.upload_image(ctx, UploadImageRequest(book_id, "ada.png", "image/png", b"png")).data
        cid = characters.create_character(ctx, book_id, {"name": "Ada", "mainImageId": upload["id"]}).data["id"]
        path = image_store.path_for(book_id, upload["id"], "image/png")
        assert path.exists()

        assert characters.delete_character(ctx, cid).data == {"ok": True}
        assert not path.exists()
        assert BaseRepository(conn).scalar("SELECT COUNT(*) FROM images") == 0

    def test_delete_with_missing_blob(self, ctx, image_store, book_id):
        upload = images.upload_image(ctx, UploadImageRequest(book_id, "ada.png", "image/png", b"png")).data
        image_store.path_for(book_id, upload["id"], "image/png").unlink()
        cid = characters.create_character(ctx, book_id, {"name": "Ada", "mainImageId": upload["id"]}).data["id"]
        assert characters.delete_character(ctx, cid).success
