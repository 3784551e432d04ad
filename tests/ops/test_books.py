"""Tests for book operations."""

from __future__ import annotations

from lofi_books.core.repository import BaseRepository
from lofi_books.core.schema import BOOK_CHILD_TABLES
from lofi_books.ops import books, chapters, characters, connections, ideas, illustrations, images, timeline
from lofi_books.ops.requests import UploadImageRequest


class TestCreateAndRead:
    def test_create_defaults(self, ctx, book_id):
        book = books.get_book(ctx, book_id).data
        assert book["title"] == "Night Train"
        assert book["genre"] == "lofi"
        assert book["description"] == ""
        assert book["coverImageId"] is None
        assert book["userId"] == "u1"
        assert book["createdAt"] == book["updatedAt"]
        assert book["createdAt"].endswith("Z")

    def test_title_required(self, ctx):
        result = books.create_book(ctx, {"genre": "x"})
        assert result.error.code == "VALIDATION_FAILED"
        assert result.error.details == {"field": "title"}

    def test_non_object_body(self, ctx):
        result = books.create_book(ctx, ["title"])
        assert result.error.code == "VALIDATION_FAILED"

    def test_owner_cannot_be_spoofed(self, ctx, conn):
        result = books.create_book(ctx, {"title": "T", "userId": "u2", "id": "chosen"})
        row = BaseRepository(conn).query_one("SELECT id, user_id FROM books")
        assert row["user_id"] == "u1"
        assert row["id"] == result.data["id"] != "chosen"

    def test_list_only_mine(self, ctx, other_ctx, book_id, other_book_id):
        mine = books.list_books(ctx).data
        assert [b["id"] for b in mine] == [book_id]
        assert [b["id"] for b in books.list_books(other_ctx).data] == [other_book_id]

    def test_anonymous_context(self, make_ctx):
        result = books.list_books(make_ctx(None))
        assert result.error.code == "UNAUTHORIZED"


class TestOwnership:
    def test_foreign_book_is_not_found(self, other_ctx, book_id):
        for result in (
            books.get_book(other_ctx, book_id),
            books.update_book(other_ctx, book_id, {"title": "mine now"}),
            books.delete_book(other_ctx, book_id),
        ):
            assert result.error.code == "NOT_FOUND"
            assert result.error.message == "Book not found"

    def test_foreign_update_changes_nothing(self, ctx, other_ctx, book_id):
        before = books.get_book(ctx, book_id).data
        books.update_book(other_ctx, book_id, {"title": "mine now"})
        assert books.get_book(ctx, book_id).data == before


class TestUpdate:
    def test_whitelist(self, ctx, book_id):
        result = books.update_book(ctx, book_id, {"title": "New", "userId": "u2", "createdAt": "1999"})
        assert result.data == {"ok": True}
        book = books.get_book(ctx, book_id).data
        assert book["title"] == "New"
        assert book["userId"] == "u1"
        assert book["createdAt"] != "1999"

    def test_empty_update_touches_only_timestamp(self, ctx, book_id):
        before = books.get_book(ctx, book_id).data
        assert books.update_book(ctx, book_id, {}).success
        after = books.get_book(ctx, book_id).data
        assert after["updatedAt"] >= before["updatedAt"]
        assert {k: v for k, v in after.items() if k != "updatedAt"} == {
            k: v for k, v in before.items() if k != "updatedAt"
        }


class TestCascade:
    def test_delete_removes_everything(self, ctx, conn, image_store, book_id):
        chapter_id = chapters.create_chapter(ctx, book_id, {"title": "One"}).data["id"]
        characters.create_character(ctx, book_id, {"name": "Ada"})
        a = ideas.create_idea(ctx, book_id, {"title": "a"}).data["id"]
        b = ideas.create_idea(ctx, book_id, {"title": "b"}).data["id"]
        connections.create_connection(ctx, book_id, {"fromIdeaId": a, "toIdeaId": b})
        illustrations.create_illustration(ctx, book_id, chapter_id, {"caption": "c"})
        timeline.create_timeline_event(ctx, book_id, {"title": "t"})
        images.upload_image(ctx, UploadImageRequest(book_id, "a.png", "image/png", b"png"))

        assert books.delete_book(ctx, book_id).data == {"ok": True}

        repo = BaseRepository(conn)
        for table in ("books", *BOOK_CHILD_TABLES):
            assert repo.scalar(f"SELECT COUNT(*) FROM {table}") == 0, table
        assert not (image_store.root / book_id).exists()

    def test_delete_leaves_other_books(self, ctx, other_ctx, book_id, other_book_id):
        chapters.create_chapter(other_ctx, other_book_id, {"title": "Keep"})
        books.delete_book(ctx, book_id)
        assert len(chapters.list_chapters(other_ctx, other_book_id).data) == 1


class TestClaimOrphaned:
    def _orphan(self, conn, book_id):
        BaseRepository(conn).insert(
            "books",
            {"id": book_id, "user_id": "", "title": "Old", "created_at": "t", "updated_at": "t"},
        )
        conn.commit()

    def test_claims_empty_owner(self, ctx, conn, other_book_id):
        self._orphan(conn, "old-1")
        self._orphan(conn, "old-2")
        assert books.claim_orphaned(ctx).data == {"claimed": 2}
        assert {b["id"] for b in books.list_books(ctx).data} == {"old-1", "old-2"}
        assert books.claim_orphaned(ctx).data == {"claimed": 0}

    def test_dry_run(self, make_ctx, conn):
        self._orphan(conn, "old-1")
        result = books.claim_orphaned(make_ctx("u1", dry_run=True))
        assert result.data == {"claimed": 1, "dryRun": True}
        assert BaseRepository(conn).scalar("SELECT user_id FROM books") == ""


class TestHasData:
    def test_counts_my_books(self, ctx, other_ctx, book_id):
        assert books.has_data(ctx).data == {"hasData": True, "bookCount": 1}
        assert books.has_data(other_ctx).data == {"hasData": False, "bookCount": 0}
