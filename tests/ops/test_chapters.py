"""Tests for chapter operations (the generic scoped-resource path)."""

from __future__ import annotations

from lofi_books.ops import chapters, ideas, timeline
from lofi_books.ops.requests import ReorderRequest


def _create(ctx, book_id, *titles):
    return [chapters.create_chapter(ctx, book_id, {"title": t}).data["id"] for t in titles]


class TestCreate:
    def test_defaults_and_append(self, ctx, book_id):
        first, second = _create(ctx, book_id, "One", "Two")
        one = chapters.get_chapter(ctx, first).data
        assert one["bookId"] == book_id
        assert one["status"] == "draft"
        assert one["wordCount"] == 0
        assert one["sortOrder"] == 0
        assert chapters.get_chapter(ctx, second).data["sortOrder"] == 1

    def test_explicit_sort_order_kept(self, ctx, book_id):
        cid = chapters.create_chapter(ctx, book_id, {"title": "x", "sortOrder": 7}).data["id"]
        assert chapters.get_chapter(ctx, cid).data["sortOrder"] == 7

    def test_requires_owned_book(self, other_ctx, book_id):
        result = chapters.create_chapter(other_ctx, book_id, {"title": "intruder"})
        assert result.error.code == "NOT_FOUND"
        assert result.error.message == "Book not found"

    def test_book_id_in_payload_ignored(self, ctx, book_id, other_book_id):
        cid = chapters.create_chapter(ctx, book_id, {"title": "x", "bookId": other_book_id}).data["id"]
        assert chapters.get_chapter(ctx, cid).data["bookId"] == book_id


class TestListAndGet:
    def test_list_in_order(self, ctx, book_id):
        ids = _create(ctx, book_id, "One", "Two", "Three")
        assert [c["id"] for c in chapters.list_chapters(ctx, book_id).data] == ids

    def test_list_foreign_book(self, other_ctx, ctx, book_id):
        _create(ctx, book_id, "One")
        assert chapters.list_chapters(other_ctx, book_id).error.code == "NOT_FOUND"

    def test_get_foreign(self, ctx, other_ctx, book_id):
        (cid,) = _create(ctx, book_id, "One")
        result = chapters.get_chapter(other_ctx, cid)
        assert result.error.code == "NOT_FOUND"
        assert result.error.message == "Chapter not found"


class TestUpdateDelete:
    def test_update(self, ctx, book_id):
        (cid,) = _create(ctx, book_id, "One")
        chapters.update_chapter(ctx, cid, {"content": "It was late.", "wordCount": 3, "bookId": "elsewhere"})
        chapter = chapters.get_chapter(ctx, cid).data
        assert chapter["content"] == "It was late."
        assert chapter["wordCount"] == 3
        assert chapter["bookId"] == book_id

    def test_update_foreign(self, ctx, other_ctx, book_id):
        (cid,) = _create(ctx, book_id, "One")
        assert chapters.update_chapter(other_ctx, cid, {"title": "x"}).error.code == "NOT_FOUND"
        assert chapters.get_chapter(ctx, cid).data["title"] == "One"

    def test_delete(self, ctx, book_id):
        (cid,) = _create(ctx, book_id, "One")
        assert chapters.delete_chapter(ctx, cid).data == {"ok": True}
        assert chapters.get_chapter(ctx, cid).error.code == "NOT_FOUND"
        assert chapters.delete_chapter(ctx, cid).error.code == "NOT_FOUND"

    def test_delete_clears_references(self, ctx, book_id):
        keep, gone = _create(ctx, book_id, "Keep", "Gone")
        timeline.create_timeline_event(ctx, book_id, {"title": "kept", "chapterId": keep})
        timeline.create_timeline_event(ctx, book_id, {"title": "cleared", "chapterId": gone})
        ideas.create_idea(ctx, book_id, {"title": "note", "linkedChapterId": gone})

        assert chapters.delete_chapter(ctx, gone).success

        events = {e["title"]: e["chapterId"] for e in timeline.list_timeline(ctx, book_id).data}
        assert events == {"kept": keep, "cleared": None}
        assert ideas.list_ideas(ctx, book_id).data[0]["linkedChapterId"] is None


class TestReorder:
    def test_reorder(self, ctx, book_id):
        a, b, c = _create(ctx, book_id, "A", "B", "C")
        result = chapters.reorder_chapters(ctx, book_id, ReorderRequest((c, a, b)))
        assert result.data == {"ok": True}
        listed = chapters.list_chapters(ctx, book_id).data
        assert [(ch["id"], ch["sortOrder"]) for ch in listed] == [(c, 0), (a, 1), (b, 2)]

    def test_reorder_with_foreign_id(self, ctx, other_ctx, book_id, other_book_id):
        a, b = _create(ctx, book_id, "A", "B")
        (x,) = _create(other_ctx, other_book_id, "X")
        result = chapters.reorder_chapters(ctx, book_id, ReorderRequest((b, x, a)))
        assert result.error.code == "VALIDATION_FAILED"
        assert [ch["id"] for ch in chapters.list_chapters(ctx, book_id).data] == [a, b]

    def test_reorder_foreign_book(self, ctx, other_ctx, book_id):
        (a,) = _create(ctx, book_id, "A")
        assert chapters.reorder_chapters(other_ctx, book_id, ReorderRequest((a,))).error.code == "NOT_FOUND"


class TestEvents:
    def test_mutations_publish(self, ctx, bus, book_id):
        seen: list[str] = []
        bus.subscribe("chapter.*", lambda e: seen.append(e.event_type))
        (cid,) = _create(ctx, book_id, "One")
        chapters.update_chapter(ctx, cid, {"title": "1"})
        chapters.delete_chapter(ctx, cid)
        assert seen == ["chapter.created", "chapter.updated", "chapter.deleted"]

    def test_rejected_mutation_is_silent(self, other_ctx, bus, book_id):
        seen: list[str] = []
        bus.subscribe("*", lambda e: seen.append(e.event_type))
        chapters.create_chapter(other_ctx, book_id, {"title": "x"})
        assert seen == []
