"""Tests for sort_order / z_index bookkeeping."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from lofi_books.core.connection import create_connection
from lofi_books.core.errors import ReorderError
from lofi_books.core.ordering import bring_to_front, next_sort_order, next_z_index, reorder
from lofi_books.core.repository import BaseRepository


def _book(conn, book_id="b1", user_id="u1"):
    BaseRepository(conn).insert(
        "books",
        {"id": book_id, "user_id": user_id, "title": book_id, "created_at": "t", "updated_at": "t"},
    )


def _chapter(conn, chapter_id, sort_order, book_id="b1"):
    BaseRepository(conn).insert(
        "chapters",
        {"id": chapter_id, "book_id": book_id, "sort_order": sort_order, "created_at": "t", "updated_at": "t"},
    )


def _idea(conn, idea_id, z_index, book_id="b1"):
    BaseRepository(conn).insert(
        "ideas",
        {"id": idea_id, "book_id": book_id, "z_index": z_index, "created_at": "t", "updated_at": "t"},
    )


def _order(conn, book_id="b1"):
    rows = BaseRepository(conn).query(
        "SELECT id, sort_order FROM chapters WHERE book_id = ? ORDER BY sort_order", (book_id,)
    )
    return [(r["id"], r["sort_order"]) for r in rows]


class TestNextValues:
    def test_first_child_is_zero(self, conn):
        _book(conn)
        assert next_sort_order(conn, "chapters", "book_id", "b1") == 0

    def test_appends_after_max(self, conn):
        _book(conn)
        _chapter(conn, "c1", 0)
        _chapter(conn, "c2", 4)
        assert next_sort_order(conn, "chapters", "book_id", "b1") == 5

    def test_first_idea_gets_one(self, conn):
        _book(conn)
        assert next_z_index(conn, "ideas", "book_id", "b1") == 1

    def test_z_index_scoped_to_book(self, conn):
        _book(conn, "b1")
        _book(conn, "b2")
        _idea(conn, "i1", 9, book_id="b2")
        assert next_z_index(conn, "ideas", "book_id", "b1") == 1


class TestReorder:
    def test_positions_follow_list(self, conn):
        _book(conn)
        for i, cid in enumerate(["a", "b", "c"]):
            _chapter(conn, cid, i)
        assert reorder(conn, "chapters", "book_id", "b1", ["c", "a", "b"]) == 3
        assert _order(conn) == [("c", 0), ("a", 1), ("b", 2)]

    def test_same_list_twice_is_stable(self, conn):
        _book(conn)
        for i, cid in enumerate(["a", "b"]):
            _chapter(conn, cid, i)
        reorder(conn, "chapters", "book_id", "b1", ["b", "a"])
        first = _order(conn)
        reorder(conn, "chapters", "book_id", "b1", ["b", "a"])
        assert _order(conn) == first

    def test_foreign_id_rejected_without_writes(self, conn):
        _book(conn, "b1")
        _book(conn, "b2")
        _chapter(conn, "a", 0)
        _chapter(conn, "b", 1)
        _chapter(conn, "x", 0, book_id="b2")
        with pytest.raises(ReorderError) as exc_info:
            reorder(conn, "chapters", "book_id", "b1", ["b", "x", "a"])
        assert exc_info.value.field == "orderedIds"
        assert _order(conn) == [("a", 0), ("b", 1)]
        assert _order(conn, "b2") == [("x", 0)]

    def test_duplicates_rejected(self, conn):
        _book(conn)
        _chapter(conn, "a", 0)
        with pytest.raises(ReorderError):
            reorder(conn, "chapters", "book_id", "b1", ["a", "a"])

    def test_empty_list_is_noop(self, conn):
        _book(conn)
        assert reorder(conn, "chapters", "book_id", "b1", []) == 0


class TestBringToFront:
    def test_strictly_above_siblings(self, conn):
        _book(conn)
        _idea(conn, "i1", 1)
        _idea(conn, "i2", 5)
        _idea(conn, "i3", 3)
        assert bring_to_front(conn, "ideas", "book_id", "i1") == 6
        assert bring_to_front(conn, "ideas", "book_id", "i3") == 7

    def test_repeated_calls_increase(self, conn):
        _book(conn)
        _idea(conn, "i1", 1)
        first = bring_to_front(conn, "ideas", "book_id", "i1")
        second = bring_to_front(conn, "ideas", "book_id", "i1")
        assert second > first

    def test_other_books_ignored(self, conn):
        _book(conn, "b1")
        _book(conn, "b2")
        _idea(conn, "i1", 1)
        _idea(conn, "far", 100, book_id="b2")
        assert bring_to_front(conn, "ideas", "book_id", "i1") == 2

    def test_missing_item(self, conn):
        assert bring_to_front(conn, "ideas", "book_id", "nope") is None

    def test_concurrent_calls_get_distinct_values(self, tmp_path):
        db = str(tmp_path / "stack.db")
        seed, _info = create_connection(db, init_schema=True)
        _book(seed)
        count = 24
        ids = [f"i{n}" for n in range(count)]
        for n, idea_id in enumerate(ids, start=1):
            _idea(seed, idea_id, n)
        seed.commit()
        seed.close()

        start = threading.Barrier(count)

        def raise_one(idea_id: str) -> int:
            conn, _ = create_connection(db)
            try:
                start.wait(timeout=10)
                return bring_to_front(conn, "ideas", "book_id", idea_id)
            finally:
                conn.close()

        with ThreadPoolExecutor(max_workers=count) as pool:
            results = list(pool.map(raise_one, ids))

        assert sorted(results) == list(range(count + 1, 2 * count + 1))
