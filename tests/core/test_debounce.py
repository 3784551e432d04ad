"""Tests for the trailing-edge debouncer."""

from __future__ import annotations

import threading
import time

from lofi_books.core.debounce import Debouncer


class TestDebouncer:
    def test_burst_collapses_to_one_call(self):
        calls: list[float] = []
        fired = threading.Event()

        def callback() -> None:
            calls.append(time.monotonic())
            fired.set()

        debouncer = Debouncer(0.05, callback)
        for _ in range(5):
            debouncer.trigger()
        assert debouncer.pending

        assert fired.wait(2.0)
        time.sleep(0.1)
        assert len(calls) == 1
        assert not debouncer.pending

    def test_flush_runs_immediately(self):
        calls: list[int] = []
        debouncer = Debouncer(60.0, lambda: calls.append(1))
        debouncer.trigger()
        assert debouncer.flush() is True
        assert calls == [1]
        assert debouncer.flush() is False

    def test_cancel_drops_pending(self):
        calls: list[int] = []
        debouncer = Debouncer(0.05, lambda: calls.append(1))
        debouncer.trigger()
        assert debouncer.cancel() is True
        time.sleep(0.15)
        assert calls == []
        assert debouncer.cancel() is False

    def test_callback_errors_swallowed(self):
        def broken() -> None:
            raise RuntimeError("boom")

        debouncer = Debouncer(60.0, broken)
        debouncer.trigger()
        assert debouncer.flush() is True
        assert not debouncer.pending
