"""
Trailing-edge debouncer.

Collapses a burst of :meth:`Debouncer.trigger` calls into one callback
invocation, ``window_s`` seconds after the last trigger::

    debouncer = Debouncer(30.0, notify_backup)
    debouncer.trigger()      # starts the quiet-period timer
    debouncer.trigger()      # restarts it
    ...                      # 30 s of silence → notify_backup() runs once

The callback runs on a daemon timer thread.  Exceptions it raises are
logged and swallowed.
"""

from __future__ import annotations

import threading
from collections.abc import Callable

from lofi_books.core.logging import get_logger

logger = get_logger(__name__)


class Debouncer:
    """Run *callback* once after *window_s* seconds without a new trigger."""

    def __init__(self, window_s: float, callback: Callable[[], None], *, name: str = "debounce"):
        self.window_s = window_s
        self._callback = callback
        self._name = name
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._generation = 0
        self._pending = False

    @property
    def pending(self) -> bool:
        """Whether a callback is scheduled and has not run yet."""
        return self._pending

    def trigger(self) -> None:
        """(Re)start the quiet period."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            self._pending = True
            self._timer = threading.Timer(self.window_s, self._fire, args=(self._generation,))
            self._timer.daemon = True
            self._timer.name = f"{self._name}-timer"
            self._timer.start()

    def flush(self) -> bool:
        """Run a pending callback now.  Returns ``False`` if nothing was pending."""
        if not self._take(None):
            return False
        self._run()
        return True

    def cancel(self) -> bool:
        """Drop a pending callback without running it."""
        return self._take(None)

    def _take(self, generation: int | None) -> bool:
        with self._lock:
            if not self._pending:
                return False
            if generation is not None and generation != self._generation:
                return False
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._pending = False
            return True

    def _fire(self, generation: int) -> None:
        if self._take(generation):
            self._run()

    def _run(self) -> None:
        try:
            self._callback()
        except Exception:
            logger.exception("debounced_callback_failed", debouncer=self._name)


__all__ = ["Debouncer"]
