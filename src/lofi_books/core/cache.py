"""
Bounded in-process TTL cache.

Used by the auth layer to remember verified identities per bearer token
so a burst of requests from one client costs one identity-provider call.

    >>> cache = TTLCache(max_size=1000, default_ttl_seconds=300)
    >>> cache.set("token-abc", identity)
    >>> cache.get("token-abc")
    Identity(user_id='u1', email='')

Expiry is lazy (checked on read); eviction is least-recently-used once
``max_size`` keys are held.  A lock makes it safe across the worker
threadpool.
"""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from typing import Any


class TTLCache:
    """Bounded LRU cache with per-key expiry.

    Args:
        max_size: Maximum number of keys before LRU eviction.
        default_ttl_seconds: TTL applied when ``set`` gets none
            (``None`` means no expiry).
        clock: Monotonic time source, injectable for tests.
    """

    def __init__(
        self,
        *,
        max_size: int = 10_000,
        default_ttl_seconds: float | None = 300,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._store: OrderedDict[str, tuple[Any, float | None]] = OrderedDict()
        self._max_size = max_size
        self._default_ttl = default_ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        """Value for *key*, or ``None`` if absent or expired."""
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at is not None and self._clock() >= expires_at:
                del self._store[key]
                return None
            self._store.move_to_end(key)
            return value

    def set(self, key: str, value: Any, *, ttl_seconds: float | None = None) -> None:
        ttl = ttl_seconds if ttl_seconds is not None else self._default_ttl
        expires_at = (self._clock() + ttl) if ttl else None
        with self._lock:
            if key in self._store:
                self._store.move_to_end(key)
            elif len(self._store) >= self._max_size:
                self._store.popitem(last=False)
            self._store[key] = (value, expires_at)

    def delete(self, key: str) -> None:
        with self._lock:
            self._store.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def size(self) -> int:
        """Number of keys held (expired keys included until read)."""
        return len(self._store)


__all__ = ["TTLCache"]
