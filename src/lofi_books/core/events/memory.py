"""
In-memory event bus implementation.

Handlers run inline on the publishing thread, one after another.  A
failing handler is logged and skipped; the publisher never sees the
exception.

Tags:
    lofi-books, events, in-memory, single-node
"""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass

from lofi_books.core.events import Event, EventHandler
from lofi_books.core.logging import get_logger

__all__ = ["InMemoryEventBus"]

logger = get_logger("lofi_books.events")


@dataclass
class Subscription:
    """Internal subscription record."""

    id: str
    pattern: str
    handler: EventHandler


class InMemoryEventBus:
    """In-process event bus for single-node deployments.

    Example::

        bus = InMemoryEventBus()
        bus.subscribe("*", lambda event: print(event.event_type))
        bus.publish(Event(event_type="book.created", source="ops.books"))
        # Output: book.created
    """

    def __init__(self) -> None:
        self._subscriptions: dict[str, Subscription] = {}
        self._lock = threading.Lock()
        self._closed = False

    def publish(self, event: Event) -> None:
        """Publish an event to all matching subscribers."""
        if self._closed:
            return

        with self._lock:
            handlers_to_call = [
                (sub.id, sub.handler)
                for sub in self._subscriptions.values()
                if event.matches(sub.pattern)
            ]

        for sub_id, handler in handlers_to_call:
            try:
                handler(event)
            except Exception as e:
                logger.warning(
                    "event_handler_error",
                    subscription_id=sub_id,
                    event_type=event.event_type,
                    error=str(e),
                )

    def subscribe(self, event_type: str, handler: EventHandler) -> str:
        """Subscribe to events matching a pattern.

        Args:
            event_type: Pattern to match (supports ``*`` and ``type.*``)
            handler: Callback for matching events

        Returns:
            Subscription ID
        """
        sub_id = f"sub_{uuid.uuid4().hex[:12]}"
        with self._lock:
            self._subscriptions[sub_id] = Subscription(
                id=sub_id,
                pattern=event_type,
                handler=handler,
            )
        return sub_id

    def unsubscribe(self, subscription_id: str) -> None:
        """Remove a subscription."""
        with self._lock:
            self._subscriptions.pop(subscription_id, None)

    def close(self) -> None:
        """Mark bus as closed and clear subscriptions."""
        self._closed = True
        with self._lock:
            self._subscriptions.clear()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def subscription_count(self) -> int:
        """Number of active subscriptions."""
        return len(self._subscriptions)
