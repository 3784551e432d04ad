"""Change events published by the mutation layer.

Every successful mutation publishes an :class:`Event` whose type is
``<kind>.<action>`` (``chapter.updated``, ``idea.created``,
``book.deleted``, ...).  Consumers such as the backup notifier subscribe
with a pattern.

The bus is owned by the application instance (``app.state.event_bus``)
and handed to operations through their context.  There is no
process-wide default bus.

Usage::

    from lofi_books.core.events import Event
    from lofi_books.core.events.memory import InMemoryEventBus

    bus = InMemoryEventBus()

    def on_change(event: Event) -> None:
        print(event.event_type, event.payload["id"])

    sub_id = bus.subscribe("chapter.*", on_change)
    bus.publish(Event(event_type="chapter.updated", source="ops.chapters",
                      payload={"id": "c1", "user_id": "u1"}))
    bus.unsubscribe(sub_id)

Modules
-------
memory      InMemoryEventBus -- synchronous, single-process
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol, runtime_checkable

from lofi_books.core.timestamps import utc_now

__all__ = [
    "Event",
    "EventBus",
    "EventHandler",
]


# ── Event Model ──────────────────────────────────────────────────────────


@dataclass
class Event:
    """A single change notification.

    Attributes:
        event_type: Dot-separated type (e.g., ``chapter.updated``)
        source: Origin component (e.g., ``ops.chapters``)
        payload: Event-specific data (``id``, ``user_id``)
        timestamp: When the event occurred (UTC)
        event_id: Unique event identifier
    """

    event_type: str
    source: str
    payload: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=utc_now)
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def matches(self, pattern: str) -> bool:
        """Check if event type matches a pattern (supports wildcards).

        Examples:
            - ``idea.*`` matches ``idea.created``, ``idea.moved``
            - ``*`` matches everything
            - ``book.deleted`` matches exactly ``book.deleted``
        """
        if pattern == "*":
            return True
        if pattern.endswith(".*"):
            prefix = pattern[:-2]
            return self.event_type.startswith(prefix + ".")
        return self.event_type == pattern


# ── Type Aliases ─────────────────────────────────────────────────────────

EventHandler = Callable[[Event], None]


# ── EventBus Protocol ────────────────────────────────────────────────────


@runtime_checkable
class EventBus(Protocol):
    """Protocol for event bus implementations.

    Publishing must never raise into the publisher: handler failures are
    the bus's problem, not the mutation's.
    """

    def publish(self, event: Event) -> None:
        """Deliver *event* to every matching subscriber."""
        ...

    def subscribe(self, event_type: str, handler: EventHandler) -> str:
        """Subscribe to a pattern; returns a subscription id."""
        ...

    def unsubscribe(self, subscription_id: str) -> None:
        """Remove a subscription (no-op for unknown ids)."""
        ...

    def close(self) -> None:
        """Drop all subscriptions and stop delivering."""
        ...
