"""
Request-scoped context for operations.

Every operation function receives an :class:`OperationContext` as its
first argument.  The context carries the database connection, the
caller's identity, and the collaborators an operation may need (the
event bus for change notifications and the image store for blobs).
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from lofi_books.core.errors import AuthenticationError
from lofi_books.core.events import Event, EventBus
from lofi_books.core.files import ImageStore
from lofi_books.core.protocols import Connection


@dataclass
class OperationContext:
    """Context passed to every operation function.

    Attributes:
        conn: Database connection satisfying :class:`lofi_books.core.protocols.Connection`.
        request_id: Unique ID for this operation invocation (auto-generated).
        caller: Origin of the request — ``"api"``, ``"cli"`` or ``"sdk"``.
        user: Verified user identifier.
        user_email: Caller's email, when the identity provider supplies one.
        events: Bus that receives ``<kind>.<action>`` change events.
        images: Blob storage for image uploads.
        dry_run: When ``True``, operations that support it only preview.
        metadata: Arbitrary key/value pairs forwarded to logging.
    """

    conn: Connection
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    caller: str = "sdk"
    user: str | None = None
    user_email: str = ""
    events: EventBus | None = None
    images: ImageStore | None = None
    dry_run: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)

    def require_user(self) -> str:
        """The caller's user id; raises when the context is anonymous."""
        if not self.user:
            raise AuthenticationError("Authentication required")
        return self.user

    def publish(self, kind: str, action: str, record_id: str, source: str | None = None) -> None:
        """Emit ``<kind>.<action>`` for a successful mutation."""
        if self.events is None:
            return
        self.events.publish(
            Event(
                event_type=f"{kind}.{action}",
                source=source or f"ops.{kind}",
                payload={"id": record_id, "user_id": self.user},
            )
        )
