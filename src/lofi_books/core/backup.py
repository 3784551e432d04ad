"""
Backup change notifier.

Bridges the event bus to the external backup collaborator::

    mutation ops ──publish──► EventBus ──"*"──► BackupNotifier
                                                   │ trigger()
                                                   ▼
                                              Debouncer (30 s)
                                                   │ fire
                                                   ▼
                                        BackupClient.notify()  (HTTP POST)

A burst of edits produces a single notification after the quiet
period.  Delivery failures are recorded in :meth:`BackupNotifier.status`
and logged; they never reach the request that caused the mutation.
"""

from __future__ import annotations

from typing import Any

import httpx

from lofi_books.core.debounce import Debouncer
from lofi_books.core.errors import BackupError
from lofi_books.core.events import Event, EventBus
from lofi_books.core.logging import get_logger
from lofi_books.core.protocols import BackupClient
from lofi_books.core.timestamps import now_iso

logger = get_logger(__name__)


class WebhookBackupClient:
    """POSTs a payload-free "mutation occurred" signal to a webhook URL."""

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.url = url
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def notify(self) -> None:
        try:
            resp = self._client.post(self.url, json={"event": "mutation", "at": now_iso()})
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise BackupError(f"Backup webhook failed: {exc}", cause=exc) from exc

    def close(self) -> None:
        self._client.close()


class BackupNotifier:
    """Debounced subscriber that pokes the backup collaborator.

    Args:
        client: Backup collaborator, or ``None`` when backups are not
            configured (mutations are then ignored).
        debounce_s: Quiet period before notifying.
    """

    def __init__(self, client: BackupClient | None, *, debounce_s: float = 30.0) -> None:
        self._client = client
        self._debouncer = Debouncer(debounce_s, self._deliver, name="backup")
        self._bus: EventBus | None = None
        self._subscription_id: str | None = None
        self.last_notified_at: str | None = None
        self.last_error: str | None = None
        self.in_progress = False

    @property
    def enabled(self) -> bool:
        return self._client is not None

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    # -- lifecycle -------------------------------------------------------

    def attach(self, bus: EventBus) -> None:
        """Subscribe to every event on *bus*."""
        self._bus = bus
        self._subscription_id = bus.subscribe("*", self._on_event)
        logger.info("backup_notifier_attached", enabled=self.enabled)

    def detach(self) -> None:
        """Unsubscribe and deliver any pending notification."""
        if self._bus is not None and self._subscription_id is not None:
            self._bus.unsubscribe(self._subscription_id)
        self._bus = None
        self._subscription_id = None
        self._debouncer.flush()
        close = getattr(self._client, "close", None)
        if callable(close):
            close()

    # -- signals ---------------------------------------------------------

    def _on_event(self, event: Event) -> None:
        self.record_mutation()

    def record_mutation(self) -> bool:
        """Schedule a notification.  Returns ``False`` when backups are off."""
        if self._client is None:
            return False
        self._debouncer.trigger()
        return True

    def flush(self) -> bool:
        """Deliver a pending notification immediately."""
        return self._debouncer.flush()

    def _deliver(self) -> None:
        if self._client is None:
            return
        self.in_progress = True
        try:
            self._client.notify()
            self.last_notified_at = now_iso()
            self.last_error = None
            logger.info("backup_notified", at=self.last_notified_at)
        except Exception as exc:
            self.last_error = str(exc)
            logger.warning("backup_notify_failed", error=str(exc))
        finally:
            self.in_progress = False

    def status(self) -> dict[str, Any]:
        """Wire-shape status for the ``/backup/status`` endpoint."""
        return {
            "lastBackupTime": self.last_notified_at,
            "lastBackupError": self.last_error,
            "backupInProgress": self.in_progress,
            "isConnected": self.enabled,
            "pending": self.pending,
        }


__all__ = ["BackupNotifier", "WebhookBackupClient"]
