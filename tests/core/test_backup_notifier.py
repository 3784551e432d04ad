"""Tests for the backup webhook client and debounced notifier."""

from __future__ import annotations

import json

import httpx
import pytest

from lofi_books.core.backup import BackupNotifier, WebhookBackupClient
from lofi_books.core.errors import BackupError
from lofi_books.core.events import Event


class FakeClient:
    def __init__(self, fail: bool = False) -> None:
        self.calls = 0
        self.fail = fail
        self.closed = False

    def notify(self) -> None:
        self.calls += 1
        if self.fail:
            raise BackupError("webhook down")

    def close(self) -> None:
        self.closed = True


def _mutation(event_type: str = "chapter.updated") -> Event:
    return Event(event_type=event_type, source="test", payload={"id": "c1", "user_id": "u1"})


class TestWebhookBackupClient:
    def test_posts_mutation_signal(self):
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(204)

        client = WebhookBackupClient("https://backup.test/hook", transport=httpx.MockTransport(handler))
        client.notify()
        client.close()

        assert len(requests) == 1
        assert requests[0].method == "POST"
        assert json.loads(requests[0].content)["event"] == "mutation"

    def test_http_error_becomes_backup_error(self):
        client = WebhookBackupClient(
            "https://backup.test/hook",
            transport=httpx.MockTransport(lambda request: httpx.Response(500)),
        )
        with pytest.raises(BackupError) as exc_info:
            client.notify()
        assert exc_info.value.code == "BACKUP_FAILED"


class TestBackupNotifier:
    def test_burst_of_events_notifies_once(self, bus):
        client = FakeClient()
        notifier = BackupNotifier(client, debounce_s=60.0)
        notifier.attach(bus)

        for _ in range(3):
            bus.publish(_mutation())
        assert notifier.pending
        assert notifier.flush() is True

        assert client.calls == 1
        assert notifier.status()["lastBackupTime"] is not None
        assert notifier.status()["lastBackupError"] is None

    def test_detach_flushes_and_closes(self, bus):
        client = FakeClient()
        notifier = BackupNotifier(client, debounce_s=60.0)
        notifier.attach(bus)
        bus.publish(_mutation("book.created"))

        notifier.detach()
        assert client.calls == 1
        assert client.closed
        assert bus.subscription_count == 0

    def test_failure_recorded_not_raised(self, bus):
        notifier = BackupNotifier(FakeClient(fail=True), debounce_s=60.0)
        notifier.attach(bus)
        bus.publish(_mutation())
        notifier.flush()

        status = notifier.status()
        assert status["lastBackupError"] == "webhook down"
        assert status["backupInProgress"] is False
        assert status["lastBackupTime"] is None

    def test_disabled_without_client(self, bus):
        notifier = BackupNotifier(None)
        notifier.attach(bus)
        bus.publish(_mutation())
        assert not notifier.pending
        assert notifier.record_mutation() is False
        assert notifier.status()["isConnected"] is False
        notifier.detach()
