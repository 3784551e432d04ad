"""End-to-end tests for the backup endpoints."""

from __future__ import annotations

from tests._support.users import U1, U2


class TestBackupEndpoints:
    def test_status_without_webhook(self, client):
        body = client.get("/api/backup/status", headers=U1).json()
        assert body["isConnected"] is False
        assert body["backupInProgress"] is False

    def test_has_data(self, client, book_id):
        assert client.get("/api/backup/has-data", headers=U1).json() == {"hasData": True, "bookCount": 1}
        assert client.get("/api/backup/has-data", headers=U2).json() == {"hasData": False, "bookCount": 0}

    def test_notify_mutation(self, client):
        resp = client.post("/api/backup/notify-mutation", headers=U1)
        assert resp.status_code == 200
        assert resp.json()["ok"] is True

    def test_mutations_schedule_backup(self, client):
        notifier = client.app.state.backup_notifier
        seen: list[str] = []
        client.app.state.event_bus.subscribe("*", lambda e: seen.append(e.event_type))
        client.post("/api/books", json={"title": "x"}, headers=U1)
        assert seen == ["book.created"]
        # No webhook configured: nothing is queued.
        assert notifier.pending is False
