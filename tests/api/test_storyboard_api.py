"""End-to-end tests for ideas, connections and illustrations."""

from __future__ import annotations

from tests._support.users import U1, U2


def _idea(client, book_id, title="idea"):
    return client.post(f"/api/books/{book_id}/ideas", json={"title": title}, headers=U1).json()["id"]


class TestIdeas:
    def test_bring_to_front(self, client, book_id):
        a, b, c = (_idea(client, book_id, t) for t in "abc")
        resp = client.put(f"/api/ideas/{a}/bring-to-front", headers=U1)
        assert resp.json() == {"ok": True, "zIndex": 4}

        listed = client.get(f"/api/books/{book_id}/ideas", headers=U1).json()
        assert [i["id"] for i in listed] == [b, c, a]

        again = client.put(f"/api/ideas/{a}/bring-to-front", headers=U1).json()["zIndex"]
        assert again > 4

    def test_bring_to_front_foreign(self, client, book_id):
        a = _idea(client, book_id)
        assert client.put(f"/api/ideas/{a}/bring-to-front", headers=U2).status_code == 404

    def test_update_and_delete(self, client, book_id):
        a = _idea(client, book_id)
        client.put(f"/api/ideas/{a}", json={"positionX": 10, "color": "mint"}, headers=U1)
        (idea,) = client.get(f"/api/books/{book_id}/ideas", headers=U1).json()
        assert (idea["positionX"], idea["color"]) == (10, "mint")
        assert client.delete(f"/api/ideas/{a}", headers=U1).json() == {"ok": True}
        assert client.get(f"/api/books/{book_id}/ideas", headers=U1).json() == []


class TestConnections:
    def test_lifecycle(self, client, book_id):
        a, b = _idea(client, book_id, "a"), _idea(client, book_id, "b")
        resp = client.post(f"/api/books/{book_id}/connections", json={"fromIdeaId": a, "toIdeaId": b}, headers=U1)
        assert resp.status_code == 201
        connection_id = resp.json()["id"]

        client.put(f"/api/connections/{connection_id}", json={"color": "blue"}, headers=U1)
        (connection,) = client.get(f"/api/books/{book_id}/connections", headers=U1).json()
        assert connection["color"] == "blue"

        client.delete(f"/api/ideas/{a}", headers=U1)
        assert client.get(f"/api/books/{book_id}/connections", headers=U1).json() == []

    def test_missing_endpoint(self, client, book_id):
        a = _idea(client, book_id)
        resp = client.post(f"/api/books/{book_id}/connections", json={"fromIdeaId": a}, headers=U1)
        assert resp.status_code == 400


class TestIllustrations:
    def test_lifecycle(self, client, book_id):
        chapter_id = client.post(f"/api/books/{book_id}/chapters", json={}, headers=U1).json()["id"]
        base = f"/api/books/{book_id}/chapters/{chapter_id}/illustrations"

        illustration_id = client.post(base, json={"caption": "dawn"}, headers=U1).json()["id"]
        client.put(f"/api/illustrations/{illustration_id}", json={"caption": "dusk"}, headers=U1)
        (item,) = client.get(base, headers=U1).json()
        assert item["caption"] == "dusk"

        assert client.get(base, headers=U2).status_code == 404
        assert client.delete(f"/api/illustrations/{illustration_id}", headers=U1).json() == {"ok": True}
