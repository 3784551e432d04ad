"""Tests for the authentication middleware."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from lofi_books.api.middleware.auth import AuthMiddleware
from lofi_books.core.errors import AuthenticationError
from lofi_books.core.protocols import Identity


class FakeVerifier:
    def __init__(self) -> None:
        self.tokens: list[str] = []

    async def verify(self, token: str) -> Identity:
        self.tokens.append(token)
        if token != "good":
            raise AuthenticationError("rejected")
        return Identity(user_id="oid-1", email="ada@example.com")


def _app(verifier=None) -> FastAPI:
    app = FastAPI()
    app.add_middleware(AuthMiddleware, verifier=verifier)

    @app.get("/api/whoami")
    def whoami(request: Request) -> dict:
        return {"user": request.state.user_id, "email": request.state.user_email}

    @app.get("/health")
    def health() -> dict:
        return {"status": "healthy"}

    return app


class TestDevelopmentMode:
    def test_user_header(self):
        client = TestClient(_app())
        resp = client.get("/api/whoami", headers={"X-User-Id": "u1", "X-User-Email": "u1@example.com"})
        assert resp.json() == {"user": "u1", "email": "u1@example.com"}

    def test_missing_header(self):
        resp = TestClient(_app()).get("/api/whoami")
        assert resp.status_code == 401
        assert resp.json()["code"] == "UNAUTHORIZED"

    def test_health_bypass(self):
        assert TestClient(_app()).get("/health").status_code == 200


class TestProviderMode:
    def test_valid_token(self):
        verifier = FakeVerifier()
        resp = TestClient(_app(verifier)).get("/api/whoami", headers={"Authorization": "Bearer good"})
        assert resp.json() == {"user": "oid-1", "email": "ada@example.com"}
        assert verifier.tokens == ["good"]

    def test_missing_authorization(self):
        resp = TestClient(_app(FakeVerifier())).get("/api/whoami", headers={"X-User-Id": "u1"})
        assert resp.status_code == 401
        assert resp.json() == {"error": "Missing authorization header", "code": "UNAUTHORIZED"}

    def test_invalid_token(self):
        resp = TestClient(_app(FakeVerifier())).get("/api/whoami", headers={"Authorization": "Bearer bad"})
        assert resp.status_code == 401
        assert resp.json() == {"error": "Invalid token", "code": "UNAUTHORIZED"}

    def test_preflight_not_challenged(self):
        resp = TestClient(_app(FakeVerifier())).options("/api/whoami")
        assert resp.status_code != 401
