"""Fixtures for end-to-end API tests.

Each request opens its own database connection, so the app runs against
a file database in a temp directory.
"""

from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from lofi_books.api.app import create_app
from lofi_books.api.settings import LofiBooksSettings
from tests._support.users import U1


@pytest.fixture
def settings(tmp_path) -> LofiBooksSettings:
    return LofiBooksSettings(
        data_dir=str(tmp_path),
        database_url="sqlite:///lofi-test.db",
        auth_userinfo_url=None,
        backup_webhook_url=None,
        max_upload_bytes=1024,
    )


@pytest.fixture
def client(settings) -> Generator[TestClient, None, None]:
    with TestClient(create_app(settings=settings)) as test_client:
        yield test_client


@pytest.fixture
def book_id(client) -> str:
    resp = client.post("/api/books", json={"title": "Night Train"}, headers=U1)
    assert resp.status_code == 201
    return resp.json()["id"]
