"""Tests for the Typer CLI."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from lofi_books.cli.app import app
from lofi_books.core.repository import BaseRepository
from lofi_books.core.sqlite_conn import SqliteConnection

runner = CliRunner()


@pytest.fixture
def db_path(tmp_path, monkeypatch) -> str:
    monkeypatch.setenv("LOFI_DATA_DIR", str(tmp_path))
    return str(tmp_path / "cli.db")


class TestRootApp:
    def test_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "lofi-books" in result.output

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "lofi-books" in result.output

    @pytest.mark.parametrize(("group", "command"), [("db", "init"), ("serve", "start"), ("books", "claim-orphaned")])
    def test_subcommands_registered(self, group, command):
        result = runner.invoke(app, [group, "--help"])
        assert result.exit_code == 0
        assert command in result.output


class TestDbCommands:
    def test_init_then_tables(self, db_path):
        result = runner.invoke(app, ["db", "init", "--database", db_path, "--json"])
        assert result.exit_code == 0, result.output
        assert "books" in json.loads(result.output)["tablesCreated"]

        result = runner.invoke(app, ["db", "tables", "--database", db_path, "--json"])
        assert result.exit_code == 0, result.output
        counts = {row["table"]: row["count"] for row in json.loads(result.output)}
        assert counts["books"] == 0

    def test_init_dry_run(self, db_path):
        result = runner.invoke(app, ["db", "init", "--database", db_path, "--dry-run"])
        assert result.exit_code == 0
        assert "dryRun" in result.output


class TestBooksCommands:
    def _orphan(self, db_path):
        runner.invoke(app, ["db", "init", "--database", db_path])
        conn = SqliteConnection(db_path)
        BaseRepository(conn).insert(
            "books",
            {"id": "old", "user_id": "", "title": "Old", "created_at": "t", "updated_at": "t"},
        )
        conn.commit()
        conn.close()

    def test_claim_orphaned(self, db_path):
        self._orphan(db_path)
        result = runner.invoke(app, ["books", "claim-orphaned", "--user", "u1", "--database", db_path, "--json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {"claimed": 1}

    def test_claim_dry_run(self, db_path):
        self._orphan(db_path)
        result = runner.invoke(
            app, ["books", "claim-orphaned", "-u", "u1", "-d", db_path, "--dry-run", "--json"]
        )
        assert json.loads(result.output) == {"claimed": 1, "dryRun": True}

    def test_user_required(self, db_path):
        result = runner.invoke(app, ["books", "claim-orphaned", "--database", db_path])
        assert result.exit_code != 0
