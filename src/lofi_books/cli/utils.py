"""
CLI utility helpers — output formatting and connection management.
"""

from __future__ import annotations

import json
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from lofi_books.api.settings import LofiBooksSettings
from lofi_books.core.connection import create_connection
from lofi_books.ops.context import OperationContext
from lofi_books.ops.result import OperationResult

console = Console()
err_console = Console(stderr=True)


# ── Connection helper ────────────────────────────────────────────────────


def get_connection(database: str | None = None, *, init_schema: bool = False) -> Any:
    """Open the service database.  Defaults to ``LOFI_DATABASE_URL`` under ``LOFI_DATA_DIR``."""
    settings = LofiBooksSettings()
    conn, _info = create_connection(
        database or settings.database_url,
        init_schema=init_schema,
        data_dir=settings.data_dir,
    )
    return conn


def make_context(
    database: str | None = None,
    *,
    user: str | None = None,
    dry_run: bool = False,
    init_schema: bool = False,
) -> tuple[OperationContext, Any]:
    """Create an ``OperationContext`` + connection pair for CLI commands."""
    conn = get_connection(database, init_schema=init_schema)
    ctx = OperationContext(conn=conn, caller="cli", user=user, dry_run=dry_run)
    return ctx, conn


# ── Output helpers ───────────────────────────────────────────────────────


def output_result(
    result: OperationResult[Any],
    *,
    as_json: bool = False,
    title: str = "",
) -> None:
    """Render an ``OperationResult``; exits with code 1 on failure."""
    if not result.success:
        err = result.error
        msg = err.message if err else "Unknown error"
        code = err.code if err else "ERROR"
        err_console.print(f"[bold red]Error[/bold red] ({code}): {msg}")
        raise typer.Exit(code=1)

    data = result.data

    if as_json:
        console.print_json(json.dumps(data, default=str))
        return

    if isinstance(data, list):
        if not data:
            console.print("[dim]No items.[/dim]")
            return
        _print_table(data, title=title)
    else:
        _print_dict(data, title=title)


def _print_table(items: list[dict[str, Any]], *, title: str = "") -> None:
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in items[0]:
        table.add_column(col, overflow="fold")
    for item in items:
        table.add_row(*(str(v) for v in item.values()))
    console.print(table)


def _print_dict(data: dict[str, Any], *, title: str = "") -> None:
    if title:
        console.print(f"[bold]{title}[/bold]")
    for k, v in data.items():
        if isinstance(v, list):
            v = ", ".join(str(x) for x in v)
        console.print(f"  [cyan]{k}[/cyan]: {v}")
