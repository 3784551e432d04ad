"""
CLI: ``lofi-books db`` — database management commands.
"""

from __future__ import annotations

import typer

from lofi_books.cli.utils import make_context, output_result
from lofi_books.ops.database import get_table_counts, initialize_database

app = typer.Typer(no_args_is_help=True)


@app.command()
def init(
    database: str | None = typer.Option(None, "--database", "-d", help="Database URL or path"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Preview without changes"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """Create the schema (tables and indexes)."""
    ctx, conn = make_context(database, dry_run=dry_run)
    try:
        result = initialize_database(ctx)
    finally:
        conn.close()
    output_result(result, as_json=json_out, title="Database Init")


@app.command()
def tables(
    database: str | None = typer.Option(None, "--database", "-d"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Show row counts for every table."""
    ctx, conn = make_context(database, init_schema=True)
    try:
        result = get_table_counts(ctx)
    finally:
        conn.close()
    output_result(result, as_json=json_out, title="Table Counts")
