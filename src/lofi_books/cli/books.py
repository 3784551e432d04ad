"""
CLI: ``lofi-books books`` — maintenance commands for book ownership.
"""

from __future__ import annotations

import typer

from lofi_books.cli.utils import make_context, output_result
from lofi_books.ops.books import claim_orphaned

app = typer.Typer(no_args_is_help=True)


@app.command("claim-orphaned")
def claim_orphaned_cmd(
    user: str = typer.Option(..., "--user", "-u", help="User id that takes ownership"),
    database: str | None = typer.Option(None, "--database", "-d"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Count without changing anything"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Assign every book with no owner to USER."""
    ctx, conn = make_context(database, user=user, dry_run=dry_run, init_schema=True)
    try:
        result = claim_orphaned(ctx)
    finally:
        conn.close()
    output_result(result, as_json=json_out, title="Claim Orphaned Books")
