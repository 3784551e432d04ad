"""
CLI: ``lofi-books serve`` — start the API server.
"""

from __future__ import annotations

import typer
import uvicorn

from lofi_books.api.settings import LofiBooksSettings
from lofi_books.cli.utils import console

app = typer.Typer(no_args_is_help=True)


@app.command("start")
def start(
    host: str | None = typer.Option(None, "--host", "-h", help="Bind address (default: LOFI_HOST)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port (default: LOFI_PORT)"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on changes"),
    log_level: str = typer.Option("info", "--log-level"),
) -> None:
    """Start the lofi-books REST API server."""
    settings = LofiBooksSettings()
    host = host or settings.host
    port = port or settings.port

    console.print(f"[bold green]Starting lofi-books API[/bold green] on {host}:{port}")
    # A single worker: backup debouncing lives in process memory.
    uvicorn.run(
        "lofi_books.api:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )
