"""
Root Typer application for the lofi-books CLI.
"""

from __future__ import annotations

import sys

import typer
from typer import Typer

from lofi_books import __version__
from lofi_books.cli.books import app as books_app
from lofi_books.cli.db import app as db_app
from lofi_books.cli.serve import app as serve_app
from lofi_books.core.logging import configure_logging

app = Typer(
    name="lofi-books",
    help="lofi-books — self-hosted backend for the book-writing app.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"lofi-books {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level for command output (stderr)."),
) -> None:
    """lofi-books CLI — run the server and manage the database."""
    configure_logging(level=log_level, json_format=False, stream=sys.stderr)


app.add_typer(serve_app, name="serve", help="Start the API server.")
app.add_typer(db_app, name="db", help="Database operations.")
app.add_typer(books_app, name="books", help="Book maintenance.")
