"""Allow ``python -m lofi_books``."""

from lofi_books.cli.app import app

app()
