"""HTTP transport for lofi-books (FastAPI)."""

from lofi_books.api.app import create_app

__all__ = ["create_app"]
