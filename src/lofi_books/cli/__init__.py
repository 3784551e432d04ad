"""Command-line interface for lofi-books (Typer + Rich)."""
