"""
Protocol definitions for lofi-books collaborators.

The storage engine, identity provider, file storage, and backup
service are all external collaborators.  Code in ``lofi_books.core``
and ``lofi_books.ops`` depends only on the shapes below, never on a
concrete driver.

    Connection      — sync parameterized SQL (sqlite3, psycopg2, ...)
    TokenVerifier   — bearer credential → verified identity
    BackupClient    — "mutation occurred" signal

Tags:
    protocol, connection, contracts, lofi-books
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Connection(Protocol):
    """Minimal SYNCHRONOUS connection interface.

    Examples:
        >>> conn.execute("SELECT * FROM books WHERE id = ?", ("b1",))
        >>> row = conn.fetchone()
    """

    def execute(self, sql: str, params: tuple = ()) -> Any:
        """Execute SQL statement with optional parameters."""
        ...

    def executemany(self, sql: str, params: list[tuple]) -> Any:
        """Execute SQL statement for multiple parameter sets."""
        ...

    def fetchone(self) -> Any:
        """Fetch one row from last query."""
        ...

    def fetchall(self) -> list:
        """Fetch all rows from last query."""
        ...

    def commit(self) -> None:
        """Commit current transaction."""
        ...

    def rollback(self) -> None:
        """Rollback current transaction."""
        ...


@dataclass(frozen=True, slots=True)
class Identity:
    """A verified caller.

    Attributes:
        user_id: Stable identifier from the identity provider.
        email: Optional display email (used for wishlist attribution).
    """

    user_id: str
    email: str = ""


@runtime_checkable
class TokenVerifier(Protocol):
    """Identity provider adapter: bearer credential → :class:`Identity`.

    Implementations raise :class:`~lofi_books.core.errors.AuthenticationError`
    for missing, expired, or rejected credentials.
    """

    async def verify(self, token: str) -> Identity:
        ...


@runtime_checkable
class BackupClient(Protocol):
    """Out-of-band backup collaborator.

    ``notify()`` carries no payload; the collaborator decides what to sync
    and when.  Implementations raise
    :class:`~lofi_books.core.errors.BackupError` on delivery failure.
    """

    def notify(self) -> None:
        ...


__all__ = ["BackupClient", "Connection", "Identity", "TokenVerifier"]
