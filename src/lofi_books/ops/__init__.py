"""
Operations layer — ownership-scoped business logic for lofi-books.

- All functions accept ``OperationContext`` as first argument
- All functions return ``OperationResult[T]`` (never raise)
- All functions are transport-agnostic (no HTTP, no CLI knowledge)

Usage::

    from lofi_books.ops import OperationContext
    from lofi_books.ops.chapters import update_chapter

    ctx = OperationContext(conn=conn, user="u1")
    result = update_chapter(ctx, "c1", {"title": "New", "badField": 1})
    assert result.success
"""

from lofi_books.ops.context import OperationContext
from lofi_books.ops.result import OperationError, OperationResult

__all__ = [
    "OperationContext",
    "OperationError",
    "OperationResult",
]
