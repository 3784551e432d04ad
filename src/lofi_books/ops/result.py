"""
Operation result envelope.

Provides :class:`OperationResult` — the success/failure envelope every
operation function returns — and :func:`run_operation`, which turns
raised :class:`~lofi_books.core.errors.LofiError` subclasses into failed
results so operations never raise into their transport.

    LofiError (NotFoundError, ValidationError, ...)  → fail(err.code, err.message)
    any other exception                               → fail("INTERNAL", generic message)

Unexpected exceptions are logged with their traceback; the message sent
to the caller never contains internals.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from lofi_books.core.errors import ErrorCategory, LofiError, ValidationError
from lofi_books.core.logging import get_logger

if TYPE_CHECKING:
    from lofi_books.ops.context import OperationContext

T = TypeVar("T")

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class OperationError:
    """Structured error detail for failed operations.

    Attributes:
        code: Machine-readable code (``NOT_FOUND``, ``VALIDATION_FAILED``, …).
        message: Human-readable description of the error.
        category: Optional :class:`ErrorCategory` for routing/alerting.
        details: Extra key/value context (offending field, limits, ...).
        retryable: Whether the caller should retry the operation.
    """

    code: str
    message: str
    category: ErrorCategory | None = None
    details: dict[str, Any] = field(default_factory=dict)
    retryable: bool = False


@dataclass
class OperationResult(Generic[T]):
    """Envelope returned by every operation function.

    Use :meth:`ok` and :meth:`fail` rather than the constructor.

    Attributes:
        success: ``True`` when the operation completed without error.
        data: The payload (``None`` on failure).
        error: Structured error (``None`` on success).
        elapsed_ms: Wall-clock time the operation took.
    """

    success: bool
    data: T | None = None
    error: OperationError | None = None
    elapsed_ms: float = 0.0

    @classmethod
    def ok(cls, data: T, *, elapsed_ms: float = 0.0) -> OperationResult[T]:
        """Create a successful result."""
        return cls(success=True, data=data, elapsed_ms=elapsed_ms)

    @classmethod
    def fail(
        cls,
        code: str,
        message: str,
        *,
        category: ErrorCategory | None = None,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
        elapsed_ms: float = 0.0,
    ) -> OperationResult[T]:
        """Create a failed result."""
        return cls(
            success=False,
            error=OperationError(
                code=code,
                message=message,
                category=category,
                details=details or {},
                retryable=retryable,
            ),
            elapsed_ms=elapsed_ms,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict (CLI ``--json`` output)."""
        d: dict[str, Any] = {"success": self.success}
        if self.data is not None:
            d["data"] = self.data
        if self.error is not None:
            d["error"] = {"code": self.error.code, "message": self.error.message}
            if self.error.details:
                d["error"]["details"] = self.error.details
        if self.elapsed_ms:
            d["elapsed_ms"] = round(self.elapsed_ms, 2)
        return d


# ------------------------------------------------------------------ #
# Execution helpers
# ------------------------------------------------------------------ #


class _Timer:
    """Minimal stopwatch for timing operations."""

    __slots__ = ("_start",)

    def __init__(self) -> None:
        self._start = time.perf_counter()

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self._start) * 1000


def start_timer() -> _Timer:
    """Return a lightweight timer.  Use ``timer.elapsed_ms`` when done."""
    return _Timer()


def _rollback(ctx: OperationContext, op_name: str) -> None:
    try:
        ctx.conn.rollback()
    except Exception as exc:
        logger.warning("rollback_failed", op=op_name, error=str(exc))


def run_operation(
    ctx: OperationContext,
    op_name: str,
    fn: Callable[..., T],
    *args: Any,
    **kwargs: Any,
) -> OperationResult[T]:
    """Call ``fn(*args, **kwargs)`` and wrap its outcome in a result."""
    timer = start_timer()
    try:
        data = fn(*args, **kwargs)
    except LofiError as err:
        _rollback(ctx, op_name)
        logger.info(
            "op_rejected",
            op=op_name,
            code=err.code,
            request_id=ctx.request_id,
            context=err.context.to_dict(),
        )
        details = {"field": err.field} if isinstance(err, ValidationError) and err.field else None
        return OperationResult.fail(
            err.code,
            err.message,
            category=err.category,
            details=details,
            retryable=err.retryable,
            elapsed_ms=timer.elapsed_ms,
        )
    except Exception as exc:
        _rollback(ctx, op_name)
        logger.exception("op_failed", op=op_name, request_id=ctx.request_id, error=str(exc))
        return OperationResult.fail(
            "INTERNAL",
            f"Failed to {op_name.replace('_', ' ')}",
            category=ErrorCategory.INTERNAL,
            elapsed_ms=timer.elapsed_ms,
        )
    return OperationResult.ok(data, elapsed_ms=timer.elapsed_ms)


def operation(op_name: str) -> Callable[[Callable[..., T]], Callable[..., OperationResult[T]]]:
    """Decorator form of :func:`run_operation` for ``fn(ctx, ...)`` functions."""

    def decorator(fn: Callable[..., T]) -> Callable[..., OperationResult[T]]:
        @functools.wraps(fn)
        def wrapper(ctx: OperationContext, *args: Any, **kwargs: Any) -> OperationResult[T]:
            return run_operation(ctx, op_name, fn, ctx, *args, **kwargs)

        return wrapper

    return decorator


__all__ = ["OperationError", "OperationResult", "operation", "run_operation", "start_timer"]
