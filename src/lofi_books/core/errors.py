"""
Structured error types for lofi-books.

Every failure the service knows how to describe is a :class:`LofiError`
subclass carrying a machine-readable ``code`` (mapped to an HTTP status
at the API boundary) and an :class:`ErrorCategory` for logging.

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────────┐
        │                         LofiError                            │
        │           (code, category, retryable, context, cause)        │
        ├──────────────────────────────────────────────────────────────┤
        │  NotFoundError        ValidationError      AuthError          │
        │  (NOT_FOUND)          (VALIDATION_FAILED)  (UNAUTHORIZED)     │
        │       │                    │                   │              │
        │  ImageFileMissingError ReorderError      AuthenticationError  │
        │  (FILE_MISSING)        PayloadTooLargeError                   │
        │                                                               │
        │  StorageError         BackupError                             │
        │  (INTERNAL)           (BACKUP_FAILED, retryable)              │
        └──────────────────────────────────────────────────────────────┘

Ownership failures are always :class:`NotFoundError`.  Whether a record
is missing or belongs to another user is never distinguished.

Usage:
    from lofi_books.core.errors import NotFoundError

    row = find_owned(conn, "chapter", chapter_id, user_id)
    if row is None:
        raise NotFoundError("Chapter not found")

Tags:
    error-handling, exception-hierarchy, lofi-books
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and log routing."""

    # Infrastructure
    DATABASE = "DATABASE"
    STORAGE = "STORAGE"
    NETWORK = "NETWORK"

    # Request/data
    NOT_FOUND = "NOT_FOUND"
    VALIDATION = "VALIDATION"
    AUTH = "AUTH"

    # Internal
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """Structured metadata attached to an error for logging.

    Attributes:
        resource: Resource kind (``"chapter"``, ``"idea"``, ...).
        record_id: Identifier of the record involved.
        user_id: Requesting user.
        metadata: Additional key/value pairs.
    """

    resource: str | None = None
    record_id: str | None = None
    user_id: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ("resource", "record_id", "user_id"):
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class LofiError(Exception):
    """Base exception for all lofi-books errors.

    Subclasses set ``code``, ``default_category`` and ``default_retryable``.
    """

    code: str = "INTERNAL"
    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> LofiError:
        """Add context to this error (fluent API)."""
        for key, value in kwargs.items():
            if key != "metadata" and hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, code={self.code})"


# =============================================================================
# LOOKUP ERRORS
# =============================================================================


class NotFoundError(LofiError):
    """Record absent, or not owned by the caller."""

    code = "NOT_FOUND"
    default_category = ErrorCategory.NOT_FOUND


class ImageFileMissingError(NotFoundError):
    """Image metadata exists but its blob is gone from file storage."""

    code = "FILE_MISSING"
    default_category = ErrorCategory.STORAGE


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(LofiError):
    """Malformed request.  Never retryable."""

    code = "VALIDATION_FAILED"
    default_category = ErrorCategory.VALIDATION

    def __init__(self, message: str, *, field: str | None = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        return result


class ReorderError(ValidationError):
    """Reorder list names ids that are not children of the parent."""


class PayloadTooLargeError(ValidationError):
    """Upload exceeds the configured size limit."""

    code = "PAYLOAD_TOO_LARGE"


# =============================================================================
# AUTHENTICATION ERRORS
# =============================================================================


class AuthError(LofiError):
    """Authentication or authorization error."""

    code = "UNAUTHORIZED"
    default_category = ErrorCategory.AUTH


class AuthenticationError(AuthError):
    """Credential missing, malformed, or rejected by the identity provider."""


# =============================================================================
# INFRASTRUCTURE ERRORS
# =============================================================================


class StorageError(LofiError):
    """File storage failure (disk full, permission denied, ...)."""

    default_category = ErrorCategory.STORAGE


class BackupError(LofiError):
    """Backup collaborator could not be notified."""

    code = "BACKUP_FAILED"
    default_category = ErrorCategory.NETWORK
    default_retryable = True


__all__ = [
    "AuthError",
    "AuthenticationError",
    "BackupError",
    "ErrorCategory",
    "ErrorContext",
    "ImageFileMissingError",
    "LofiError",
    "NotFoundError",
    "PayloadTooLargeError",
    "ReorderError",
    "StorageError",
    "ValidationError",
]
