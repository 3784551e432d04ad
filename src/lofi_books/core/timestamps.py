"""
Identifier and timestamp helpers.

Record ids are UUID4 strings; timestamps are ISO-8601 UTC strings with
millisecond precision (``2026-01-31T09:15:02.123Z``), which sort
lexicographically in creation order.
"""

import uuid
from datetime import UTC, datetime


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


def now_iso() -> str:
    """Current UTC time as an ISO-8601 string ending in ``Z``."""
    return utc_now().isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_id() -> str:
    """Generate a record identifier."""
    return str(uuid.uuid4())


__all__ = ["new_id", "now_iso", "utc_now"]
