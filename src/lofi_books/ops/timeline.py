"""Timeline event operations.  ``characterIds`` is stored as JSON text."""

from __future__ import annotations

from lofi_books.core.resources import TIMELINE_EVENT
from lofi_books.ops.scoped import ScopedResource

timeline = ScopedResource(TIMELINE_EVENT, source="ops.timeline")

list_timeline = timeline.list_for_parent
create_timeline_event = timeline.create
update_timeline_event = timeline.update
delete_timeline_event = timeline.delete
reorder_timeline = timeline.reorder

__all__ = [
    "create_timeline_event",
    "delete_timeline_event",
    "list_timeline",
    "reorder_timeline",
    "timeline",
    "update_timeline_event",
]
