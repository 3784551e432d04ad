"""
Backup status operations.

The notifier itself lives in :mod:`lofi_books.core.backup`; these
operations expose its state and let a client signal a mutation the
server did not see (for example, one made while offline).
"""

from __future__ import annotations

from typing import Any

from lofi_books.core.backup import BackupNotifier
from lofi_books.ops.books import has_data
from lofi_books.ops.context import OperationContext
from lofi_books.ops.result import operation


@operation("get_backup_status")
def backup_status(ctx: OperationContext, notifier: BackupNotifier | None) -> dict[str, Any]:
    """Notifier state, or an all-off status when backups are not wired."""
    if notifier is None:
        return {
            "lastBackupTime": None,
            "lastBackupError": None,
            "backupInProgress": False,
            "isConnected": False,
            "pending": False,
        }
    return notifier.status()


@operation("notify_mutation")
def notify_mutation(ctx: OperationContext) -> dict[str, Any]:
    """Publish a client-reported mutation to the event bus."""
    user_id = ctx.require_user()
    ctx.publish("client", "mutated", user_id, "ops.backup")
    return {"ok": True, "queued": ctx.events is not None}


__all__ = ["backup_status", "has_data", "notify_mutation"]
