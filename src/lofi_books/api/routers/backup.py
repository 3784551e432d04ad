"""
Backup router.

Endpoints:
    GET  /backup/status            Notifier state
    GET  /backup/has-data          Whether the caller owns any books
    POST /backup/notify-mutation   Client-reported mutation
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import Response

from lofi_books.api.deps import Notifier, OpContext
from lofi_books.api.schemas.common import ERROR_RESPONSES, BackupStatusResponse, HasDataResponse
from lofi_books.api.utils import respond
from lofi_books.ops import backup as ops

router = APIRouter(prefix="/backup", tags=["backup"], responses=ERROR_RESPONSES)


@router.get("/status", response_model=BackupStatusResponse)
def backup_status(ctx: OpContext, notifier: Notifier) -> Response:
    return respond(ops.backup_status(ctx, notifier))


@router.get("/has-data", response_model=HasDataResponse)
def has_data(ctx: OpContext) -> Response:
    return respond(ops.has_data(ctx))


@router.post("/notify-mutation")
def notify_mutation(ctx: OpContext) -> Response:
    return respond(ops.notify_mutation(ctx))
