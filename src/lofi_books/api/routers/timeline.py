"""
Timeline router.

Endpoints:
    GET    /books/{book_id}/timeline            List events in order
    POST   /books/{book_id}/timeline            Append an event
    PUT    /books/{book_id}/timeline/reorder    Rewrite event order
    PUT    /timeline/{event_id}                 Update an event
    DELETE /timeline/{event_id}                 Delete an event
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import Response

from lofi_books.api.deps import JsonBody, OpContext
from lofi_books.api.schemas.common import ERROR_RESPONSES, CreatedResponse, OkResponse
from lofi_books.api.utils import respond
from lofi_books.ops import timeline as ops
from lofi_books.ops.requests import ReorderRequest

router = APIRouter(tags=["timeline"], responses=ERROR_RESPONSES)


@router.get("/books/{book_id}/timeline")
def list_timeline(book_id: str, ctx: OpContext) -> Response:
    return respond(ops.list_timeline(ctx, book_id))


@router.post("/books/{book_id}/timeline", status_code=201, response_model=CreatedResponse)
def create_timeline_event(book_id: str, payload: JsonBody, ctx: OpContext) -> Response:
    return respond(ops.create_timeline_event(ctx, book_id, payload), status_code=201)


@router.put("/books/{book_id}/timeline/reorder", response_model=OkResponse)
def reorder_timeline(book_id: str, payload: JsonBody, ctx: OpContext) -> Response:
    return respond(ops.reorder_timeline(ctx, book_id, ReorderRequest.from_payload(payload)))


@router.put("/timeline/{event_id}", response_model=OkResponse)
def update_timeline_event(event_id: str, payload: JsonBody, ctx: OpContext) -> Response:
    return respond(ops.update_timeline_event(ctx, event_id, payload))


@router.delete("/timeline/{event_id}", response_model=OkResponse)
def delete_timeline_event(event_id: str, ctx: OpContext) -> Response:
    return respond(ops.delete_timeline_event(ctx, event_id))
