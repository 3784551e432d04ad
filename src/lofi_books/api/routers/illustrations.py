"""
Chapter illustrations router.

Endpoints:
    GET    /books/{book_id}/chapters/{chapter_id}/illustrations
    POST   /books/{book_id}/chapters/{chapter_id}/illustrations
    PUT    /illustrations/{illustration_id}
    DELETE /illustrations/{illustration_id}
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import Response

from lofi_books.api.deps import JsonBody, OpContext
from lofi_books.api.schemas.common import ERROR_RESPONSES, CreatedResponse, OkResponse
from lofi_books.api.utils import respond
from lofi_books.ops import illustrations as ops

router = APIRouter(tags=["illustrations"], responses=ERROR_RESPONSES)


@router.get("/books/{book_id}/chapters/{chapter_id}/illustrations")
def list_illustrations(book_id: str, chapter_id: str, ctx: OpContext) -> Response:
    return respond(ops.list_illustrations(ctx, book_id, chapter_id))


@router.post(
    "/books/{book_id}/chapters/{chapter_id}/illustrations",
    status_code=201,
    response_model=CreatedResponse,
)
def create_illustration(book_id: str, chapter_id: str, payload: JsonBody, ctx: OpContext) -> Response:
    return respond(ops.create_illustration(ctx, book_id, chapter_id, payload), status_code=201)


@router.put("/illustrations/{illustration_id}", response_model=OkResponse)
def update_illustration(illustration_id: str, payload: JsonBody, ctx: OpContext) -> Response:
    return respond(ops.update_illustration(ctx, illustration_id, payload))


@router.delete("/illustrations/{illustration_id}", response_model=OkResponse)
def delete_illustration(illustration_id: str, ctx: OpContext) -> Response:
    return respond(ops.delete_illustration(ctx, illustration_id))
