"""
Chapters router.

Endpoints:
    GET    /books/{book_id}/chapters            List chapters in order
    POST   /books/{book_id}/chapters            Append a chapter
    PUT    /books/{book_id}/chapters/reorder    Rewrite chapter order
    GET    /chapters/{chapter_id}               Get a chapter
    PUT    /chapters/{chapter_id}               Update a chapter
    DELETE /chapters/{chapter_id}               Delete a chapter
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import Response

from lofi_books.api.deps import JsonBody, OpContext
from lofi_books.api.schemas.common import ERROR_RESPONSES, CreatedResponse, OkResponse
from lofi_books.api.utils import respond
from lofi_books.ops import chapters as ops
from lofi_books.ops.requests import ReorderRequest

router = APIRouter(tags=["chapters"], responses=ERROR_RESPONSES)


@router.get("/books/{book_id}/chapters")
def list_chapters(book_id: str, ctx: OpContext) -> Response:
    return respond(ops.list_chapters(ctx, book_id))


@router.post("/books/{book_id}/chapters", status_code=201, response_model=CreatedResponse)
def create_chapter(book_id: str, payload: JsonBody, ctx: OpContext) -> Response:
    return respond(ops.create_chapter(ctx, book_id, payload), status_code=201)


@router.put("/books/{book_id}/chapters/reorder", response_model=OkResponse)
def reorder_chapters(book_id: str, payload: JsonBody, ctx: OpContext) -> Response:
    """Body: ``{"orderedIds": [...]}`` listing every chapter of the book."""
    return respond(ops.reorder_chapters(ctx, book_id, ReorderRequest.from_payload(payload)))


@router.get("/chapters/{chapter_id}")
def get_chapter(chapter_id: str, ctx: OpContext) -> Response:
    return respond(ops.get_chapter(ctx, chapter_id))


@router.put("/chapters/{chapter_id}", response_model=OkResponse)
def update_chapter(chapter_id: str, payload: JsonBody, ctx: OpContext) -> Response:
    return respond(ops.update_chapter(ctx, chapter_id, payload))


@router.delete("/chapters/{chapter_id}", response_model=OkResponse)
def delete_chapter(chapter_id: str, ctx: OpContext) -> Response:
    return respond(ops.delete_chapter(ctx, chapter_id))
