"""
Characters router.

Endpoints:
    GET    /books/{book_id}/characters            List characters in order
    POST   /books/{book_id}/characters            Append a character
    PUT    /books/{book_id}/characters/reorder    Rewrite character order
    GET    /characters/{character_id}             Get a character
    PUT    /characters/{character_id}             Update a character
    DELETE /characters/{character_id}             Delete a character (and its main image)
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import Response

from lofi_books.api.deps import JsonBody, OpContext
from lofi_books.api.schemas.common import ERROR_RESPONSES, CreatedResponse, OkResponse
from lofi_books.api.utils import respond
from lofi_books.ops import characters as ops
from lofi_books.ops.requests import ReorderRequest

router = APIRouter(tags=["characters"], responses=ERROR_RESPONSES)


@router.get("/books/{book_id}/characters")
def list_characters(book_id: str, ctx: OpContext) -> Response:
    return respond(ops.list_characters(ctx, book_id))


@router.post("/books/{book_id}/characters", status_code=201, response_model=CreatedResponse)
def create_character(book_id: str, payload: JsonBody, ctx: OpContext) -> Response:
    return respond(ops.create_character(ctx, book_id, payload), status_code=201)


@router.put("/books/{book_id}/characters/reorder", response_model=OkResponse)
def reorder_characters(book_id: str, payload: JsonBody, ctx: OpContext) -> Response:
    return respond(ops.reorder_characters(ctx, book_id, ReorderRequest.from_payload(payload)))


@router.get("/characters/{character_id}")
def get_character(character_id: str, ctx: OpContext) -> Response:
    return respond(ops.get_character(ctx, character_id))


@router.put("/characters/{character_id}", response_model=OkResponse)
def update_character(character_id: str, payload: JsonBody, ctx: OpContext) -> Response:
    return respond(ops.update_character(ctx, character_id, payload))


@router.delete("/characters/{character_id}", response_model=OkResponse)
def delete_character(character_id: str, ctx: OpContext) -> Response:
    return respond(ops.delete_character(ctx, character_id))
