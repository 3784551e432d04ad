"""
Books router.

Endpoints:
    GET    /books                    List the caller's books
    POST   /books                    Create a book
    POST   /books/claim-orphaned     Take ownership of books with no owner
    GET    /books/{book_id}          Get a book
    PUT    /books/{book_id}          Update a book
    DELETE /books/{book_id}          Delete a book and everything in it
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import Response

from lofi_books.api.deps import JsonBody, OpContext
from lofi_books.api.schemas.common import ERROR_RESPONSES, ClaimResponse, CreatedResponse, OkResponse
from lofi_books.api.utils import respond
from lofi_books.ops import books as ops

router = APIRouter(tags=["books"], responses=ERROR_RESPONSES)


@router.get("/books")
def list_books(ctx: OpContext) -> Response:
    return respond(ops.list_books(ctx))


@router.post("/books", status_code=201, response_model=CreatedResponse)
def create_book(payload: JsonBody, ctx: OpContext) -> Response:
    return respond(ops.create_book(ctx, payload), status_code=201)


@router.post("/books/claim-orphaned", response_model=ClaimResponse)
def claim_orphaned(ctx: OpContext) -> Response:
    """Assign books created before accounts existed to the caller."""
    return respond(ops.claim_orphaned(ctx))


@router.get("/books/{book_id}")
def get_book(book_id: str, ctx: OpContext) -> Response:
    return respond(ops.get_book(ctx, book_id))


@router.put("/books/{book_id}", response_model=OkResponse)
def update_book(book_id: str, payload: JsonBody, ctx: OpContext) -> Response:
    return respond(ops.update_book(ctx, book_id, payload))


@router.delete("/books/{book_id}", response_model=OkResponse)
def delete_book(book_id: str, ctx: OpContext) -> Response:
    return respond(ops.delete_book(ctx, book_id))
