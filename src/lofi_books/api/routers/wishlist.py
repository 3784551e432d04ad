"""
Wishlist router.

The wishlist is shared: every signed-in user sees every item and may
flip its status, but only the creator may edit or delete it.

Endpoints:
    GET    /wishlist                  List all items, newest first
    POST   /wishlist                  Create an item
    PUT    /wishlist/{item_id}        Update (creator only)
    PUT    /wishlist/{item_id}/toggle Flip open/done (any user)
    DELETE /wishlist/{item_id}        Delete (creator only)
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import Response

from lofi_books.api.deps import JsonBody, OpContext
from lofi_books.api.schemas.common import ERROR_RESPONSES, CreatedResponse, OkResponse, ToggleResponse
from lofi_books.api.utils import respond
from lofi_books.ops import wishlist as ops

router = APIRouter(tags=["wishlist"], responses=ERROR_RESPONSES)


@router.get("/wishlist")
def list_wishlist(ctx: OpContext) -> Response:
    return respond(ops.list_wishlist(ctx))


@router.post("/wishlist", status_code=201, response_model=CreatedResponse)
def create_wishlist_item(payload: JsonBody, ctx: OpContext) -> Response:
    return respond(ops.create_wishlist_item(ctx, payload), status_code=201)


@router.put("/wishlist/{item_id}", response_model=OkResponse)
def update_wishlist_item(item_id: str, payload: JsonBody, ctx: OpContext) -> Response:
    return respond(ops.update_wishlist_item(ctx, item_id, payload))


@router.put("/wishlist/{item_id}/toggle", response_model=ToggleResponse)
def toggle_wishlist_item(item_id: str, ctx: OpContext) -> Response:
    return respond(ops.toggle_status(ctx, item_id))


@router.delete("/wishlist/{item_id}", response_model=OkResponse)
def delete_wishlist_item(item_id: str, ctx: OpContext) -> Response:
    return respond(ops.delete_wishlist_item(ctx, item_id))
