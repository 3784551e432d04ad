"""
Storyboard router: ideas and the connections between them.

Endpoints:
    GET    /books/{book_id}/ideas             List ideas, bottom of the stack first
    POST   /books/{book_id}/ideas             Create an idea on top
    PUT    /ideas/{idea_id}                   Update an idea
    PUT    /ideas/{idea_id}/bring-to-front    Raise above all siblings
    DELETE /ideas/{idea_id}                   Delete an idea and its connections
    GET    /books/{book_id}/connections       List connections
    POST   /books/{book_id}/connections       Connect two ideas
    PUT    /connections/{connection_id}       Recolour a connection
    DELETE /connections/{connection_id}       Delete a connection
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import Response

from lofi_books.api.deps import JsonBody, OpContext
from lofi_books.api.schemas.common import ERROR_RESPONSES, CreatedResponse, OkResponse, ZIndexResponse
from lofi_books.api.utils import respond
from lofi_books.ops import connections, ideas

router = APIRouter(tags=["storyboard"], responses=ERROR_RESPONSES)


@router.get("/books/{book_id}/ideas")
def list_ideas(book_id: str, ctx: OpContext) -> Response:
    return respond(ideas.list_ideas(ctx, book_id))


@router.post("/books/{book_id}/ideas", status_code=201, response_model=CreatedResponse)
def create_idea(book_id: str, payload: JsonBody, ctx: OpContext) -> Response:
    return respond(ideas.create_idea(ctx, book_id, payload), status_code=201)


@router.put("/ideas/{idea_id}", response_model=OkResponse)
def update_idea(idea_id: str, payload: JsonBody, ctx: OpContext) -> Response:
    return respond(ideas.update_idea(ctx, idea_id, payload))


@router.put("/ideas/{idea_id}/bring-to-front", response_model=ZIndexResponse)
def bring_to_front(idea_id: str, ctx: OpContext) -> Response:
    return respond(ideas.bring_to_front(ctx, idea_id))


@router.delete("/ideas/{idea_id}", response_model=OkResponse)
def delete_idea(idea_id: str, ctx: OpContext) -> Response:
    return respond(ideas.delete_idea(ctx, idea_id))


@router.get("/books/{book_id}/connections")
def list_connections(book_id: str, ctx: OpContext) -> Response:
    return respond(connections.list_connections(ctx, book_id))


@router.post("/books/{book_id}/connections", status_code=201, response_model=CreatedResponse)
def create_connection(book_id: str, payload: JsonBody, ctx: OpContext) -> Response:
    return respond(connections.create_connection(ctx, book_id, payload), status_code=201)


@router.put("/connections/{connection_id}", response_model=OkResponse)
def update_connection(connection_id: str, payload: JsonBody, ctx: OpContext) -> Response:
    return respond(connections.update_connection(ctx, connection_id, payload))


@router.delete("/connections/{connection_id}", response_model=OkResponse)
def delete_connection(connection_id: str, ctx: OpContext) -> Response:
    return respond(connections.delete_connection(ctx, connection_id))
