"""
Images router.

Endpoints:
    POST   /images/upload/{book_id}   Multipart upload (field ``image``)
    GET    /images/{image_id}         Serve the image bytes
    DELETE /images/{image_id}         Delete metadata and file
"""

from __future__ import annotations

from fastapi import APIRouter, File, UploadFile
from fastapi.responses import FileResponse, Response

from lofi_books.api.deps import OpContext, Settings
from lofi_books.api.schemas.common import ERROR_RESPONSES, OkResponse, UploadResponse
from lofi_books.api.utils import _handle_error, respond
from lofi_books.ops import images as ops
from lofi_books.ops.requests import UploadImageRequest

router = APIRouter(tags=["images"], responses=ERROR_RESPONSES)


@router.post(
    "/images/upload/{book_id}",
    status_code=201,
    response_model=UploadResponse,
    responses={413: {"description": "Image too large"}},
)
def upload_image(
    book_id: str,
    ctx: OpContext,
    settings: Settings,
    image: UploadFile = File(...),
) -> Response:
    # One byte past the limit is enough to detect an oversize upload.
    data = image.file.read(settings.max_upload_bytes + 1)
    request = UploadImageRequest(
        book_id=book_id,
        filename=image.filename or "upload",
        mime_type=image.content_type or "application/octet-stream",
        data=data,
    )
    result = ops.upload_image(
        ctx,
        request,
        max_bytes=settings.max_upload_bytes,
        url_prefix=f"{settings.api_prefix}/images",
    )
    return respond(result, status_code=201)


@router.get("/images/{image_id}", response_class=FileResponse)
def get_image(image_id: str, ctx: OpContext) -> Response:
    result = ops.get_image(ctx, image_id)
    if not result.success:
        return _handle_error(result)
    image = result.data
    return FileResponse(
        image.path,
        media_type=image.mime_type,
        headers={"Cache-Control": ops.CACHE_CONTROL},
    )


@router.delete("/images/{image_id}", response_model=OkResponse)
def delete_image(image_id: str, ctx: OpContext) -> Response:
    return respond(ops.delete_image(ctx, image_id))
