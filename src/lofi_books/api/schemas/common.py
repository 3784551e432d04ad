"""
Shared response envelopes.

Record bodies are free-form wire rows (camelCase keys), so only the
fixed-shape acknowledgements are modelled here.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Body of every failed request."""

    error: str = Field(..., description="Human-readable message")
    code: str = Field(..., description="Machine-readable code (NOT_FOUND, VALIDATION_FAILED, ...)")


class OkResponse(BaseModel):
    """Acknowledgement for mutations with no natural return value."""

    ok: bool = True


class CreatedResponse(BaseModel):
    """Identifier of a newly created record."""

    id: str


class UploadResponse(CreatedResponse):
    url: str


class ZIndexResponse(OkResponse):
    model_config = ConfigDict(populate_by_name=True)

    z_index: int = Field(..., alias="zIndex")


class ToggleResponse(OkResponse):
    status: str


class ClaimResponse(BaseModel):
    claimed: int


class HasDataResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    has_data: bool = Field(..., alias="hasData")
    book_count: int = Field(..., alias="bookCount")


class BackupStatusResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    last_backup_time: str | None = Field(None, alias="lastBackupTime")
    last_backup_error: str | None = Field(None, alias="lastBackupError")
    backup_in_progress: bool = Field(False, alias="backupInProgress")
    is_connected: bool = Field(False, alias="isConnected")
    pending: bool = False


ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Malformed request"},
    401: {"model": ErrorResponse, "description": "Missing or invalid credential"},
    404: {"model": ErrorResponse, "description": "Not found, or not owned by the caller"},
}
