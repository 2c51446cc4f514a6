"""Pydantic schemas for the presentation storage endpoints."""
from typing import List

from pydantic import BaseModel, Field

from .errors import ErrorType


class UploadResponse(BaseModel):
    """Response after a successful upload.

    ``storage_path`` is the value callers persist; it is always relative and
    ``/``-separated.
    """
    presenter_id: str = Field(..., description="Owner of the stored file")
    filename: str = Field(..., description="Stored file name")
    storage_path: str = Field(..., description="Relative storage path")
    size_bytes: int = Field(..., description="Stored file size in bytes")


class StorageInfoResponse(BaseModel):
    """Static storage configuration exposed to clients."""
    base_upload_dir: str = Field(..., description="Storage root")
    supported_extensions: List[str] = Field(..., description="Accepted extensions, sorted")


class ErrorResponse(BaseModel):
    """Body returned when an upload fails with a typed storage error."""
    error_type: ErrorType = Field(..., description="Failure kind")
    detail: str = Field(..., description="Presenter-facing message")
