"""FastAPI router for presentation uploads.

Endpoints:
    POST /presentations/{presenter_id}/upload: Store a presenter's file
    GET /presentations/info: Storage root and accepted extensions
    GET /presentations/file: Download a stored file by its storage path

The router only adapts HTTP to ``FileStorageService``; all validation,
cleanup and error logging happens in the service.
"""
import logging
import mimetypes
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, File, HTTPException, Query, UploadFile
from fastapi.responses import FileResponse, JSONResponse

from .errors import FileStorageError
from .file_types import PresentationKind, get_presentation_kind
from .schemas import ErrorResponse, StorageInfoResponse, UploadResponse
from .service import FileStorageService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/presentations", tags=["presentations"])

_service: Optional[FileStorageService] = None


def get_storage_service() -> Optional[FileStorageService]:
    """Return the configured FileStorageService, or None if not configured."""
    return _service


def set_storage_service(service: Optional[FileStorageService]) -> None:
    """Set (or clear) the FileStorageService used by the endpoints."""
    global _service
    _service = service


def _not_configured() -> JSONResponse:
    return JSONResponse({"error": "File storage not configured"}, status_code=503)


def _error_response(error: FileStorageError) -> JSONResponse:
    body = ErrorResponse(error_type=error.error_type, detail=error.user_message)
    return JSONResponse(body.model_dump(mode="json"), status_code=error.status_code)


def _media_type(path: Path) -> str:
    kind = get_presentation_kind(path.name)
    if kind == PresentationKind.PDF:
        return "application/pdf"
    if kind == PresentationKind.TEXT:
        return "text/plain"
    if kind == PresentationKind.IMAGE:
        return mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    return "application/octet-stream"


@router.post(
    "/{presenter_id}/upload",
    response_model=UploadResponse,
    responses={404: {"model": ErrorResponse}, 415: {"model": ErrorResponse}},
)
def upload_presentation(presenter_id: str, file: UploadFile = File(...)):
    """Store *file* as the presenter's current presentation.

    The upload is spooled to a temporary directory under its original name
    and handed to the storage service, which replaces any previous file of
    this presenter.

    Raises:
        HTTPException 400: If the upload carries no file name.
    """
    service = get_storage_service()
    if service is None:
        logger.warning("[presentations/upload] Storage not configured, returning 503")
        return _not_configured()

    filename = (file.filename or "").replace("\\", "/").rsplit("/", 1)[-1]
    if not filename or filename in (".", ".."):
        raise HTTPException(status_code=400, detail="Uploaded file has no name")

    with tempfile.TemporaryDirectory(prefix="presentation-upload-") as tmp_dir:
        source = Path(tmp_dir) / filename
        with source.open("wb") as fh:
            shutil.copyfileobj(file.file, fh)
        size_bytes = source.stat().st_size
        try:
            storage_path = service.upload_file(source, presenter_id)
        except FileStorageError as e:
            return _error_response(e)

    logger.info(
        f"Presentation uploaded: {filename} ({size_bytes} bytes) for presenter {presenter_id}"
    )
    return UploadResponse(
        presenter_id=presenter_id,
        filename=filename,
        storage_path=storage_path,
        size_bytes=size_bytes,
    )


@router.get("/info", response_model=StorageInfoResponse)
def storage_info():
    """Return the storage root and the accepted file extensions."""
    service = get_storage_service()
    if service is None:
        return _not_configured()
    return StorageInfoResponse(
        base_upload_dir=service.base_upload_dir,
        supported_extensions=sorted(service.supported_extensions),
    )


@router.get("/file")
def download_presentation(storage_path: str = Query(..., min_length=1)):
    """Download a stored file by its relative storage path.

    Legacy absolute paths are recognised but not served: they point outside
    the storage root.

    Raises:
        HTTPException 400: For legacy absolute paths or paths escaping the
            storage root.
        HTTPException 404: If the file does not exist.
    """
    service = get_storage_service()
    if service is None:
        return _not_configured()

    if service.is_absolute_path(storage_path):
        raise HTTPException(
            status_code=400,
            detail="Legacy absolute paths cannot be served; re-upload the file",
        )

    file_path = service.locate_file(storage_path)
    if file_path is None:
        raise HTTPException(status_code=404, detail=f"File not found: {storage_path}")

    storage_root = service.storage_root.resolve()
    if not file_path.resolve().is_relative_to(storage_root):
        raise HTTPException(status_code=400, detail="Path is outside the storage root")

    return FileResponse(
        path=file_path,
        filename=file_path.name,
        media_type=_media_type(file_path),
    )
