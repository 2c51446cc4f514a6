"""Presentation storage module.

Centralizes files uploaded by presenters. Each presenter owns one directory
under the storage root and at most one current file in it:

    uploads/presentations/{presenter_id}/{original filename}

Supported file types:
- Documents: pdf
- Images: jpg, jpeg, png, gif
- Text: txt

Uploads return a relative, ``/``-separated storage path that callers persist
and later resolve back to an absolute location.
"""

from .errors import ErrorType, FileStorageError
from .file_types import SUPPORTED_EXTENSIONS, PresentationKind, is_file_type_supported
from .paths import is_absolute_path, resolve_storage_path
from .layout import StorageLayout
from .error_log import ErrorLog
from .service import FileStorageService
from .router import router, get_storage_service, set_storage_service

__all__ = [
    "ErrorType",
    "FileStorageError",
    "SUPPORTED_EXTENSIONS",
    "PresentationKind",
    "is_file_type_supported",
    "is_absolute_path",
    "resolve_storage_path",
    "StorageLayout",
    "ErrorLog",
    "FileStorageService",
    "router",
    "get_storage_service",
    "set_storage_service",
]
