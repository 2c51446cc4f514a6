"""Typed failures raised by the presentation storage service.

Every failure of an upload surfaces as a single exception type,
``FileStorageError``, tagged with one of four ``ErrorType`` kinds. The HTTP
layer maps the kind to a status code; the UI-facing ``user_message`` is a
short sentence that can be shown to a presenter as-is.
"""
from enum import Enum


class ErrorType(str, Enum):
    """Failure kinds of the storage pipeline.

    Attributes:
        FILE_NOT_FOUND: Source file is missing or not a regular file.
        INVALID_FILE_TYPE: Extension is not in the allow-list.
        STORAGE_UNAVAILABLE: Presenter directory could not be created.
        COPY_FAILED: Bytes could not be copied into storage.
    """
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    INVALID_FILE_TYPE = "INVALID_FILE_TYPE"
    STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"
    COPY_FAILED = "COPY_FAILED"


_STATUS_CODES = {
    ErrorType.FILE_NOT_FOUND: 404,
    ErrorType.INVALID_FILE_TYPE: 415,
    ErrorType.STORAGE_UNAVAILABLE: 503,
    ErrorType.COPY_FAILED: 500,
}

_USER_MESSAGES = {
    ErrorType.FILE_NOT_FOUND: (
        "The selected file could not be found. "
        "Please ensure the file exists and try again."
    ),
    ErrorType.INVALID_FILE_TYPE: (
        "Unsupported file type. "
        "Please upload PDF, image (JPG, PNG, GIF), or text files."
    ),
    ErrorType.STORAGE_UNAVAILABLE: (
        "Failed to create storage directory. Please contact support."
    ),
    ErrorType.COPY_FAILED: (
        "Failed to copy file. Please try again or contact support."
    ),
}


class FileStorageError(Exception):
    """Raised when a storage operation fails.

    Args:
        message: Technical description of the failure (paths, causes).
        error_type: Failure kind.
    """

    def __init__(self, message: str, error_type: ErrorType):
        self.message = message
        self.error_type = error_type
        self.status_code = _STATUS_CODES[error_type]
        super().__init__(message)

    @property
    def user_message(self) -> str:
        """Presenter-facing explanation of the failure."""
        return _USER_MESSAGES[self.error_type]

    def __str__(self) -> str:
        return f"[{self.error_type.value}] {self.message}"
