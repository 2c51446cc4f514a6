"""Append-only error log for storage failures.

Each record starts with a line of the form::

    2026-01-31 12:00:00 ERROR: File upload failed - file not found [FILE_NOT_FOUND] Source file does not exist: ...

followed by the chained traceback when the failure wraps an OS error.
The file is opened in append mode on the first record and is never
truncated or rotated here.
"""
import logging
from pathlib import Path
from typing import Optional, Union

from .errors import FileStorageError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ErrorLog:
    """File sink for storage failures, backed by a dedicated logger.

    The logger does not propagate, so records only reach the error log file;
    the service mirrors them to its module logger separately.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self._path = Path(path).absolute()
        self._logger = logging.getLogger(f"{__name__}[{self._path}]")
        self._logger.setLevel(logging.WARNING)
        self._logger.propagate = False
        self._handler: Optional[logging.FileHandler] = None

    @property
    def path(self) -> Path:
        return self._path

    def _ensure_handler(self) -> bool:
        if self._handler is not None:
            return True
        # Another ErrorLog on the same file already attached a handler.
        for existing in self._logger.handlers:
            if isinstance(existing, logging.FileHandler):
                self._handler = existing
                return True
        if not self._path.parent.is_dir():
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                logger.error("Cannot create error log directory %s: %s", self._path.parent, exc)
                return False
        handler = logging.FileHandler(self._path, mode="a", encoding="utf-8", delay=True)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
        self._logger.addHandler(handler)
        self._handler = handler
        return True

    def record_error(self, context: str, error: FileStorageError) -> None:
        """Append one ERROR record for *error*.

        Never raises: a broken log sink must not hide the failure being
        reported.
        """
        if not self._ensure_handler():
            return
        cause = error.__cause__
        exc_info = (type(cause), cause, cause.__traceback__) if cause is not None else None
        self._logger.error(
            "%s [%s] %s", context, error.error_type.value, error.message, exc_info=exc_info
        )

    def record_warning(self, context: str, message: str) -> None:
        """Append one WARNING record (non-fatal problems such as cleanup failures)."""
        if not self._ensure_handler():
            return
        self._logger.warning("%s %s", context, message)

    def close(self) -> None:
        """Detach and close the file handler."""
        if self._handler is not None:
            self._logger.removeHandler(self._handler)
            self._handler.close()
            self._handler = None
