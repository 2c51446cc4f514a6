"""Presentation storage service.

Stores exactly one current file per presenter:
    <base_upload_dir>/<presenter_id>/<original filename>

Uploading a file with the same name overwrites the stored copy; uploading a
file with a different name evicts the previous file. The source file is
copied, never moved. Callers persist the returned relative path and resolve
it back with ``resolve_storage_path`` (or ``locate_file`` for values that may
still be legacy absolute paths).

Uploads for the same presenter are serialized within one service instance.
Nothing coordinates separate processes writing to the same storage root.
The per-presenter locks are kept for the life of the service and never pruned.
"""
import logging
import os
import shutil
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Dict, FrozenSet, Optional, Union

from .error_log import ErrorLog
from .errors import ErrorType, FileStorageError
from .file_types import SUPPORTED_EXTENSIONS, PathLike, is_file_type_supported
from .layout import StorageLayout
from .paths import is_absolute_path, resolve_storage_path

if TYPE_CHECKING:
    from seminar_storage.config import StorageSettings

logger = logging.getLogger(__name__)

DEFAULT_BASE_UPLOAD_DIR = "uploads/presentations"
DEFAULT_ERROR_LOG_PATH = "logs/file-storage-errors.log"

# In-progress copies live next to their destination until renamed into place.
PARTIAL_SUFFIX = ".partial"


class FileStorageService:
    """Service for storing presenter uploads on the local filesystem.

    Args:
        base_upload_dir: Storage root relative to *project_root*.
        project_root: Base for the storage root and for relative error log
            paths. Defaults to the current working directory.
        error_log_path: Error log file, relative to *project_root* unless
            absolute.
    """

    def __init__(
        self,
        base_upload_dir: str = DEFAULT_BASE_UPLOAD_DIR,
        project_root: Optional[Union[str, Path]] = None,
        error_log_path: Union[str, Path] = DEFAULT_ERROR_LOG_PATH,
    ) -> None:
        root = Path(project_root) if project_root is not None else Path.cwd()
        self._layout = StorageLayout(base_upload_dir, root)

        log_path = Path(error_log_path)
        if not log_path.is_absolute():
            log_path = self._layout.project_root / log_path
        self._error_log = ErrorLog(log_path)

        self._locks: Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

        self._initialize_base_directory()

    @classmethod
    def from_settings(cls, settings: "StorageSettings") -> "FileStorageService":
        """Build a service from the ``storage`` section of the app config."""
        return cls(
            base_upload_dir=settings.base_upload_dir,
            project_root=settings.project_root,
            error_log_path=settings.error_log_path,
        )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def base_upload_dir(self) -> str:
        return self._layout.base_upload_dir

    @property
    def supported_extensions(self) -> FrozenSet[str]:
        return SUPPORTED_EXTENSIONS

    @property
    def storage_root(self) -> Path:
        return self._layout.storage_root

    @property
    def project_root(self) -> Path:
        return self._layout.project_root

    @property
    def error_log(self) -> ErrorLog:
        return self._error_log

    # ------------------------------------------------------------------
    # Validation and path helpers
    # ------------------------------------------------------------------

    @staticmethod
    def is_file_type_supported(file: Optional[PathLike]) -> bool:
        return is_file_type_supported(file)

    @staticmethod
    def is_absolute_path(path: Optional[str]) -> bool:
        return is_absolute_path(path)

    def resolve_storage_path(self, storage_path: Optional[str]) -> Optional[Path]:
        """Resolve a relative storage path against this service's project root."""
        return resolve_storage_path(storage_path, self._layout.project_root)

    def locate_file(self, stored_path: Optional[str]) -> Optional[Path]:
        """Find the file behind a persisted path value.

        Legacy absolute paths are used as-is; relative storage paths are
        resolved. Returns None when the value is empty or the file is gone.
        """
        if not stored_path:
            return None
        if is_absolute_path(stored_path):
            candidate = Path(stored_path)
        else:
            candidate = self.resolve_storage_path(stored_path)
        if candidate is None:
            return None
        try:
            found = candidate.is_file()
        except (OSError, ValueError):
            found = False
        return candidate if found else None

    def create_presenter_directory(self, presenter_id: str) -> Path:
        """Create (idempotently) and return the directory for *presenter_id*."""
        try:
            return self._layout.ensure_presenter_directory(presenter_id)
        except FileStorageError as error:
            self._record("Directory creation failed", error)
            raise

    # ------------------------------------------------------------------
    # Upload
    # ------------------------------------------------------------------

    def upload_file(self, source_file: Optional[PathLike], presenter_id: str) -> str:
        """Copy *source_file* into the presenter's storage directory.

        Args:
            source_file: Path of the presenter's local file.
            presenter_id: Owner of the stored file.

        Returns:
            Relative storage path, e.g.
            ``"uploads/presentations/P-12345678/slides.pdf"``.

        Raises:
            FileStorageError: FILE_NOT_FOUND, INVALID_FILE_TYPE,
                STORAGE_UNAVAILABLE or COPY_FAILED.
        """
        try:
            source = self._validate_source(source_file)
            filename = source.name

            with self._presenter_lock(presenter_id):
                presenter_dir = self.create_presenter_directory(presenter_id)
                self._delete_stale_files(presenter_dir, keep=filename)
                self._copy_into_storage(source, presenter_dir / filename)

            storage_path = self._layout.build_storage_path(presenter_id, filename)
        except FileStorageError:
            raise
        except Exception as exc:
            raise self._fail(
                "File upload failed - unexpected error",
                f"Unexpected error during file upload: {exc}",
                ErrorType.COPY_FAILED,
                cause=exc,
            ) from exc

        logger.info("Uploaded file: %s to %s", source, storage_path)
        return storage_path

    def _validate_source(self, source_file: Optional[PathLike]) -> Path:
        if source_file is None:
            raise self._fail(
                "File upload failed - file not found",
                "Source file does not exist: None",
                ErrorType.FILE_NOT_FOUND,
            )
        source = Path(os.fspath(source_file))
        try:
            exists = source.is_file()
        except (OSError, ValueError):
            # e.g. a name too long for the filesystem; it cannot exist either way
            exists = False
        if not exists:
            raise self._fail(
                "File upload failed - file not found",
                f"Source file does not exist: {source}",
                ErrorType.FILE_NOT_FOUND,
            )
        if not is_file_type_supported(source.name):
            raise self._fail(
                "File upload failed - invalid file type",
                f"Unsupported file type: {source.name}",
                ErrorType.INVALID_FILE_TYPE,
            )
        return source

    def _delete_stale_files(self, presenter_dir: Path, keep: str) -> int:
        """Delete every file in *presenter_dir* not named *keep*.

        Failures are recorded as warnings; the upload carries on.

        Returns:
            Number of files deleted.
        """
        try:
            entries = list(presenter_dir.iterdir())
        except OSError as exc:
            self._warn("Old file cleanup failed", f"Cannot list {presenter_dir}: {exc}")
            return 0

        deleted = 0
        for entry in entries:
            if entry.name == keep or (entry.is_dir() and not entry.is_symlink()):
                continue
            try:
                entry.unlink()
            except OSError as exc:
                self._warn("File deletion failed", f"Failed to delete old file: {entry.name} ({exc})")
                continue
            deleted += 1
            logger.info("Deleted old file: %s", entry)
        return deleted

    def _copy_into_storage(self, source: Path, destination: Path) -> None:
        partial = destination.with_name(f".{destination.name}{PARTIAL_SUFFIX}")
        try:
            shutil.copyfile(source, partial)
            os.replace(partial, destination)
        except OSError as exc:
            self._discard_partial(partial)
            raise self._fail(
                "File upload failed - copy operation failed",
                f"Failed to copy file: {source.name} ({exc})",
                ErrorType.COPY_FAILED,
                cause=exc,
            ) from exc

    def _discard_partial(self, partial: Path) -> None:
        try:
            if partial.exists():
                partial.unlink()
        except OSError as exc:
            self._warn("Rollback failed", f"Could not remove partial copy {partial}: {exc}")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _initialize_base_directory(self) -> None:
        # A missing root is created again on the first upload, so this is not fatal.
        try:
            self._layout.ensure_base_directory()
        except FileStorageError as error:
            self._record("Base directory initialization failed", error)

    def _presenter_lock(self, presenter_id: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(presenter_id, threading.Lock())

    def _fail(
        self,
        context: str,
        message: str,
        error_type: ErrorType,
        cause: Optional[BaseException] = None,
    ) -> FileStorageError:
        error = FileStorageError(message, error_type)
        error.__cause__ = cause
        self._record(context, error)
        return error

    def _record(self, context: str, error: FileStorageError) -> None:
        logger.error("%s: %s", context, error)
        self._error_log.record_error(context, error)

    def _warn(self, context: str, message: str) -> None:
        logger.warning("%s: %s", context, message)
        self._error_log.record_warning(context, message)
