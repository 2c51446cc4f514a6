"""Presenter-scoped directory layout under the storage root.

Files are stored in: <project_root>/<base_upload_dir>/<presenter_id>/<filename>
"""
import logging
from pathlib import Path
from typing import Union

from .errors import ErrorType, FileStorageError

logger = logging.getLogger(__name__)


class StorageLayout:
    """Computes and creates storage locations for presenters.

    Args:
        base_upload_dir: Storage root as a relative ``/``-separated string,
            e.g. ``"uploads/presentations"``.
        project_root: Directory the storage root is relative to.
    """

    def __init__(self, base_upload_dir: str, project_root: Union[str, Path]) -> None:
        self._base_upload_dir = base_upload_dir
        self._project_root = Path(project_root).absolute()
        self._storage_root = self._project_root.joinpath(*base_upload_dir.split("/"))

    @property
    def base_upload_dir(self) -> str:
        return self._base_upload_dir

    @property
    def project_root(self) -> Path:
        return self._project_root

    @property
    def storage_root(self) -> Path:
        return self._storage_root

    def ensure_base_directory(self) -> Path:
        """Create the storage root if it does not exist yet."""
        try:
            if self._storage_root.is_dir():
                return self._storage_root
            self._storage_root.mkdir(parents=True, exist_ok=True)
        except (OSError, ValueError) as exc:
            raise FileStorageError(
                f"Failed to create base upload directory: {self._base_upload_dir} ({exc})",
                ErrorType.STORAGE_UNAVAILABLE,
            ) from exc
        logger.info("Created base upload directory: %s", self._storage_root)
        return self._storage_root

    def presenter_directory(self, presenter_id: str) -> Path:
        """Return the directory for *presenter_id* without touching the disk."""
        _check_presenter_id(presenter_id)
        return self._storage_root / presenter_id

    def ensure_presenter_directory(self, presenter_id: str) -> Path:
        """Create the presenter directory (and any missing parents).

        Idempotent: repeated calls return the same path and never fail
        because the directory already exists.

        Raises:
            FileStorageError: STORAGE_UNAVAILABLE if the id is unusable or
                the directory cannot be created.
        """
        presenter_dir = self.presenter_directory(presenter_id)
        try:
            if presenter_dir.is_dir():
                return presenter_dir
            presenter_dir.mkdir(parents=True, exist_ok=True)
        except (OSError, ValueError) as exc:
            raise FileStorageError(
                f"Failed to create presenter directory for: {presenter_id} ({exc})",
                ErrorType.STORAGE_UNAVAILABLE,
            ) from exc
        logger.info("Created presenter directory: %s", presenter_dir)
        return presenter_dir

    def build_storage_path(self, presenter_id: str, filename: str) -> str:
        """Compose the relative storage path; never consults the filesystem."""
        return f"{self._base_upload_dir}/{presenter_id}/{filename}"


def _check_presenter_id(presenter_id: str) -> None:
    # The id is used verbatim as exactly one directory segment.
    if not presenter_id or not presenter_id.strip():
        raise FileStorageError(
            "Presenter ID cannot be null or empty",
            ErrorType.STORAGE_UNAVAILABLE,
        )
    if presenter_id in (".", "..") or "/" in presenter_id or "\\" in presenter_id:
        raise FileStorageError(
            f"Presenter ID is not a valid directory name: {presenter_id!r}",
            ErrorType.STORAGE_UNAVAILABLE,
        )
