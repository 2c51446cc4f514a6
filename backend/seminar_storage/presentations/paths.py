"""Classification and resolution of stored-file path strings.

Two formats coexist in persisted data:

* relative storage paths (``uploads/presentations/<id>/<file>``), produced by
  every upload and always ``/``-separated;
* legacy absolute paths written by older clients, in Windows drive-letter
  (``C:\\...``), UNC (``\\\\server\\...``) or POSIX (``/...``) form.

Classification is a pure string check so that a Windows path is recognised
as absolute on Linux and vice versa.
"""
import re
from pathlib import Path
from typing import Optional, Union

_DRIVE_LETTER = re.compile(r"^[A-Za-z]:[\\/]")
_UNC_PREFIX = "\\\\"
_POSIX_ROOT = "/"


def is_absolute_path(path: Optional[str]) -> bool:
    """Return True if *path* is a legacy absolute path on any platform."""
    if not path:
        return False
    return (
        path.startswith(_POSIX_ROOT)
        or path.startswith(_UNC_PREFIX)
        or _DRIVE_LETTER.match(path) is not None
    )


def normalize_separators(path: str) -> str:
    """Convert backslashes to forward slashes."""
    return path.replace("\\", "/")


def resolve_storage_path(
    storage_path: Optional[str],
    project_root: Union[str, Path],
) -> Optional[Path]:
    """Resolve a relative storage path to an absolute location.

    Both ``/`` and ``\\`` are accepted as separators. The target does not
    have to exist.

    Args:
        storage_path: Relative path as returned by an upload.
        project_root: Directory the storage root is relative to.

    Returns:
        Absolute path with host-native separators, or None for empty input.
    """
    if not storage_path:
        return None
    segments = [s for s in normalize_separators(storage_path).split("/") if s]
    return Path(project_root).absolute().joinpath(*segments)
