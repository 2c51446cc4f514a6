"""File type validation for presentation uploads.

Validation is purely name-based: the extension is everything from the last
``.`` of the file name to the end, lower-cased and including the dot.
Size and content are never inspected.

Supported extensions:
- Documents: .pdf
- Images: .jpg, .jpeg, .png, .gif
- Text: .txt
"""
import os
from enum import Enum
from typing import FrozenSet, Optional, Union

PathLike = Union[str, "os.PathLike[str]"]


class PresentationKind(str, Enum):
    """How a stored presentation should be displayed.

    - PDF: PDF documents
    - IMAGE: JPEG, PNG, GIF
    - TEXT: plain text
    - OTHER: anything else (legacy files stored before validation existed)
    """
    PDF = "pdf"
    IMAGE = "image"
    TEXT = "text"
    OTHER = "other"


SUPPORTED_EXTENSIONS: FrozenSet[str] = frozenset(
    {".pdf", ".jpg", ".jpeg", ".png", ".gif", ".txt"}
)

_EXTENSION_KINDS = {
    PresentationKind.PDF: (".pdf",),
    PresentationKind.IMAGE: (".jpg", ".jpeg", ".png", ".gif"),
    PresentationKind.TEXT: (".txt",),
}


def _file_name(file: PathLike) -> str:
    # Accept "dir/name.pdf" and "dir\\name.pdf" alike; only the last segment counts.
    name = os.fspath(file)
    return name.replace("\\", "/").rsplit("/", 1)[-1]


def get_file_extension(filename: Optional[str]) -> str:
    """Return the lower-cased extension of *filename*, including the dot.

    Args:
        filename: A bare file name (no directory part).

    Returns:
        The extension (e.g. ``".pdf"``) or ``""`` when the name has no dot
        or ends with one.

    Examples:
        >>> get_file_extension("report.v2.PDF")
        '.pdf'
        >>> get_file_extension(".pdf")
        '.pdf'
        >>> get_file_extension("notes.")
        ''
    """
    if not filename:
        return ""
    last_dot = filename.rfind(".")
    if last_dot == -1 or last_dot == len(filename) - 1:
        return ""
    return filename[last_dot:].lower()


def is_file_type_supported(file: Optional[PathLike]) -> bool:
    """Check whether *file* has a supported extension.

    *file* may be ``None``, in which case the answer is ``False``. The file
    does not have to exist.
    """
    if file is None:
        return False
    return get_file_extension(_file_name(file)) in SUPPORTED_EXTENSIONS


def get_presentation_kind(file: PathLike) -> PresentationKind:
    """Determine the display category of a stored file from its name."""
    extension = get_file_extension(_file_name(file))
    for kind, extensions in _EXTENSION_KINDS.items():
        if extension in extensions:
            return kind
    return PresentationKind.OTHER
