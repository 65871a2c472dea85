"""
Install Root Path Handling.

Every extension id, version string and locale arrives from the filesystem or
from a caller and is joined under a fixed install root. Segments are checked
here so that none of them can point outside that root.
"""

import re
from pathlib import Path

from crext.extension.errors import UnsafePathError

MANIFEST_FILENAME = "manifest.json"
LOCALES_DIRNAME = "_locales"
MESSAGES_FILENAME = "messages.json"

_UNSAFE_CHARS_RE = re.compile(r"[^A-Za-z0-9_\-.@]")


def safe_segment(value: str) -> str:
    """
    Validate a single path segment.

    Args:
        value: Candidate segment (extension id, version string, locale)

    Returns:
        The segment unchanged

    Raises:
        UnsafePathError: If the segment is empty, absolute, contains a
            separator or NUL byte, or is a parent/current directory reference
    """
    if not isinstance(value, str) or not value:
        raise UnsafePathError(f"Invalid path segment: {value!r}")
    if "\x00" in value or "/" in value or "\\" in value:
        raise UnsafePathError(f"Path segment contains a separator: {value!r}")
    if value in (".", ".."):
        raise UnsafePathError(f"Path segment is a parent reference: {value!r}")
    if Path(value).is_absolute() or Path(value).drive:
        raise UnsafePathError(f"Path segment is absolute: {value!r}")
    return value


def join_under(root: Path, *segments: str) -> Path:
    """
    Join segments under root after validating each one.

    Args:
        root: Install root
        *segments: Path segments relative to root

    Returns:
        Joined path

    Raises:
        UnsafePathError: If any segment is unsafe
    """
    path = Path(root)
    for segment in segments:
        path = path / safe_segment(segment)
    return path


def sanitize_path_value(value: str) -> str:
    """
    Reduce an untrusted manifest value to a safe path segment.

    Unlike safe_segment this never raises: unsupported characters are
    stripped and parent references collapse to an empty string.

    Args:
        value: Raw value (e.g., a manifest's default_locale)

    Returns:
        Sanitized segment, possibly empty
    """
    if not isinstance(value, str):
        return ""
    cleaned = re.sub(r"\.{2,}", ".", _UNSAFE_CHARS_RE.sub("", value))
    if not cleaned.strip("."):
        return ""
    return cleaned
