"""Path string helpers shared by every drivekit component.

Normalized paths use forward slashes on every platform so drive records
and directory entries can be compared and de-duplicated as plain strings.
"""

import re
from pathlib import Path
from typing import Optional

DRIVE_LETTER_PATTERN = re.compile(r"^([a-zA-Z]):(/|$)")


def normalize_path(path: str) -> str:
    """
    Canonicalize separators and drive-letter casing for comparison.

    Args:
        path: Raw path string from the OS or the caller

    Returns:
        Path with forward slashes, no repeated or trailing separators
        (roots keep theirs) and an upper-case drive letter

    Examples:
        "C:\\Users\\me\\" -> "C:/Users/me"
        "c:" -> "C:/"
        "/media//usb/" -> "/media/usb"
        "\\\\server\\share" -> "//server/share"
    """
    if not path:
        return path

    normalized = path.replace("\\", "/")

    # Preserve the UNC prefix while collapsing the rest
    prefix = ""
    if normalized.startswith("//"):
        prefix = "//"
        normalized = normalized.lstrip("/")
    normalized = prefix + re.sub(r"/{2,}", "/", normalized)

    match = DRIVE_LETTER_PATTERN.match(normalized)
    if match:
        normalized = match.group(1).upper() + ":/" + normalized[len(match.group(0)):]

    if len(normalized) > 1 and normalized.endswith("/"):
        if not DRIVE_LETTER_PATTERN.fullmatch(normalized) and normalized != prefix:
            normalized = normalized.rstrip("/") or "/"

    return normalized


def parent_of(path: str) -> Optional[str]:
    """
    Get the normalized parent directory of a path.

    Args:
        path: Path string

    Returns:
        Normalized parent path, or None for a filesystem root
    """
    if not path:
        return None

    current = Path(path)
    parent = current.parent
    if parent == current:
        return None
    return normalize_path(str(parent))


def exists(path: str) -> bool:
    """True if the path exists (symlinks are followed)."""
    if not path:
        return False
    try:
        return Path(path).exists()
    except OSError:
        return False


def last_path_segment(mount_point: str) -> str:
    """
    Get the last non-empty segment of a mount point.

    Args:
        mount_point: Mount point path (e.g., "/media/user/USB")

    Returns:
        Last segment ("USB"), or the input itself if it has none
    """
    for segment in reversed(mount_point.split("/")):
        if segment:
            return segment
    return mount_point
