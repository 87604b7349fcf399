"""Directory entry metadata probing.

Reads stat information for single entries and lists the immediate
children of a directory. Entries that cannot be stat'd are skipped so a
single unreadable file never fails a whole listing.
"""

import logging
import os
import stat
import sys
from pathlib import Path
from typing import List, Optional

from drivekit.exceptions import DriveError, NotADirectoryPathError, PathNotFoundError
from drivekit.fs.mime import guess_mime_type
from drivekit.fs.paths import normalize_path
from drivekit.models import DirectoryEntry, DirectoryListing

logger = logging.getLogger("drivekit.metadata")

FILE_ATTRIBUTE_HIDDEN = 0x2


def _to_millis(seconds: Optional[float]) -> int:
    """Convert a stat timestamp to epoch milliseconds (0 if unavailable)."""
    if seconds is None or seconds < 0:
        return 0
    return int(seconds * 1000)


def _created_seconds(st: os.stat_result) -> Optional[float]:
    """Creation time where the platform records one."""
    birthtime = getattr(st, "st_birthtime", None)
    if birthtime is not None:
        return birthtime
    if sys.platform == "win32":
        return st.st_ctime
    return None


def _is_hidden(path: Path, st: os.stat_result) -> bool:
    """Windows uses the hidden attribute bit; elsewhere a leading dot."""
    if sys.platform == "win32":
        attributes = getattr(st, "st_file_attributes", 0)
        return bool(attributes & FILE_ATTRIBUTE_HIDDEN)
    return path.name.startswith(".")


def _get_extension(path: Path) -> Optional[str]:
    """Lower-cased extension without the dot, None if there is none."""
    suffix = path.suffix
    if not suffix or suffix == ".":
        return None
    return suffix[1:].lower()


def count_items(path: Path) -> Optional[int]:
    """
    Count the raw entries of a directory (not recursive, not filtered).

    Args:
        path: Directory to count

    Returns:
        Number of entries, or None if the directory cannot be read
    """
    try:
        with os.scandir(path) as entries:
            return sum(1 for _ in entries)
    except OSError as e:
        logger.debug(f"Could not count items in {path}: {e}")
        return None


def probe(path) -> Optional[DirectoryEntry]:
    """
    Read metadata for a single filesystem entry.

    Args:
        path: Path to the entry (str or Path)

    Returns:
        DirectoryEntry snapshot, or None if the path cannot be stat'd
    """
    path = Path(path)
    try:
        st = path.stat()
    except OSError as e:
        logger.debug(f"Skipping unreadable entry {path}: {e}")
        return None

    try:
        is_symlink = stat.S_ISLNK(path.lstat().st_mode)
    except OSError:
        is_symlink = False

    name = path.name
    if not name:
        return None

    is_dir = stat.S_ISDIR(st.st_mode)
    is_file = stat.S_ISREG(st.st_mode)
    extension = _get_extension(path)

    return DirectoryEntry(
        name=name,
        extension=extension,
        path=normalize_path(str(path)),
        size=st.st_size if is_file else 0,
        item_count=count_items(path) if is_dir else None,
        modified_time=_to_millis(st.st_mtime),
        accessed_time=_to_millis(st.st_atime),
        created_time=_to_millis(_created_seconds(st)),
        mime=guess_mime_type(extension) if is_file else None,
        is_file=is_file,
        is_dir=is_dir,
        is_symlink=is_symlink,
        is_hidden=_is_hidden(path, st),
    )


def list_directory(path: str) -> DirectoryListing:
    """
    List the immediate children of a directory.

    Children that fail to probe are skipped; the listing still succeeds.

    Args:
        path: Directory path

    Returns:
        DirectoryListing with directories first, then files, each group
        ordered case-insensitively by name

    Raises:
        PathNotFoundError: If the path does not exist
        NotADirectoryPathError: If the path is not a directory
        DriveError: If the directory cannot be opened
    """
    directory = Path(path)

    if not directory.exists():
        raise PathNotFoundError(path)

    if not directory.is_dir():
        raise NotADirectoryPathError(path)

    entries: List[DirectoryEntry] = []
    try:
        children = list(directory.iterdir())
    except OSError as e:
        raise DriveError(f"Could not read directory {path}", e)

    for child in children:
        entry = probe(child)
        if entry is None:
            # Unreadable child: skipped, not fatal
            continue
        entries.append(entry)

    listing = DirectoryListing.from_entries(normalize_path(path), entries)
    logger.debug(
        f"Listed {path}: {listing.dir_count} dirs, {listing.file_count} files"
    )
    return listing
