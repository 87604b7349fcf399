"""Parsers for the stdout conventions of external mount tools.

Each function takes captured tool output and extracts the one value the
caller needs. They never raise; unparseable output yields an empty string.
"""

import plistlib
import re
from typing import Optional

DRIVE_TOKEN_PATTERN = re.compile(r"\b[A-Z]:")


def parse_udisksctl_mount(stdout: str) -> str:
    """
    Extract the mount point from `udisksctl mount` output.

    Example:
        "Mounted /dev/sdb1 at /media/user/USB." -> "/media/user/USB"
    """
    _, separator, tail = stdout.partition(" at ")
    if not separator:
        return ""
    return tail.strip().rstrip(".")


def parse_diskutil_mount(stdout: str) -> str:
    """
    Extract the mount point from `diskutil mount` output.

    Example:
        "Volume USB on disk2s1 mounted at /Volumes/USB" -> "/Volumes/USB"
    """
    _, separator, tail = stdout.partition("mounted at ")
    if not separator:
        return ""
    return tail.strip()


def parse_net_use_drive(stdout: str) -> str:
    """
    Extract the drive letter from `net use *` output.

    The last token of the line mentioning "assigned" is returned; output
    that only reports "Drive Z: is now connected to ..." falls back to the
    first drive letter on that line.

    Examples:
        "Drive letter assigned: Z:" -> "Z:"
        "Drive Z: is now connected to \\\\server\\share." -> "Z:"
    """
    lines = stdout.splitlines()
    for line in lines:
        if "assigned" in line:
            tokens = line.split()
            if tokens:
                return tokens[-1]
    for line in lines:
        if "connected" in line:
            match = DRIVE_TOKEN_PATTERN.search(line)
            if match:
                return match.group(0)
    return ""


def parse_lsblk_fstype(stdout: str) -> Optional[str]:
    """
    Extract the filesystem type from `lsblk -no FSTYPE <dev>` output.

    Returns:
        Filesystem type, or None if lsblk printed nothing
    """
    fs_type = stdout.strip()
    if not fs_type:
        return None
    # A whole-disk query also lists children; the first line is the device
    return fs_type.splitlines()[0].strip() or None


def parse_diskutil_info(stdout: str) -> dict:
    """
    Parse `diskutil info -plist <target>` output.

    Returns:
        Dictionary of volume properties, empty if the plist is invalid
    """
    if not stdout.strip():
        return {}
    try:
        data = plistlib.loads(stdout.encode("utf-8"))
    except (plistlib.InvalidFileException, ValueError):
        return {}
    return data if isinstance(data, dict) else {}
