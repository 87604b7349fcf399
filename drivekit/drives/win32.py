"""Thin ctypes wrappers around the Windows volume APIs.

Only imported for its functions on Windows; the class can be replaced by
a fake with the same three methods in tests.
"""

import ctypes
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

logger = logging.getLogger("drivekit.win32")

DRIVE_REMOTE = 4

FILE_READ_ONLY_VOLUME = 0x00080000

MAX_PATH = 260


@dataclass
class VolumeInformation:
    """Result of GetVolumeInformationW."""
    label: str
    file_system: str
    flags: int = 0

    @property
    def is_read_only(self) -> bool:
        """True if the volume reports FILE_READ_ONLY_VOLUME."""
        return bool(self.flags & FILE_READ_ONLY_VOLUME)


class Win32VolumeApi:
    """Drive-type, volume-information and free-space queries via kernel32."""

    def __init__(self):
        self._kernel32 = ctypes.windll.kernel32

    def drive_type(self, root: str) -> int:
        """
        Get the drive type of a root path such as "Z:\\".

        Returns:
            One of the DRIVE_* constants
        """
        return int(self._kernel32.GetDriveTypeW(root))

    def volume_information(self, root: str) -> Optional[VolumeInformation]:
        """
        Get label, filesystem name and flags of a volume.

        Returns:
            VolumeInformation, or None if the call failed
        """
        name_buffer = ctypes.create_unicode_buffer(MAX_PATH + 1)
        fs_buffer = ctypes.create_unicode_buffer(32)
        flags = ctypes.c_ulong(0)

        ok = self._kernel32.GetVolumeInformationW(
            root,
            name_buffer,
            len(name_buffer),
            None,
            None,
            ctypes.byref(flags),
            fs_buffer,
            len(fs_buffer),
        )
        if not ok:
            logger.debug(f"GetVolumeInformationW failed for {root}")
            return None

        return VolumeInformation(
            label=name_buffer.value,
            file_system=fs_buffer.value,
            flags=flags.value,
        )

    def disk_space(self, root: str) -> Optional[Tuple[int, int]]:
        """
        Get total and free bytes of a volume.

        Returns:
            Tuple of (total_bytes, free_bytes), or None if the call failed
        """
        total_bytes = ctypes.c_ulonglong(0)
        free_bytes = ctypes.c_ulonglong(0)

        ok = self._kernel32.GetDiskFreeSpaceExW(
            root,
            None,
            ctypes.byref(total_bytes),
            ctypes.byref(free_bytes),
        )
        if not ok:
            logger.debug(f"GetDiskFreeSpaceExW failed for {root}")
            return None

        return total_bytes.value, free_bytes.value
