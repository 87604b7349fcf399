"""drivekit - storage volume discovery and mount orchestration.

Lists drives on Linux, macOS and Windows, finds unmounted removable
devices, and mounts local devices and SSHFS/NFS/SMB network shares.

The module-level functions use a DriveService built on first use with
default settings; create a DriveService directly to pass your own.
"""

from typing import List, Optional

from drivekit.exceptions import DriveError
from drivekit.fs.paths import normalize_path
from drivekit.models import (
    DirectoryEntry,
    DirectoryListing,
    DriveRecord,
    DriveType,
    MountableDeviceRecord,
    NetworkShareRequest,
)
from drivekit.service import DriveService

__version__ = "1.0.0"

_default_service: Optional[DriveService] = None


def _service() -> DriveService:
    global _default_service
    if _default_service is None:
        _default_service = DriveService()
    return _default_service


def list_directory(path: str) -> DirectoryListing:
    """List the immediate children of a directory."""
    return _service().list_directory(path)


def list_drives() -> List[DriveRecord]:
    """List mounted drives."""
    return _service().list_drives()


def list_mountable_devices() -> List[MountableDeviceRecord]:
    """List unmounted removable devices (Linux only)."""
    return _service().list_mountable_devices()


def mount(device_path: str) -> str:
    """Mount a local device."""
    return _service().mount(device_path)


def unmount(device_path: str, mount_point: str = "") -> None:
    """Unmount a local device."""
    _service().unmount(device_path, mount_point)


def mount_network_share(request: NetworkShareRequest) -> str:
    """Mount a network share."""
    return _service().mount_network_share(request)


def forget_password(request: NetworkShareRequest) -> bool:
    """Remove a share password saved in the keyring."""
    return _service().forget_password(request)


def parent_of(path: str) -> Optional[str]:
    """Normalized parent of a path."""
    return _service().parent_of(path)


def exists(path: str) -> bool:
    """True if the path exists."""
    return _service().exists(path)


__all__ = [
    "DirectoryEntry",
    "DirectoryListing",
    "DriveError",
    "DriveRecord",
    "DriveService",
    "DriveType",
    "MountableDeviceRecord",
    "NetworkShareRequest",
    "exists",
    "forget_password",
    "list_directory",
    "list_drives",
    "list_mountable_devices",
    "mount",
    "mount_network_share",
    "normalize_path",
    "parent_of",
    "unmount",
]
