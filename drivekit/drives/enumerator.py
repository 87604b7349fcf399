"""Platform disk enumeration.

Reads the OS mount table once per call through psutil, drops virtual,
system and duplicate entries, and emits one DriveRecord per real volume.
A platform-specific supplemental scan then adds network volumes that the
mount table misses.

Variants:
- LinuxDiskEnumerator: user mounts (/media, /mnt, /run/media) and network filesystems
- MacOSDiskEnumerator: everything except the system volume and its helpers
- WindowsDiskEnumerator: every drive letter with a non-zero capacity
"""

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

import psutil

from drivekit.drives.filters import (
    is_network_filesystem,
    should_skip_linux_mount,
    should_skip_macos_mount,
    windows_display_name,
)
from drivekit.drives.network_volumes import (
    append_macos_network_volumes,
    append_windows_network_drives,
)
from drivekit.exceptions import DriveError
from drivekit.fs.paths import last_path_segment, normalize_path
from drivekit.models import DriveAccumulator, DriveRecord, DriveType
from drivekit.mount.parsers import parse_diskutil_info
from drivekit.mount.shell import CommandRunner

logger = logging.getLogger("drivekit.enumerator")


@dataclass
class VolumeDescription:
    """Platform-derived details of one mounted volume."""
    name: str
    medium: DriveType = DriveType.UNKNOWN
    is_removable: bool = False


def _read_flag(path: Path) -> Optional[str]:
    """Read a one-line sysfs attribute, None if unreadable."""
    try:
        return path.read_text().strip()
    except OSError:
        return None


class DiskEnumerator(ABC):
    """Builds the drive list for one platform."""

    def list_drives(self) -> List[DriveRecord]:
        """
        Enumerate mounted volumes.

        Returns:
            Drive records sorted by normalized path, no two sharing a path

        Raises:
            DriveError: If the mount table cannot be read
        """
        accumulator = self.scan_mount_table(DriveAccumulator())
        accumulator = self.append_network_volumes(accumulator)
        drives = accumulator.sorted_drives()
        logger.info(f"Found {len(drives)} drive(s)")
        return drives

    def scan_mount_table(self, accumulator: DriveAccumulator) -> DriveAccumulator:
        """
        Add one record per surviving mount table entry.

        Args:
            accumulator: Records and seen paths from earlier stages

        Returns:
            The same accumulator, extended
        """
        try:
            partitions = psutil.disk_partitions(all=True)
        except (OSError, psutil.Error) as e:
            raise DriveError("Could not read the mount table", e)

        for partition in partitions:
            record = self._build_record(partition, accumulator)
            if record is None:
                continue
            accumulator.add(record)
            logger.debug(f"Found drive: {record.path} ({record.file_system})")

        return accumulator

    def append_network_volumes(self, accumulator: DriveAccumulator) -> DriveAccumulator:
        """Supplemental scan for network volumes; none by default."""
        return accumulator

    def _build_record(self, partition, accumulator: DriveAccumulator) -> Optional[DriveRecord]:
        mount_point = partition.mountpoint
        file_system = partition.fstype or ""

        if self.should_skip(partition):
            return None

        path = normalize_path(mount_point)
        if accumulator.contains(path):
            logger.debug(f"Skipping duplicate mount: {mount_point}")
            return None

        capacity = self._capacity(mount_point)
        if capacity is None:
            return None
        total_space, available_space = capacity
        if total_space == 0:
            return None

        description = self.describe(partition)
        if is_network_filesystem(file_system):
            drive_type = DriveType.NETWORK
        else:
            drive_type = description.medium

        options = (partition.opts or "").split(",")

        return DriveRecord.from_capacity(
            name=description.name,
            path=path,
            mount_point=mount_point,
            file_system=file_system,
            drive_type=drive_type,
            total_space=total_space,
            available_space=available_space,
            is_removable=description.is_removable,
            is_read_only="ro" in options,
            is_mounted=True,
            device_path=partition.device or "",
        )

    def _capacity(self, mount_point: str) -> Optional[Tuple[int, int]]:
        """Total and available bytes, None if the volume cannot be queried."""
        try:
            usage = psutil.disk_usage(mount_point)
        except OSError as e:
            logger.debug(f"Could not query capacity of {mount_point}: {e}")
            return None
        return usage.total, usage.free

    @abstractmethod
    def should_skip(self, partition) -> bool:
        """True if the mount table entry is not a user-facing volume."""
        pass

    @abstractmethod
    def describe(self, partition) -> VolumeDescription:
        """Display name, physical medium and removability of a volume."""
        pass


class LinuxDiskEnumerator(DiskEnumerator):
    """Linux mount table with sysfs lookups for medium and removability."""

    def __init__(self, sysfs_block_root: str = "/sys/class/block"):
        self._sysfs_block_root = Path(sysfs_block_root)

    def should_skip(self, partition) -> bool:
        return should_skip_linux_mount(
            partition.fstype or "", partition.device or "", partition.mountpoint
        )

    def describe(self, partition) -> VolumeDescription:
        disk_dir = self._disk_sysfs_dir(partition.device or "")
        medium = DriveType.UNKNOWN
        is_removable = False

        if disk_dir is not None:
            rotational = _read_flag(disk_dir / "queue" / "rotational")
            if rotational == "1":
                medium = DriveType.HDD
            elif rotational == "0":
                medium = DriveType.SSD
            is_removable = _read_flag(disk_dir / "removable") == "1"

        return VolumeDescription(
            name=last_path_segment(partition.mountpoint),
            medium=medium,
            is_removable=is_removable,
        )

    def _disk_sysfs_dir(self, device: str) -> Optional[Path]:
        """Resolve a /dev node to the sysfs directory of its whole disk."""
        if not device.startswith("/dev/"):
            return None

        device_name = os.path.basename(os.path.realpath(device))
        sys_path = self._sysfs_block_root / device_name
        if not sys_path.exists():
            return None

        resolved = sys_path.resolve()
        if (resolved / "partition").exists():
            resolved = resolved.parent
        return resolved


class MacOSDiskEnumerator(DiskEnumerator):
    """macOS mount table with diskutil lookups for labels and media."""

    def __init__(self, runner: Optional[CommandRunner] = None, volumes_root: str = "/Volumes"):
        self._runner = runner or CommandRunner()
        self._volumes_root = volumes_root

    def should_skip(self, partition) -> bool:
        return should_skip_macos_mount(partition.mountpoint)

    def describe(self, partition) -> VolumeDescription:
        info = self._volume_info(partition.mountpoint)

        solid_state = info.get("SolidState")
        if solid_state is True:
            medium = DriveType.SSD
        elif solid_state is False:
            medium = DriveType.HDD
        else:
            medium = DriveType.UNKNOWN

        is_removable = any(
            bool(info.get(key)) for key in ("Removable", "RemovableMedia", "Ejectable")
        )

        return VolumeDescription(
            name=info.get("VolumeName") or last_path_segment(partition.mountpoint),
            medium=medium,
            is_removable=is_removable,
        )

    def append_network_volumes(self, accumulator: DriveAccumulator) -> DriveAccumulator:
        return append_macos_network_volumes(accumulator, self._volumes_root)

    def _volume_info(self, mount_point: str) -> dict:
        result = self._runner.run(["diskutil", "info", "-plist", mount_point])
        if not result.ok:
            return {}
        return parse_diskutil_info(result.stdout)


class WindowsDiskEnumerator(DiskEnumerator):
    """Windows drive letters with kernel32 lookups for labels."""

    def __init__(self, api=None):
        self._api = api

    @property
    def api(self):
        """Volume API, created on first use."""
        if self._api is None:
            from drivekit.drives.win32 import Win32VolumeApi
            self._api = Win32VolumeApi()
        return self._api

    def should_skip(self, partition) -> bool:
        return False

    def describe(self, partition) -> VolumeDescription:
        label = ""
        info = self.api.volume_information(partition.mountpoint)
        if info is not None:
            label = info.label

        # psutil tags mapped network drives with a "remote" option
        options = (partition.opts or "").split(",")
        if "remote" in options:
            return VolumeDescription(
                name=windows_display_name(label, partition.mountpoint, default="Network Drive"),
                medium=DriveType.NETWORK,
            )

        return VolumeDescription(
            name=windows_display_name(label, partition.mountpoint),
            medium=DriveType.UNKNOWN,
            is_removable="removable" in options,
        )

    def append_network_volumes(self, accumulator: DriveAccumulator) -> DriveAccumulator:
        return append_windows_network_drives(accumulator, self.api)
