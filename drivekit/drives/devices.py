"""Linux scanner for removable partitions that are not mounted.

Walks /sys/block for removable or USB-attached disks, expands them into
partitions, and keeps those that have a filesystem and do not appear in
/proc/mounts.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional, Set

from drivekit.models import MountableDeviceRecord
from drivekit.mount.parsers import parse_lsblk_fstype
from drivekit.mount.shell import CommandRunner

logger = logging.getLogger("drivekit.devices")

SECTOR_SIZE = 512

# Block devices that are never user-attached storage
SKIPPED_DEVICE_PREFIXES = ("loop", "ram", "dm-", "zram")


def _canonical(path: str) -> str:
    """Resolve symlinks; the input is returned unchanged if it does not exist."""
    return os.path.realpath(path)


def read_mounted_devices(proc_mounts: str = "/proc/mounts") -> Set[str]:
    """
    Collect the device field of every mount table line.

    Both the raw value and its canonical path are kept so /dev/disk/by-*
    aliases match the kernel device name.

    Args:
        proc_mounts: Path to the mount table

    Returns:
        Set of device paths currently mounted
    """
    mounted: Set[str] = set()
    try:
        content = Path(proc_mounts).read_text()
    except OSError as e:
        logger.warning(f"Could not read {proc_mounts}: {e}")
        return mounted

    for line in content.splitlines():
        fields = line.split()
        if not fields:
            continue
        device = fields[0]
        mounted.add(device)
        if device.startswith("/"):
            mounted.add(_canonical(device))

    return mounted


class MountableDeviceScanner:
    """Finds unmounted removable/USB partitions on Linux."""

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        sys_block: str = "/sys/block",
        proc_mounts: str = "/proc/mounts",
        dev_root: str = "/dev",
        label_dir: str = "/dev/disk/by-label",
    ):
        """
        Initialize the scanner.

        Args:
            runner: Command runner used for lsblk
            sys_block: sysfs block device directory
            proc_mounts: Live mount table
            dev_root: Directory holding device nodes
            label_dir: Directory of by-label symlinks
        """
        self._runner = runner or CommandRunner()
        self._sys_block = Path(sys_block)
        self._proc_mounts = proc_mounts
        self._dev_root = dev_root
        self._label_dir = Path(label_dir)

    def scan(self) -> List[MountableDeviceRecord]:
        """
        Scan for mountable devices.

        Returns:
            One record per unmounted partition with a detectable filesystem
        """
        mounted = read_mounted_devices(self._proc_mounts)
        devices: List[MountableDeviceRecord] = []

        try:
            block_entries = sorted(self._sys_block.iterdir())
        except OSError as e:
            logger.warning(f"Could not read {self._sys_block}: {e}")
            return devices

        for block_entry in block_entries:
            block_name = block_entry.name

            if block_name.startswith(SKIPPED_DEVICE_PREFIXES):
                continue

            if not self._is_removable_or_usb(block_entry):
                continue

            for partition_name in self._partitions(block_entry):
                record = self._build_record(block_name, partition_name, mounted)
                if record is not None:
                    devices.append(record)
                    logger.debug(f"Found mountable device: {record.device_path}")

        logger.info(f"Found {len(devices)} mountable device(s)")
        return devices

    def _is_removable_or_usb(self, block_entry: Path) -> bool:
        try:
            removable = (block_entry / "removable").read_text().strip()
        except OSError:
            removable = ""
        if removable == "1":
            return True

        try:
            return "/usb" in str(block_entry.resolve())
        except OSError:
            return False

    def _partitions(self, block_entry: Path) -> List[str]:
        """Partition names of a disk, or the disk itself if it has none."""
        block_name = block_entry.name
        partitions: List[str] = []
        try:
            sub_entries = sorted(block_entry.iterdir())
        except OSError:
            sub_entries = []

        for sub_entry in sub_entries:
            if sub_entry.name.startswith(block_name) and (sub_entry / "partition").exists():
                partitions.append(sub_entry.name)

        if not partitions:
            partitions.append(block_name)
        return partitions

    def _build_record(
        self,
        block_name: str,
        partition_name: str,
        mounted: Set[str]
    ) -> Optional[MountableDeviceRecord]:
        dev_path = f"{self._dev_root}/{partition_name}"

        if dev_path in mounted or _canonical(dev_path) in mounted:
            return None

        if not os.path.exists(dev_path):
            return None

        fs_type = self._filesystem_type(dev_path)
        if fs_type is None:
            logger.debug(f"Skipping {dev_path}: no filesystem detected")
            return None

        return MountableDeviceRecord(
            name=self._label(dev_path) or partition_name.upper(),
            device_path=dev_path,
            file_system=fs_type,
            size=self._size_sectors(block_name, partition_name) * SECTOR_SIZE,
        )

    def _filesystem_type(self, dev_path: str) -> Optional[str]:
        result = self._runner.run(["lsblk", "-no", "FSTYPE", dev_path])
        if not result.ok:
            return None
        return parse_lsblk_fstype(result.stdout)

    def _size_sectors(self, block_name: str, partition_name: str) -> int:
        candidates = [
            self._sys_block / block_name / partition_name / "size",
            self._sys_block / block_name / "size",
        ]
        for candidate in candidates:
            try:
                return int(candidate.read_text().strip())
            except (OSError, ValueError):
                continue
        return 0

    def _label(self, dev_path: str) -> Optional[str]:
        """Name of the by-label symlink pointing at the device, if any."""
        if not self._label_dir.exists():
            return None

        canonical_device = _canonical(dev_path)
        try:
            entries = sorted(self._label_dir.iterdir())
        except OSError:
            return None

        for entry in entries:
            if _canonical(str(entry)) == canonical_device:
                return entry.name.replace("\\x20", " ")
        return None
