"""Supplemental network volume scans.

The mount table misses some network mounts: Finder-mounted shares on
macOS and mapped network drives on Windows. These scans add them to the
accumulator, skipping any path an earlier stage already emitted.
"""

import logging
import string
from pathlib import Path

from drivekit.drives.win32 import DRIVE_REMOTE
from drivekit.fs.paths import normalize_path
from drivekit.models import DriveAccumulator, DriveRecord, DriveType

logger = logging.getLogger("drivekit.network_volumes")

MACOS_VOLUMES_ROOT = "/Volumes"


def append_macos_network_volumes(
    accumulator: DriveAccumulator,
    volumes_root: str = MACOS_VOLUMES_ROOT
) -> DriveAccumulator:
    """
    Add /Volumes entries the mount table did not report.

    Capacity is not queried for these mounts; the fields stay at zero.

    Args:
        accumulator: Records and seen paths from earlier stages
        volumes_root: Directory holding mounted volumes

    Returns:
        The same accumulator, extended
    """
    root = Path(volumes_root)
    try:
        entries = sorted(root.iterdir())
    except OSError as e:
        logger.debug(f"Could not scan {volumes_root}: {e}")
        return accumulator

    for entry in entries:
        mount_point = str(entry)
        path = normalize_path(mount_point)

        if accumulator.contains(path):
            continue

        try:
            if not entry.is_dir():
                continue
        except OSError:
            continue

        accumulator.add(DriveRecord(
            name=entry.name,
            path=path,
            mount_point=mount_point,
            file_system="Network",
            drive_type=DriveType.NETWORK,
            is_mounted=True,
        ))
        logger.debug(f"Found macOS network volume: {mount_point}")

    return accumulator


def append_windows_network_drives(accumulator: DriveAccumulator, api) -> DriveAccumulator:
    """
    Add mapped network drive letters (DRIVE_REMOTE) A-Z.

    Args:
        accumulator: Records and seen paths from earlier stages
        api: Object providing drive_type, volume_information and disk_space
            (see drivekit.drives.win32.Win32VolumeApi)

    Returns:
        The same accumulator, extended
    """
    for letter in string.ascii_uppercase:
        mount_point = f"{letter}:\\"

        if api.drive_type(mount_point) != DRIVE_REMOTE:
            continue

        path = normalize_path(mount_point)
        if accumulator.contains(path):
            continue

        info = api.volume_information(mount_point)
        label = info.label if info is not None else ""
        file_system = info.file_system if info is not None else "Network"
        is_read_only = info.is_read_only if info is not None else False

        space = api.disk_space(mount_point)
        if space is None:
            logger.debug(f"Skipping {mount_point}: free space query failed")
            continue
        total_space, free_space = space
        if total_space == 0:
            continue

        display_name = f"{label} ({letter}:)" if label else f"Network Drive ({letter}:)"

        accumulator.add(DriveRecord.from_capacity(
            name=display_name,
            path=path,
            mount_point=mount_point,
            file_system=file_system,
            drive_type=DriveType.NETWORK,
            total_space=total_space,
            available_space=free_space,
            is_removable=False,
            is_read_only=is_read_only,
            is_mounted=True,
            device_path=mount_point,
        ))
        logger.debug(f"Found Windows network drive: {mount_point}")

    return accumulator
