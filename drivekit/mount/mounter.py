"""Local device mount and unmount.

Each platform runs a fixed chain of external tools. The first tool that
succeeds wins; when every tool fails the caller gets one error naming
what to install. There are no retries beyond the chain.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from drivekit.exceptions import (
    ExternalToolError,
    MissingDependencyError,
    UnsupportedOperationError,
)
from drivekit.mount.parsers import parse_diskutil_mount, parse_udisksctl_mount
from drivekit.mount.shell import CommandRunner

logger = logging.getLogger("drivekit.mounter")


class Mounter(ABC):
    """Abstract base class for platform-specific mount operations."""

    def __init__(self, runner: Optional[CommandRunner] = None):
        self._runner = runner or CommandRunner()

    @abstractmethod
    def mount(self, device_path: str) -> str:
        """Mount a device. Returns the mount point (may be empty if the tool does not report one)."""
        pass

    @abstractmethod
    def unmount(self, device_path: str, mount_point: str) -> None:
        """Unmount a device or mount point."""
        pass


class LinuxMounter(Mounter):
    """udisks2 first, then gio, for mounting; FUSE and umount fallbacks for unmounting."""

    def mount(self, device_path: str) -> str:
        result = self._runner.run(
            ["udisksctl", "mount", "-b", device_path, "--no-user-interaction"]
        )
        if result.ok:
            mount_point = parse_udisksctl_mount(result.stdout)
            logger.info(f"Mounted {device_path} at {mount_point} with udisksctl")
            return mount_point

        logger.info(f"udisksctl could not mount {device_path}, trying gio")
        result = self._runner.run(["gio", "mount", "-d", device_path])
        if result.ok:
            # gio does not report where it mounted the device
            logger.info(f"Mounted {device_path} with gio")
            return ""

        logger.error(f"No mount tool could mount {device_path}")
        raise MissingDependencyError(
            f"Could not mount {device_path}. Install udisks2 for automatic mounting."
        )

    def unmount(self, device_path: str, mount_point: str) -> None:
        if device_path.startswith("/dev/"):
            result = self._runner.run(
                ["udisksctl", "unmount", "-b", device_path, "--no-user-interaction"]
            )
            if result.ok:
                logger.info(f"Unmounted {device_path} with udisksctl")
                return

        if mount_point:
            # FUSE mounts (sshfs, rclone) need the user-space helper
            result = self._runner.run(["fusermount", "-u", mount_point])
            if result.missing:
                result = self._runner.run(["fusermount3", "-u", mount_point])
            if result.ok:
                logger.info(f"Unmounted {mount_point} with {result.program}")
                return

            result = self._runner.run(["umount", mount_point])
            if result.ok:
                logger.info(f"Unmounted {mount_point} with umount")
                return
            if not result.missing:
                logger.error(f"umount failed for {mount_point}: {result.error_message}")
                raise ExternalToolError("umount", result.error_message)

        raise MissingDependencyError(
            f"Could not unmount. Install udisks2 or use 'umount {mount_point}'."
        )


class MacOSMounter(Mounter):
    """diskutil for both directions."""

    def mount(self, device_path: str) -> str:
        result = self._runner.run(["diskutil", "mount", device_path])
        self._raise_on_failure(result)
        mount_point = parse_diskutil_mount(result.stdout)
        logger.info(f"Mounted {device_path} at {mount_point}")
        return mount_point

    def unmount(self, device_path: str, mount_point: str) -> None:
        target = mount_point or device_path
        result = self._runner.run(["diskutil", "unmount", target])
        self._raise_on_failure(result)
        logger.info(f"Unmounted {target}")

    @staticmethod
    def _raise_on_failure(result) -> None:
        if result.missing or result.timed_out:
            raise MissingDependencyError(f"Failed to run diskutil: {result.error_message}")
        if not result.ok:
            logger.error(f"diskutil failed: {result.error_message}")
            raise ExternalToolError("diskutil", result.error_message)


class WindowsMounter(Mounter):
    """Windows mounts and ejects local drives itself; nothing is run."""

    def mount(self, device_path: str) -> str:
        raise UnsupportedOperationError(
            "Mount not supported on Windows - drives are auto-mounted"
        )

    def unmount(self, device_path: str, mount_point: str) -> None:
        raise UnsupportedOperationError(
            "Unmount not supported on Windows - use system tray eject"
        )
