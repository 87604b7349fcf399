"""Platform factory: picks the enumerator and mounter variants for the host."""

import logging
from typing import Optional

from drivekit.config.settings import AppSettings
from drivekit.drives.enumerator import (
    DiskEnumerator,
    LinuxDiskEnumerator,
    MacOSDiskEnumerator,
    WindowsDiskEnumerator,
)
from drivekit.mount.mounter import LinuxMounter, MacOSMounter, Mounter, WindowsMounter
from drivekit.mount.network import NetworkMounter, PosixNetworkMounter, WindowsNetworkMounter
from drivekit.mount.shell import CommandRunner
from drivekit.platforms import LINUX, MACOS, WINDOWS, detect_platform

logger = logging.getLogger("drivekit.factory")


class PlatformFactory:
    """Creates platform-specific implementations of each capability."""

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
        platform_name: Optional[str] = None,
        runner: Optional[CommandRunner] = None,
    ):
        """
        Initialize the factory.

        Args:
            settings: Settings for timeouts and mount bases (defaults if None)
            platform_name: Force a platform (linux, macos, windows); detected if None
            runner: Command runner shared by every created component
        """
        self._settings = settings or AppSettings()
        self._platform_name = platform_name or detect_platform()
        self._runner = runner or CommandRunner(timeout=self._settings.command_timeout)
        logger.debug(f"Platform: {self._platform_name}")

    @property
    def platform_name(self) -> str:
        """Platform the created components target."""
        return self._platform_name

    @property
    def runner(self) -> CommandRunner:
        """Command runner handed to created components."""
        return self._runner

    def create_enumerator(self) -> DiskEnumerator:
        """Create the disk enumerator for this platform."""
        if self._platform_name == MACOS:
            return MacOSDiskEnumerator(runner=self._runner)
        elif self._platform_name == WINDOWS:
            return WindowsDiskEnumerator()
        return LinuxDiskEnumerator()

    def create_mounter(self) -> Mounter:
        """Create the local device mounter for this platform."""
        if self._platform_name == MACOS:
            return MacOSMounter(runner=self._runner)
        elif self._platform_name == WINDOWS:
            return WindowsMounter(runner=self._runner)
        return LinuxMounter(runner=self._runner)

    def create_network_mounter(self) -> NetworkMounter:
        """Create the network share mounter for this platform."""
        if self._platform_name == WINDOWS:
            return WindowsNetworkMounter(runner=self._runner)
        if self._platform_name == MACOS:
            return PosixNetworkMounter(
                mount_base=self._settings.macos_mount_base,
                runner=self._runner,
                is_macos=True,
            )
        return PosixNetworkMounter(
            mount_base=self._settings.linux_mount_base,
            runner=self._runner,
        )

    def supports_device_scan(self) -> bool:
        """True if unmounted removable devices can be listed (Linux only)."""
        return self._platform_name == LINUX
