"""DriveService: the boundary every caller (CLI, GUI, IPC) goes through.

Wires the platform variants together and exposes one method per
operation. Every call performs fresh OS queries; nothing is cached.
"""

import logging
from typing import List, Optional

from drivekit.config.credentials import ShareCredentialStore
from drivekit.config.settings import AppSettings
from drivekit.drives.devices import MountableDeviceScanner
from drivekit.fs import metadata, paths
from drivekit.models import (
    DirectoryListing,
    DriveRecord,
    MountableDeviceRecord,
    NetworkShareRequest,
)
from drivekit.mount.factory import PlatformFactory

logger = logging.getLogger("drivekit.service")


class DriveService:
    """Volume enumeration and mount orchestration for one host."""

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
        factory: Optional[PlatformFactory] = None,
        credentials: Optional[ShareCredentialStore] = None,
    ):
        """
        Initialize the service.

        Args:
            settings: Settings (defaults if None)
            factory: Platform factory; built from settings if None
            credentials: Keyring-backed password store for shares
        """
        self._settings = settings or AppSettings()
        self._factory = factory or PlatformFactory(settings=self._settings)
        self._credentials = credentials or ShareCredentialStore()
        self._enumerator = self._factory.create_enumerator()
        self._mounter = self._factory.create_mounter()
        self._network_mounter = self._factory.create_network_mounter()

    @property
    def platform_name(self) -> str:
        """Platform this service targets."""
        return self._factory.platform_name

    def list_directory(self, path: str) -> DirectoryListing:
        """List the immediate children of a directory."""
        return metadata.list_directory(path)

    def list_drives(self) -> List[DriveRecord]:
        """List mounted volumes, sorted by normalized path."""
        return self._enumerator.list_drives()

    def list_mountable_devices(self) -> List[MountableDeviceRecord]:
        """List unmounted removable partitions (always empty off Linux)."""
        if not self._factory.supports_device_scan():
            return []
        return MountableDeviceScanner(runner=self._factory.runner).scan()

    def mount(self, device_path: str) -> str:
        """Mount a local device and return its mount point."""
        logger.info(f"Mount requested for {device_path}")
        return self._mounter.mount(device_path)

    def unmount(self, device_path: str, mount_point: str = "") -> None:
        """Unmount a local device or a mount point."""
        logger.info(f"Unmount requested for {device_path or mount_point}")
        self._mounter.unmount(device_path, mount_point)

    def mount_network_share(
        self,
        request: NetworkShareRequest,
        remember_password: bool = False
    ) -> str:
        """
        Mount a network share.

        A request with a username but no password uses the password saved
        in the keyring for that share, if any.

        Args:
            request: Share parameters
            remember_password: Save the request's password after a successful mount

        Returns:
            Local mount point (drive letter on Windows)
        """
        if request.username and request.password is None:
            saved = self._credentials.get_password(request)
            if saved is not None:
                logger.debug(f"Using saved password for {request.credential_key}")
                request = request.with_password(saved)

        mount_point = self._network_mounter.mount_share(request)

        if remember_password and request.password is not None:
            if not self._credentials.save_password(request, request.password):
                logger.warning(f"Could not save password for {request.credential_key}")

        return mount_point

    def forget_password(self, request: NetworkShareRequest) -> bool:
        """
        Remove the keyring password saved for a share.

        Args:
            request: Share whose protocol, username and host identify the entry

        Returns:
            True if a saved password was removed, False if there was none
        """
        if not self._credentials.has_password(request):
            logger.debug(f"No saved password for {request.credential_key}")
            return False
        logger.info(f"Forgetting saved password for {request.credential_key}")
        return self._credentials.delete_password(request)

    def parent_of(self, path: str) -> Optional[str]:
        """Normalized parent directory, None for a root."""
        return paths.parent_of(path)

    def exists(self, path: str) -> bool:
        """True if the path exists."""
        return paths.exists(path)
