"""Network share mounting over SSHFS, NFS and SMB.

On Linux and macOS a mount point directory is created under the platform
base, the protocol-specific mount routine runs, and the directory is
removed again if the mount fails and this call created it. On Windows only SMB is supported, via
drive-letter mapping.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Dict, Optional

from drivekit.exceptions import (
    DriveError,
    ExternalToolError,
    InvalidRequestError,
    MissingDependencyError,
    MountPointError,
    UnknownProtocolError,
)
from drivekit.models import NetworkShareRequest, ShareProtocol
from drivekit.mount.parsers import parse_net_use_drive
from drivekit.mount.shell import CommandResult, CommandRunner
from drivekit.utils.validators import ipv6_literal, validate_share_request

logger = logging.getLogger("drivekit.network_mount")

DEFAULT_SSH_USER = "root"
DEFAULT_SSH_PORT = 22

LINUX_MOUNT_BASE = "/mnt"
MACOS_MOUNT_BASE = "/Volumes"


def _uri_host(host: str) -> str:
    """Host as written in URIs and host:path sources; IPv6 goes in brackets."""
    address = ipv6_literal(host)
    return f"[{address}]" if address else host


def _unc_host(host: str) -> str:
    """Host as written in a Windows UNC path; IPv6 uses the ipv6-literal.net form."""
    address = ipv6_literal(host)
    if address is None:
        return host
    return address.replace(":", "-").replace("%", "s") + ".ipv6-literal.net"


def _check_request(request: NetworkShareRequest) -> None:
    is_valid, error = validate_share_request(request)
    if not is_valid:
        raise InvalidRequestError(error)


class NetworkMounter(ABC):
    """Abstract base class for platform-specific share mounting."""

    def __init__(self, runner: Optional[CommandRunner] = None):
        self._runner = runner or CommandRunner()

    @abstractmethod
    def mount_share(self, request: NetworkShareRequest) -> str:
        """Mount a share. Returns the local mount point or drive letter."""
        pass


class PosixNetworkMounter(NetworkMounter):
    """Linux and macOS share mounting into a directory under a base path."""

    def __init__(
        self,
        mount_base: str = LINUX_MOUNT_BASE,
        runner: Optional[CommandRunner] = None,
        is_macos: bool = False,
    ):
        """
        Initialize the mounter.

        Args:
            mount_base: Directory under which mount points are created
            runner: Command runner for mount tools
            is_macos: Use the macOS smbfs syntax for SMB shares
        """
        super().__init__(runner)
        self._mount_base = mount_base
        self._is_macos = is_macos
        self._handlers: Dict[str, Callable[[NetworkShareRequest, str], None]] = {
            ShareProtocol.SSHFS.value: self._mount_sshfs,
            ShareProtocol.NFS.value: self._mount_nfs,
            ShareProtocol.SMB.value: self._mount_smb,
        }

    @property
    def mount_base(self) -> str:
        """Base directory for new mount points."""
        return self._mount_base

    def mount_share(self, request: NetworkShareRequest) -> str:
        """
        Mount a share at <mount_base>/<mount_name>.

        Args:
            request: Share parameters

        Returns:
            Mount point path

        Raises:
            InvalidRequestError: If the request is malformed
            MountPointError: If the mount point cannot be created
            UnknownProtocolError: If the protocol tag is not recognized
            DriveError: If the protocol-specific mount fails
        """
        _check_request(request)

        mount_point = f"{self._mount_base.rstrip('/')}/{request.mount_name}"
        mount_dir = Path(mount_point)
        created = not mount_dir.exists()
        try:
            mount_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create mount point {mount_point}: {e}")
            raise MountPointError(mount_point, e)

        try:
            handler = self._handlers.get(request.protocol)
            if handler is None:
                raise UnknownProtocolError(request.protocol)
            logger.info(f"Mounting {request.protocol} share {request.host}:{request.remote_path} at {mount_point}")
            handler(request, mount_point)
        except DriveError:
            if created:
                self._remove_mount_point(mount_dir)
            raise

        logger.info(f"Mounted {request.protocol} share at {mount_point}")
        return mount_point

    def _remove_mount_point(self, mount_dir: Path) -> None:
        """Best-effort removal of the empty directory created for a failed mount."""
        try:
            mount_dir.rmdir()
            logger.debug(f"Removed mount point {mount_dir}")
        except OSError as e:
            logger.warning(f"Could not remove mount point {mount_dir}: {e}")

    def _mount_sshfs(self, request: NetworkShareRequest, mount_point: str) -> None:
        username = request.username or DEFAULT_SSH_USER
        port = request.port or DEFAULT_SSH_PORT
        source = f"{username}@{_uri_host(request.host)}:{request.remote_path}"

        args = [
            "sshfs", source, mount_point,
            "-p", str(port),
            "-o", "StrictHostKeyChecking=no",
            "-o", "reconnect",
            "-o", "ServerAliveInterval=15",
        ]
        if request.password is not None:
            # Password goes to stdin, never onto the command line
            args.extend(["-o", "password_stdin"])

        result = self._runner.run(args, input_text=request.password)
        if result.missing:
            raise MissingDependencyError(
                f"Failed to run sshfs: {result.error_message}. Is sshfs installed?"
            )
        if not result.ok:
            raise ExternalToolError("sshfs", result.error_message, prefix="sshfs failed")

    def _mount_nfs(self, request: NetworkShareRequest, mount_point: str) -> None:
        source = f"{_uri_host(request.host)}:{request.remote_path}"

        result = self._runner.run(["mount", "-t", "nfs4", source, mount_point])
        if result.ok:
            return

        logger.info(f"NFSv4 mount of {source} failed, trying NFSv3")
        result = self._runner.run(["mount", "-t", "nfs", "-o", "vers=3", source, mount_point])
        if result.ok:
            return
        self._raise_mount_failure(result, "NFS mount failed")

    def _mount_smb(self, request: NetworkShareRequest, mount_point: str) -> None:
        if self._is_macos:
            self._mount_smb_macos(request, mount_point)
        else:
            self._mount_smb_linux(request, mount_point)

    def _mount_smb_macos(self, request: NetworkShareRequest, mount_point: str) -> None:
        host = _uri_host(request.host)
        if request.username:
            source = f"//{request.username}@{host}/{request.remote_path}"
        else:
            source = f"//{host}/{request.remote_path}"

        result = self._runner.run(["mount", "-t", "smbfs", source, mount_point])
        if not result.ok:
            self._raise_mount_failure(result, "SMB mount failed")

    def _mount_smb_linux(self, request: NetworkShareRequest, mount_point: str) -> None:
        host = _uri_host(request.host)
        if request.username:
            gio_uri = f"smb://{request.username}@{host}/{request.remote_path}"
        else:
            gio_uri = f"smb://{host}/{request.remote_path}"

        result = self._runner.run(["gio", "mount", gio_uri])
        if result.ok:
            return

        logger.info(f"gio could not mount {gio_uri}, trying mount.cifs")
        if request.username and request.password is not None:
            options = f"username={request.username},password={request.password}"
        elif request.username:
            options = f"username={request.username}"
        else:
            options = "guest"

        source = f"//{host}/{request.remote_path}"
        result = self._runner.run(
            ["mount", "-t", "cifs", source, mount_point, "-o", options],
            secrets=[request.password or ""],
        )
        if not result.ok:
            self._raise_mount_failure(result, "SMB mount failed")

    @staticmethod
    def _raise_mount_failure(result: CommandResult, prefix: str) -> None:
        if result.missing:
            raise MissingDependencyError(f"Failed to run mount: {result.error_message}")
        raise ExternalToolError(result.program, result.error_message, prefix=prefix)


class WindowsNetworkMounter(NetworkMounter):
    """SMB via `net use`; SSHFS and NFS need software Windows lacks by default."""

    def mount_share(self, request: NetworkShareRequest) -> str:
        """
        Map a share to the next free drive letter.

        Args:
            request: Share parameters

        Returns:
            Assigned drive letter (e.g., "Z:")
        """
        _check_request(request)

        if request.protocol == ShareProtocol.SMB.value:
            return self._mount_smb(request)
        if request.protocol == ShareProtocol.SSHFS.value:
            raise MissingDependencyError(
                "SSHFS on Windows requires WinFSP and sshfs-win. "
                "Install from https://github.com/winfsp/sshfs-win"
            )
        if request.protocol == ShareProtocol.NFS.value:
            raise MissingDependencyError(
                "NFS on Windows requires 'Services for NFS' Windows feature to be enabled"
            )
        raise UnknownProtocolError(request.protocol)

    def _mount_smb(self, request: NetworkShareRequest) -> str:
        remote = request.remote_path.strip("/\\").replace("/", "\\")
        unc_path = f"\\\\{_unc_host(request.host)}\\{remote}"

        args = ["net", "use", "*", unc_path]
        if request.password is not None:
            args.extend([f"/user:{request.username or ''}", request.password])

        result = self._runner.run(args, secrets=[request.password or ""])
        if result.missing:
            raise MissingDependencyError(f"Failed to run 'net use': {result.error_message}")
        if not result.ok:
            raise ExternalToolError("net", result.error_message, prefix="net use failed")

        drive_letter = parse_net_use_drive(result.stdout)
        logger.info(f"Mapped {unc_path} to {drive_letter or 'a drive letter'}")
        return drive_letter
