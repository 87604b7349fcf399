"""Exceptions for drivekit.

Custom exception hierarchy for volume enumeration and mount operations.
Every message is a readable sentence that can be shown to a user as-is.
"""

from typing import Optional


class DriveError(Exception):
    """Base exception for all drivekit errors."""

    def __init__(self, message: str, original_error: Exception = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message


class PathNotFoundError(DriveError):
    """Path or device does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Path does not exist: {path}")


class NotADirectoryPathError(DriveError):
    """Path exists but is not a directory."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Path is not a directory: {path}")


class UnsupportedOperationError(DriveError):
    """Operation is not available on this platform."""


class UnsupportedPlatformError(DriveError):
    """Host operating system is not one drivekit knows how to drive."""

    def __init__(self, system: str):
        self.system = system
        super().__init__(f"Platform {system} is not supported")


class MissingDependencyError(DriveError):
    """A required external tool is absent or every fallback failed."""


class ExternalToolError(DriveError):
    """An external tool ran but reported failure."""

    def __init__(self, tool: str, stderr: str, prefix: Optional[str] = None):
        self.tool = tool
        self.stderr = stderr.strip()
        message = f"{prefix}: {self.stderr}" if prefix else self.stderr
        if not message:
            message = f"{tool} failed"
        super().__init__(message)


class UnknownProtocolError(DriveError):
    """Network share protocol tag is not recognized."""

    def __init__(self, protocol: str):
        self.protocol = protocol
        super().__init__(f"Unknown protocol: {protocol}")


class MountPointError(DriveError):
    """Local mount point directory could not be created."""

    def __init__(self, path: str, original_error: Exception = None):
        self.path = path
        super().__init__("Failed to create mount point", original_error)


class InvalidRequestError(DriveError):
    """Network share request failed validation."""
