"""Host platform detection."""

import platform

from drivekit.exceptions import UnsupportedPlatformError

LINUX = "linux"
MACOS = "macos"
WINDOWS = "windows"


def detect_platform() -> str:
    """Detect current platform. Returns: macos, windows, or linux."""
    system = platform.system().lower()

    if system == "darwin":
        return MACOS
    elif system == "windows":
        return WINDOWS
    elif system == "linux":
        return LINUX
    else:
        raise UnsupportedPlatformError(system)
