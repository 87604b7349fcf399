"""Path constants and discovery for drivekit.

Defines the application data directories used for settings and logs.
"""

import os
import sys
from pathlib import Path

# Application name for config directories
APP_NAME = "drivekit"


def get_app_data_dir() -> Path:
    """
    Get the application data directory.

    Returns:
        Path to app data directory (created if not exists)

    Platform-specific locations:
        - Windows: %APPDATA%/drivekit
        - Linux: ~/.config/drivekit
        - macOS: ~/Library/Application Support/drivekit
    """
    if sys.platform == "win32":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))

    app_dir = base / APP_NAME
    app_dir.mkdir(parents=True, exist_ok=True)
    return app_dir


def get_settings_path() -> Path:
    """
    Get the path to the settings JSON file.

    Returns:
        Path to settings.json
    """
    return get_app_data_dir() / "settings.json"


def get_log_dir() -> Path:
    """
    Get the directory for log files.

    Returns:
        Path to logs directory (created if not exists)
    """
    log_dir = get_app_data_dir() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def get_log_file_path() -> Path:
    """
    Get the path to the main log file.

    Returns:
        Path to drivekit log file
    """
    return get_log_dir() / "drivekit.log"
