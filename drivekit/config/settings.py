"""Settings management for drivekit.

Provides AppSettings dataclass and SettingsManager for persistence.
"""

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

from drivekit.config.paths import get_settings_path
from drivekit.mount.network import LINUX_MOUNT_BASE, MACOS_MOUNT_BASE
from drivekit.mount.shell import DEFAULT_TIMEOUT
from drivekit.utils.validators import validate_timeout


@dataclass
class AppSettings:
    """Settings that persist between runs."""

    # External tool behavior
    command_timeout: int = DEFAULT_TIMEOUT

    # Network share mount point bases
    linux_mount_base: str = LINUX_MOUNT_BASE
    macos_mount_base: str = MACOS_MOUNT_BASE

    # Logging
    log_level: str = "INFO"
    log_to_file: bool = False

    def to_dict(self) -> dict:
        """Convert settings to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "AppSettings":
        """Create settings from dictionary, ignoring unknown keys."""
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        settings = cls(**filtered)

        # An out-of-range timeout falls back to the default
        is_valid, _ = validate_timeout(settings.command_timeout)
        if not is_valid:
            settings.command_timeout = DEFAULT_TIMEOUT
        else:
            settings.command_timeout = int(settings.command_timeout)
        return settings

    @property
    def log_level_value(self) -> int:
        """Numeric logging level; INFO for unrecognized names."""
        level = logging.getLevelName(str(self.log_level).upper())
        return level if isinstance(level, int) else logging.INFO


class SettingsManager:
    """Manages settings persistence."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize settings manager.

        Args:
            config_path: Optional custom path, defaults to platform standard
        """
        self._config_path = config_path
        self._settings: Optional[AppSettings] = None

    @property
    def config_path(self) -> Path:
        """Path to settings file."""
        if self._config_path is None:
            self._config_path = get_settings_path()
        return self._config_path

    def load(self) -> AppSettings:
        """
        Load settings from disk.

        Returns:
            AppSettings instance (defaults if file not found)
        """
        if self.config_path.exists():
            try:
                with open(self.config_path, "r", encoding="utf-8") as f:
                    data = json.load(f)
                self._settings = AppSettings.from_dict(data)
            except (json.JSONDecodeError, IOError, TypeError, AttributeError):
                # Invalid or unreadable file, use defaults
                self._settings = AppSettings()
        else:
            self._settings = AppSettings()

        return self._settings

    def save(self, settings: AppSettings) -> None:
        """
        Persist settings to disk.

        Args:
            settings: Settings to save
        """
        self._settings = settings

        # Ensure parent directory exists
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.config_path, "w", encoding="utf-8") as f:
            json.dump(settings.to_dict(), f, indent=2)

    def reset(self) -> AppSettings:
        """
        Reset to default settings.

        Returns:
            Default AppSettings instance
        """
        self._settings = AppSettings()

        # Remove existing file
        if self.config_path.exists():
            self.config_path.unlink()

        return self._settings

    def update(self, **kwargs) -> AppSettings:
        """
        Update specific settings fields.

        Args:
            **kwargs: Field names and new values

        Returns:
            Updated AppSettings instance
        """
        if self._settings is None:
            self.load()

        for key, value in kwargs.items():
            if hasattr(self._settings, key):
                setattr(self._settings, key, value)

        self.save(self._settings)
        return self._settings
