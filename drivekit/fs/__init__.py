"""Filesystem helpers: path normalization, MIME lookup and directory listing."""

from drivekit.fs.metadata import list_directory, probe
from drivekit.fs.paths import exists, normalize_path, parent_of

__all__ = ["list_directory", "probe", "exists", "normalize_path", "parent_of"]
