"""Configuration module for drivekit.

This module handles settings and credentials:
- SettingsManager: JSON-based settings persistence
- AppSettings: Settings dataclass
- ShareCredentialStore: Share passwords via keyring
- Paths: Config and log directory discovery
"""
