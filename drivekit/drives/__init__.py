"""Drive discovery module.

This module provides:
- Disk enumeration for Windows, macOS, and Linux
- Supplemental network volume scans
- Linux scan for unmounted removable devices
"""
