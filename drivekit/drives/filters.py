"""Mount table filtering rules and naming helpers.

Decides which mount table entries are user-facing volumes on each
platform and how they are classified.
"""

from typing import List

# Kernel pseudo-filesystems with no backing storage (matched by prefix or substring)
VIRTUAL_FILESYSTEMS: List[str] = [
    "tmpfs",
    "cgroup",
    "cgroup2",
    "sysfs",
    "proc",
    "devtmpfs",
    "securityfs",
    "debugfs",
    "configfs",
    "fusectl",
    "mqueue",
    "hugetlbfs",
    "devpts",
    "bpf",
    "tracefs",
    "pstore",
    "efivarfs",
    "squashfs",
    "overlay",
    "fuse.portal",
    "portal",
    "autofs",
    "ramfs",
    "rpc_pipefs",
]

# Network filesystem types seen in the Linux mount table (exact match)
LINUX_NETWORK_FILESYSTEMS = frozenset({
    "nfs",
    "nfs4",
    "cifs",
    "smbfs",
    "fuse.sshfs",
    "fuse.rclone",
    "fuse.gvfsd-fuse",
})

# Any platform: the Linux set plus Apple Filing Protocol
NETWORK_FILESYSTEMS = LINUX_NETWORK_FILESYSTEMS | {"afpfs"}

# Mount point prefixes used by desktop automounters and admins
LINUX_USER_MOUNT_PREFIXES = ("/media/", "/mnt/", "/run/media/")

MACOS_SYSTEM_PREFIXES = ("/System/Volumes/", "/private/")


def is_virtual_filesystem(file_system: str) -> bool:
    """True if the filesystem type is a kernel pseudo-filesystem."""
    fs_lower = file_system.lower()
    return any(
        fs_lower.startswith(virtual_fs) or virtual_fs in fs_lower
        for virtual_fs in VIRTUAL_FILESYSTEMS
    )


def is_linux_network_filesystem(file_system: str) -> bool:
    """True if the filesystem type is a Linux network filesystem."""
    return file_system.lower() in LINUX_NETWORK_FILESYSTEMS


def is_network_filesystem(file_system: str) -> bool:
    """True if the filesystem type is a network filesystem on any platform."""
    return file_system.lower() in NETWORK_FILESYSTEMS


def should_skip_linux_mount(file_system: str, name: str, mount_point: str) -> bool:
    """
    Decide whether a Linux mount table entry is hidden from the drive list.

    Args:
        file_system: Filesystem type (e.g., "ext4", "tmpfs")
        name: Device name from the mount table (e.g., "/dev/sdb1", "none")
        mount_point: Where the filesystem is mounted

    Returns:
        True if the entry should be skipped
    """
    if is_virtual_filesystem(file_system):
        return True
    if name.lower() == "none":
        return True
    if mount_point.startswith("/dev/") and not mount_point.startswith("/dev/pts"):
        return True
    if mount_point == "/":
        return True

    is_user_mount = mount_point.startswith(LINUX_USER_MOUNT_PREFIXES)
    if is_user_mount or is_linux_network_filesystem(file_system):
        return False
    return True


def should_skip_macos_mount(mount_point: str) -> bool:
    """True if a macOS mount point is the system volume or one of its helpers."""
    if mount_point == "/":
        return True
    return mount_point.startswith(MACOS_SYSTEM_PREFIXES)


def windows_display_name(volume_label: str, mount_point: str, default: str = "Local Disk") -> str:
    """
    Build a Windows drive name such as "Data (D:)".

    Args:
        volume_label: Volume label, may be empty
        mount_point: Drive root (e.g., "D:\\")
        default: Label used when the volume has none

    Returns:
        Display name
    """
    letter = mount_point.rstrip("\\")
    label = volume_label or default
    return f"{label} ({letter})"
