"""Unit tests for mount table filtering rules."""

import pytest

from drivekit.drives.filters import (
    is_linux_network_filesystem,
    is_network_filesystem,
    is_virtual_filesystem,
    should_skip_linux_mount,
    should_skip_macos_mount,
    windows_display_name,
)


class TestIsVirtualFilesystem:
    """Test is_virtual_filesystem() matching."""

    @pytest.mark.parametrize("fs", ["tmpfs", "cgroup2", "proc", "squashfs", "overlay", "fuse.portal"])
    def test_virtual(self, fs):
        assert is_virtual_filesystem(fs) is True

    def test_prefix_and_substring_match(self):
        """Should match names that start with or contain a virtual type."""
        assert is_virtual_filesystem("TMPFS") is True
        assert is_virtual_filesystem("fuse.squashfuse_ll.squashfs") is True

    @pytest.mark.parametrize("fs", ["ext4", "vfat", "ntfs", "apfs", "nfs4"])
    def test_real(self, fs):
        assert is_virtual_filesystem(fs) is False


class TestNetworkFilesystems:
    """Test network filesystem classification."""

    @pytest.mark.parametrize("fs", ["nfs", "nfs4", "cifs", "smbfs", "fuse.sshfs", "fuse.rclone", "fuse.gvfsd-fuse"])
    def test_linux_network(self, fs):
        assert is_linux_network_filesystem(fs) is True
        assert is_network_filesystem(fs) is True

    def test_afpfs_is_network_outside_linux_set(self):
        assert is_network_filesystem("afpfs") is True
        assert is_linux_network_filesystem("afpfs") is False

    def test_local_is_not_network(self):
        assert is_network_filesystem("ext4") is False


class TestShouldSkipLinuxMount:
    """Test should_skip_linux_mount() rules."""

    def test_tmpfs_never_listed(self):
        """A tmpfs under a user prefix is still skipped."""
        assert should_skip_linux_mount("tmpfs", "tmpfs", "/media/ramdisk") is True

    def test_none_device_skipped(self):
        assert should_skip_linux_mount("ext4", "none", "/mnt/x") is True

    def test_dev_mounts_skipped(self):
        assert should_skip_linux_mount("ext4", "/dev/sda1", "/dev/shm") is True

    def test_root_skipped(self):
        assert should_skip_linux_mount("ext4", "/dev/sda2", "/") is True

    @pytest.mark.parametrize("mount_point", ["/media/user/USB", "/mnt/backup", "/run/media/user/Disk"])
    def test_user_mounts_kept(self, mount_point):
        assert should_skip_linux_mount("vfat", "/dev/sdb1", mount_point) is False

    def test_network_anywhere_kept(self):
        """Network filesystems are kept outside the user prefixes."""
        assert should_skip_linux_mount("nfs4", "nas:/export", "/srv/nas") is False

    def test_other_local_mounts_skipped(self):
        assert should_skip_linux_mount("ext4", "/dev/sda3", "/home") is True
        assert should_skip_linux_mount("vfat", "/dev/sda1", "/boot/efi") is True


class TestShouldSkipMacosMount:
    """Test should_skip_macos_mount() rules."""

    @pytest.mark.parametrize("mount_point", ["/", "/System/Volumes/Data", "/private/var/vm"])
    def test_system_mounts(self, mount_point):
        assert should_skip_macos_mount(mount_point) is True

    def test_user_volume(self):
        assert should_skip_macos_mount("/Volumes/USB") is False


class TestWindowsDisplayName:
    """Test windows_display_name() formatting."""

    def test_with_label(self):
        assert windows_display_name("Data", "D:\\") == "Data (D:)"

    def test_default_label(self):
        assert windows_display_name("", "C:\\") == "Local Disk (C:)"

    def test_custom_default(self):
        assert windows_display_name("", "Z:\\", default="Network Drive") == "Network Drive (Z:)"
