"""Unit tests for platform detection and the platform factory."""

from unittest.mock import patch

import pytest

from drivekit.config.settings import AppSettings
from drivekit.drives.enumerator import (
    LinuxDiskEnumerator,
    MacOSDiskEnumerator,
    WindowsDiskEnumerator,
)
from drivekit.exceptions import UnsupportedPlatformError
from drivekit.mount.factory import PlatformFactory
from drivekit.mount.mounter import LinuxMounter, MacOSMounter, WindowsMounter
from drivekit.mount.network import PosixNetworkMounter, WindowsNetworkMounter
from drivekit.platforms import LINUX, MACOS, WINDOWS, detect_platform


class TestDetectPlatform:
    """Test detect_platform() mapping."""

    @pytest.mark.parametrize("system,expected", [
        ("Linux", LINUX),
        ("Darwin", MACOS),
        ("Windows", WINDOWS),
    ])
    @patch("drivekit.platforms.platform.system")
    def test_known_systems(self, mock_system, system, expected):
        mock_system.return_value = system
        assert detect_platform() == expected

    @patch("drivekit.platforms.platform.system", return_value="SunOS")
    def test_unknown_system(self, mock_system):
        with pytest.raises(UnsupportedPlatformError, match="sunos"):
            detect_platform()


class TestPlatformFactory:
    """Test PlatformFactory variant selection."""

    def test_linux(self, fake_runner):
        factory = PlatformFactory(platform_name=LINUX, runner=fake_runner)

        assert isinstance(factory.create_enumerator(), LinuxDiskEnumerator)
        assert isinstance(factory.create_mounter(), LinuxMounter)
        network = factory.create_network_mounter()
        assert isinstance(network, PosixNetworkMounter)
        assert network.mount_base == "/mnt"
        assert factory.supports_device_scan() is True

    def test_macos(self, fake_runner):
        factory = PlatformFactory(platform_name=MACOS, runner=fake_runner)

        assert isinstance(factory.create_enumerator(), MacOSDiskEnumerator)
        assert isinstance(factory.create_mounter(), MacOSMounter)
        assert factory.create_network_mounter().mount_base == "/Volumes"
        assert factory.supports_device_scan() is False

    def test_windows(self, fake_runner):
        factory = PlatformFactory(platform_name=WINDOWS, runner=fake_runner)

        assert isinstance(factory.create_enumerator(), WindowsDiskEnumerator)
        assert isinstance(factory.create_mounter(), WindowsMounter)
        assert isinstance(factory.create_network_mounter(), WindowsNetworkMounter)
        assert factory.supports_device_scan() is False

    def test_settings_control_runner_and_mount_base(self):
        settings = AppSettings(command_timeout=120, linux_mount_base="/srv/shares")

        factory = PlatformFactory(settings=settings, platform_name=LINUX)

        assert factory.runner.timeout == 120
        assert factory.create_network_mounter().mount_base == "/srv/shares"

    @patch("drivekit.mount.factory.detect_platform", return_value=MACOS)
    def test_detects_platform(self, mock_detect, fake_runner):
        factory = PlatformFactory(runner=fake_runner)

        assert factory.platform_name == MACOS
        mock_detect.assert_called_once()
