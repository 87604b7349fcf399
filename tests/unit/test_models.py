"""Unit tests for drivekit data models."""

import pytest

from drivekit.models import (
    DriveAccumulator,
    DriveRecord,
    DriveType,
    NetworkShareRequest,
    compute_usage,
)


def _record(path, name="Disk", total=100, available=40):
    return DriveRecord.from_capacity(
        name=name,
        path=path,
        mount_point=path,
        file_system="ext4",
        drive_type=DriveType.SSD,
        total_space=total,
        available_space=available,
    )


class TestComputeUsage:
    """Test compute_usage() derived fields."""

    def test_used_and_percent(self):
        assert compute_usage(1000, 250) == (750, 75.0)

    def test_percent_is_rounded(self):
        """Should round to a whole percentage."""
        used, percent = compute_usage(3, 2)
        assert used == 1
        assert percent == 33.0

    def test_zero_total(self):
        """Should report zero usage for an unsized volume."""
        assert compute_usage(0, 0) == (0, 0.0)

    def test_available_above_total(self):
        """Used space should never go negative."""
        used, percent = compute_usage(100, 150)
        assert used == 0
        assert percent == 0.0


class TestDriveRecord:
    """Test DriveRecord construction and serialization."""

    def test_from_capacity_derives_usage(self):
        record = _record("/media/usb", total=200, available=50)

        assert record.used_space == 150
        assert record.percent_used == 75.0
        assert record.used_space <= record.total_space
        assert 0.0 <= record.percent_used <= 100.0

    def test_to_dict_uses_type_value(self):
        """Should serialize the drive type as its string value."""
        record = DriveRecord(
            name="nas",
            path="/mnt/nas",
            mount_point="/mnt/nas",
            file_system="nfs4",
            drive_type=DriveType.NETWORK,
        )

        data = record.to_dict()

        assert data["drive_type"] == "Network"
        assert data["is_mounted"] is True


class TestNetworkShareRequest:
    """Test NetworkShareRequest helpers."""

    def test_from_dict_ignores_unknown_keys(self):
        request = NetworkShareRequest.from_dict({
            "protocol": "sshfs",
            "host": "example.com",
            "remote_path": "/home",
            "mount_name": "box",
            "port": "2222",
            "extra": "ignored",
        })

        assert request.port == 2222
        assert request.username is None

    def test_credential_key(self):
        request = NetworkShareRequest("smb", "nas", "media", "media", username="alice")
        assert request.credential_key == "smb://alice@nas"

    def test_password_hidden(self):
        """The password should appear in neither repr nor to_dict."""
        request = NetworkShareRequest("smb", "nas", "media", "media", password="s3cret")

        assert "s3cret" not in repr(request)
        assert "password" not in request.to_dict()

    def test_with_password_copies(self):
        request = NetworkShareRequest("smb", "nas", "media", "media", username="alice")

        updated = request.with_password("pw")

        assert updated.password == "pw"
        assert request.password is None
        assert updated.username == "alice"


class TestDriveAccumulator:
    """Test DriveAccumulator de-duplication."""

    def test_first_record_wins(self):
        """A second record with the same path should be rejected."""
        accumulator = DriveAccumulator()

        assert accumulator.add(_record("/mnt/a", name="first")) is True
        assert accumulator.add(_record("/mnt/a", name="second")) is False

        assert len(accumulator.drives) == 1
        assert accumulator.drives[0].name == "first"
        assert accumulator.contains("/mnt/a")

    def test_sorted_by_path(self):
        accumulator = DriveAccumulator()
        for path in ["/mnt/z", "/media/usb", "/mnt/a"]:
            accumulator.add(_record(path))

        assert [d.path for d in accumulator.sorted_drives()] == ["/media/usb", "/mnt/a", "/mnt/z"]

    @pytest.mark.parametrize("path", ["/mnt/x", "C:/"])
    def test_seen_paths_tracks_records(self, path):
        accumulator = DriveAccumulator()
        accumulator.add(_record(path))

        assert accumulator.seen_paths == {path}
