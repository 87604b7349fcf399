"""Unit tests for path normalization helpers."""

import pytest

from drivekit.fs.paths import exists, last_path_segment, normalize_path, parent_of


class TestNormalizePath:
    """Test normalize_path() canonicalization."""

    @pytest.mark.parametrize("raw,expected", [
        ("C:\\Users\\me\\", "C:/Users/me"),
        ("c:\\data", "C:/data"),
        ("c:", "C:/"),
        ("C:\\", "C:/"),
        ("/media//usb/", "/media/usb"),
        ("/", "/"),
        ("\\\\server\\share", "//server/share"),
        ("//server//share/dir/", "//server/share/dir"),
    ])
    def test_normalizes(self, raw, expected):
        """Should produce forward slashes, one separator, upper-case drive letter."""
        assert normalize_path(raw) == expected

    def test_empty_string_unchanged(self):
        """Should return an empty path as-is."""
        assert normalize_path("") == ""

    def test_idempotent(self):
        """Normalizing twice should equal normalizing once."""
        for raw in ["C:\\Users\\me\\", "/media//usb/", "\\\\nas\\share\\"]:
            once = normalize_path(raw)
            assert normalize_path(once) == once


class TestParentOf:
    """Test parent_of() navigation."""

    def test_nested_path(self):
        """Should return the normalized parent directory."""
        assert parent_of("/home/user/docs") == "/home/user"

    def test_trailing_separator(self):
        """Should ignore a trailing separator."""
        assert parent_of("/home/user/") == "/home"

    def test_root_has_no_parent(self):
        """Should return None for the filesystem root."""
        assert parent_of("/") is None

    def test_empty_path(self):
        """Should return None for an empty path."""
        assert parent_of("") is None


class TestExists:
    """Test exists() helper."""

    def test_existing_path(self, tmp_path):
        """Should be True for a directory that exists."""
        assert exists(str(tmp_path)) is True

    def test_missing_path(self, tmp_path):
        """Should be False for a missing path."""
        assert exists(str(tmp_path / "missing")) is False

    def test_empty_path(self):
        """Should be False for an empty path."""
        assert exists("") is False


class TestLastPathSegment:
    """Test last_path_segment() naming helper."""

    def test_returns_last_segment(self):
        assert last_path_segment("/media/user/USB") == "USB"

    def test_ignores_trailing_slash(self):
        assert last_path_segment("/mnt/nas/") == "nas"

    def test_root_returns_input(self):
        assert last_path_segment("/") == "/"
