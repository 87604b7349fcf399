"""Unit tests for the external command runner."""

import subprocess
import sys
from unittest.mock import MagicMock, patch

from drivekit.mount.shell import CommandResult, CommandRunner, redact_args


class TestCommandResult:
    """Test CommandResult properties."""

    def test_ok(self):
        assert CommandResult(args=["true"], returncode=0).ok is True
        assert CommandResult(args=["false"], returncode=1).ok is False
        assert CommandResult(args=["x"], missing=True).ok is False

    def test_error_message_prefers_stderr(self):
        result = CommandResult(args=["mount"], returncode=32, stderr="  access denied\n")
        assert result.error_message == "access denied"

    def test_error_message_fallbacks(self):
        assert CommandResult(args=["sshfs"], missing=True).error_message == "sshfs is not installed"
        assert CommandResult(args=["gio"], timed_out=True).error_message == "gio timed out"
        assert CommandResult(args=["umount"], returncode=2).error_message == "umount exited with status 2"


class TestRedactArgs:
    """Test redact_args() command line masking."""

    def test_masks_literal_secret(self):
        rendered = redact_args(["net", "use", "*", "\\\\nas\\media", "/user:bob", "hunter2"], ["hunter2"])

        assert "hunter2" not in rendered
        assert "[REDACTED]" in rendered

    def test_masks_password_option(self):
        rendered = redact_args(["mount", "-o", "username=bob,password=hunter2"])

        assert rendered == "mount -o username=bob,password=[REDACTED]"


class TestCommandRunner:
    """Test CommandRunner.run() with subprocess patched."""

    @patch("drivekit.mount.shell.subprocess.run")
    def test_success(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout="ok\n", stderr="")

        result = CommandRunner(timeout=12).run(["udisksctl", "status"], input_text="pw")

        assert result.ok
        assert result.stdout == "ok\n"
        mock_run.assert_called_once_with(
            ["udisksctl", "status"],
            input="pw",
            capture_output=True,
            encoding="utf-8",
            errors="replace",
            timeout=12,
        )

    @patch("drivekit.mount.shell.subprocess.run")
    def test_failure_keeps_stderr(self, mock_run):
        mock_run.return_value = MagicMock(returncode=1, stdout="", stderr="not authorized")

        result = CommandRunner().run(["udisksctl", "mount"])

        assert not result.ok
        assert result.returncode == 1
        assert result.error_message == "not authorized"

    @patch("drivekit.mount.shell.subprocess.run", side_effect=FileNotFoundError())
    def test_missing_executable(self, mock_run):
        result = CommandRunner().run(["sshfs", "a", "b"])

        assert result.missing is True
        assert result.ok is False

    @patch("drivekit.mount.shell.subprocess.run")
    def test_timeout(self, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="gio", timeout=5)

        result = CommandRunner(timeout=5).run(["gio", "mount", "smb://nas/x"])

        assert result.timed_out is True
        assert result.missing is False
        assert result.error_message == "gio timed out after 5 seconds"

    @patch("drivekit.mount.shell.subprocess.run", side_effect=PermissionError("denied"))
    def test_other_os_error(self, mock_run):
        result = CommandRunner().run(["mount"])

        assert result.missing is True
        assert result.error_message == "denied"

    def test_default_timeout(self):
        assert CommandRunner().timeout == 30

    def test_undecodable_output_is_replaced(self):
        """Latin-1 bytes from a real child process should not raise."""
        script = (
            "import sys; "
            "sys.stdout.buffer.write(b'Mounted /dev/sdb1 at /media/u/CL\\xe9.\\n'); "
            "sys.stderr.buffer.write(b'Der Befehl wurde ausgef\\x81hrt.\\n')"
        )

        result = CommandRunner(timeout=10).run([sys.executable, "-c", script])

        assert result.ok
        assert result.stdout == "Mounted /dev/sdb1 at /media/u/CL\ufffd.\n"
        assert "\ufffd" in result.stderr
