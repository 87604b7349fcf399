"""Pytest configuration and shared fixtures for drivekit tests."""

from collections import namedtuple
from pathlib import Path
from typing import Dict, List, Optional

import pytest

from drivekit.mount.shell import CommandResult


# Same fields as psutil.disk_partitions() entries
Partition = namedtuple("Partition", ["device", "mountpoint", "fstype", "opts"])
DiskUsage = namedtuple("DiskUsage", ["total", "used", "free", "percent"])


class FakeRunner:
    """Scripted stand-in for CommandRunner.

    Responses are queued per program name; a program with no queued
    response behaves as if it were not installed.
    """

    def __init__(self):
        self.timeout = 30
        self.calls: List[List[str]] = []
        self.inputs: List[Optional[str]] = []
        self._responses: Dict[str, List[CommandResult]] = {}

    def respond(self, program: str, returncode: int = 0, stdout: str = "", stderr: str = "") -> "FakeRunner":
        """Queue a completed run for the next call of a program."""
        self._responses.setdefault(program, []).append(
            CommandResult(args=[program], returncode=returncode, stdout=stdout, stderr=stderr)
        )
        return self

    def missing(self, program: str) -> "FakeRunner":
        """Queue a 'not installed' result for the next call of a program."""
        self._responses.setdefault(program, []).append(
            CommandResult(args=[program], missing=True)
        )
        return self

    def run(self, args, input_text=None, secrets=()):
        self.calls.append(list(args))
        self.inputs.append(input_text)
        queue = self._responses.get(args[0])
        if queue:
            result = queue.pop(0)
            result.args = list(args)
            return result
        return CommandResult(args=list(args), missing=True)

    def programs(self) -> List[str]:
        """Program names in call order."""
        return [call[0] for call in self.calls]


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Provide a scripted command runner."""
    return FakeRunner()


@pytest.fixture
def sample_directory(tmp_path: Path) -> Path:
    """Create a directory with one 10-byte file and a subdirectory of 3 entries."""
    (tmp_path / "notes.txt").write_bytes(b"0123456789")
    photos = tmp_path / "Photos"
    photos.mkdir()
    for name in ("a.jpg", "b.jpg", "c.png"):
        (photos / name).write_bytes(b"x")
    return tmp_path


def make_block_device(
    sys_block: Path,
    name: str,
    removable: str = "0",
    partitions: Optional[Dict[str, int]] = None,
    size: int = 0,
) -> Path:
    """Build a fake /sys/block/<name> tree."""
    device = sys_block / name
    device.mkdir(parents=True)
    (device / "removable").write_text(f"{removable}\n")
    (device / "size").write_text(f"{size}\n")
    for partition_name, sectors in (partitions or {}).items():
        partition = device / partition_name
        partition.mkdir()
        (partition / "partition").write_text("1\n")
        (partition / "size").write_text(f"{sectors}\n")
    return device


@pytest.fixture
def block_device_factory():
    """Provide the fake sysfs builder."""
    return make_block_device
