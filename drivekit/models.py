"""Data models for drivekit.

Defines the value objects returned by directory listing, drive
enumeration, device scanning and network share mounting.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import List, Optional, Set, Tuple


class DriveType(Enum):
    """Coarse classification of a mounted volume."""
    HDD = "HDD"
    SSD = "SSD"
    NETWORK = "Network"
    UNKNOWN = "Unknown"


class ShareProtocol(Enum):
    """Transport used to mount a remote share."""
    SSHFS = "sshfs"
    NFS = "nfs"
    SMB = "smb"


@dataclass(frozen=True)
class DirectoryEntry:
    """Snapshot of a single filesystem entry."""
    name: str
    extension: Optional[str]
    path: str
    size: int = 0
    item_count: Optional[int] = None
    modified_time: int = 0
    accessed_time: int = 0
    created_time: int = 0
    mime: Optional[str] = None
    is_file: bool = False
    is_dir: bool = False
    is_symlink: bool = False
    is_hidden: bool = False

    @property
    def sort_key(self) -> Tuple[bool, str]:
        """Directories first, then case-insensitive name."""
        return (not self.is_dir, self.name.lower())

    def to_dict(self) -> dict:
        """Convert entry to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class DirectoryListing:
    """Immediate children of a directory with precomputed counts."""
    path: str
    entries: Tuple[DirectoryEntry, ...] = ()
    total_count: int = 0
    dir_count: int = 0
    file_count: int = 0

    @classmethod
    def from_entries(cls, path: str, entries: List[DirectoryEntry]) -> "DirectoryListing":
        """
        Build a sorted listing and its counts from unordered entries.

        Args:
            path: Normalized path of the listed directory
            entries: Probed child entries in any order

        Returns:
            DirectoryListing instance
        """
        ordered = tuple(sorted(entries, key=lambda entry: entry.sort_key))
        dir_count = sum(1 for entry in ordered if entry.is_dir)
        file_count = sum(1 for entry in ordered if entry.is_file)
        return cls(
            path=path,
            entries=ordered,
            total_count=dir_count + file_count,
            dir_count=dir_count,
            file_count=file_count,
        )

    def to_dict(self) -> dict:
        """Convert listing to dictionary."""
        return {
            "path": self.path,
            "entries": [entry.to_dict() for entry in self.entries],
            "total_count": self.total_count,
            "dir_count": self.dir_count,
            "file_count": self.file_count,
        }


def compute_usage(total_space: int, available_space: int) -> Tuple[int, float]:
    """
    Derive used bytes and rounded percentage from capacity figures.

    Args:
        total_space: Volume capacity in bytes
        available_space: Bytes available to the caller

    Returns:
        Tuple of (used_space, percent_used)
    """
    used_space = max(total_space - available_space, 0)
    if total_space > 0:
        percent_used = float(round(used_space / total_space * 100))
    else:
        percent_used = 0.0
    return used_space, percent_used


@dataclass(frozen=True)
class DriveRecord:
    """A mounted volume as seen by the caller."""
    name: str
    path: str
    mount_point: str
    file_system: str
    drive_type: DriveType
    total_space: int = 0
    available_space: int = 0
    used_space: int = 0
    percent_used: float = 0.0
    is_removable: bool = False
    is_read_only: bool = False
    is_mounted: bool = True
    device_path: str = ""

    @classmethod
    def from_capacity(
        cls,
        name: str,
        path: str,
        mount_point: str,
        file_system: str,
        drive_type: DriveType,
        total_space: int,
        available_space: int,
        **flags
    ) -> "DriveRecord":
        """Create a record whose used/percent fields follow from capacity."""
        used_space, percent_used = compute_usage(total_space, available_space)
        return cls(
            name=name,
            path=path,
            mount_point=mount_point,
            file_system=file_system,
            drive_type=drive_type,
            total_space=total_space,
            available_space=available_space,
            used_space=used_space,
            percent_used=percent_used,
            **flags
        )

    def to_dict(self) -> dict:
        """Convert record to dictionary."""
        data = asdict(self)
        data["drive_type"] = self.drive_type.value
        return data


@dataclass(frozen=True)
class MountableDeviceRecord:
    """An unmounted removable partition that could be mounted."""
    name: str
    device_path: str
    file_system: str
    size: int = 0

    def to_dict(self) -> dict:
        """Convert record to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class NetworkShareRequest:
    """Parameters for mounting a remote share."""
    protocol: str
    host: str
    remote_path: str
    mount_name: str
    port: Optional[int] = None
    username: Optional[str] = None
    password: Optional[str] = field(default=None, repr=False)

    @classmethod
    def from_dict(cls, data: dict) -> "NetworkShareRequest":
        """Create request from dictionary, ignoring unknown keys."""
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        if filtered.get("port") is not None:
            filtered["port"] = int(filtered["port"])
        return cls(**filtered)

    @property
    def credential_key(self) -> str:
        """Key used to store this share's password in the keyring."""
        return f"{self.protocol}://{self.username or ''}@{self.host}"

    def with_password(self, password: Optional[str]) -> "NetworkShareRequest":
        """Return a copy carrying the given password."""
        return NetworkShareRequest(
            protocol=self.protocol,
            host=self.host,
            remote_path=self.remote_path,
            mount_name=self.mount_name,
            port=self.port,
            username=self.username,
            password=password,
        )

    def to_dict(self) -> dict:
        """Convert request to dictionary without the password."""
        data = asdict(self)
        data.pop("password")
        return data


@dataclass
class DriveAccumulator:
    """Drive records collected so far plus the normalized paths already emitted.

    Each enumeration stage receives the accumulator and returns it extended,
    so a volume discovered by two stages is only reported once.
    """
    drives: List[DriveRecord] = field(default_factory=list)
    seen_paths: Set[str] = field(default_factory=set)

    def contains(self, path: str) -> bool:
        """True if a record with this normalized path was already added."""
        return path in self.seen_paths

    def add(self, record: DriveRecord) -> bool:
        """
        Add a record unless its path was already emitted.

        Args:
            record: Candidate drive record

        Returns:
            True if the record was added, False if it was a duplicate
        """
        if record.path in self.seen_paths:
            return False
        self.seen_paths.add(record.path)
        self.drives.append(record)
        return True

    def sorted_drives(self) -> List[DriveRecord]:
        """Records ordered by normalized path."""
        return sorted(self.drives, key=lambda record: record.path)
