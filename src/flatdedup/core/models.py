"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for flat-directory scanning, fingerprinting and deduplication.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Tuple, Union
import os
from enum import Enum


# =============================
# Enums
# =============================

class SortOrder(Enum):
    """
    Keep policy: decides which file of a duplicate group survives.
    Every order ends with a file name tie-break, so the survivor never depends on
    which worker happened to hash which file.
    """
    NAME = "name"
    NAME_DESC = "name-desc"
    OLDEST = "oldest"
    NEWEST = "newest"

    def __repr__(self) -> str:
        return self.value


class HashAlgorithmName(Enum):
    XXH128 = "xxh128"
    BLAKE2B = "blake2b"

    def __repr__(self) -> str:
        return self.value


class ErrorKind(str, Enum):
    READ = "read"
    DELETE = "delete"


class Stage(str, Enum):
    SCAN = "Directory scan"
    SIZE = "Size grouping"
    HASH = "Fingerprinting"
    RESOLVE = "Resolution"
    DELETE = "Deletion"


# ======================
#  Core Data Models
# ======================

FileId = Tuple[int, int]


@dataclass
class FileEntry:
    """
    A regular file found in the scanned directory.
    Metadata is captured once at listing time; only the fingerprint is filled in later,
    by the single worker that hashed the file.
    """
    path: str
    size: int  # in bytes
    device: int = 0
    inode: int = 0
    mtime: float = 0.0
    mtime_ns: Optional[int] = None
    name: Optional[str] = None
    fingerprint: Optional[bytes] = None

    def __post_init__(self):
        if self.name is None:
            self.name = os.path.basename(self.path)

    @property
    def file_id(self) -> FileId:
        """(device, inode) pair identifying the underlying file, not the name."""
        return self.device, self.inode

    def assign_fingerprint(self, digest: bytes) -> None:
        if not isinstance(digest, bytes):
            raise ValueError("Fingerprint must be bytes")
        if self.fingerprint is not None:
            raise RuntimeError(f"Fingerprint already assigned for {self.path}")
        self.fingerprint = digest

    @classmethod
    def from_stat(cls, path: str, st: os.stat_result) -> "FileEntry":
        return cls(
            path=path,
            size=st.st_size,
            device=st.st_dev,
            inode=st.st_ino,
            mtime=st.st_mtime,
            mtime_ns=st.st_mtime_ns,
        )

    def __repr__(self):
        return f"<FileEntry path={self.path}, size={self.size}>"


@dataclass
class DuplicateGroup:
    """
    Files sharing one (size, fingerprint) key, already ordered by the keep policy.
    The first file is the survivor; the rest are deletion candidates.
    """
    size: int
    fingerprint: bytes
    files: List[FileEntry]

    @property
    def duplicate_count(self) -> int:
        """How many files are in this group."""
        return len(self.files)

    @property
    def survivor(self) -> FileEntry:
        return self.files[0]

    @property
    def duplicates(self) -> List[FileEntry]:
        return self.files[1:]

    def is_duplicate(self) -> bool:
        """True if this group contains at least two files."""
        return self.duplicate_count >= 2

    def __repr__(self):
        return f"<DuplicateGroup size={self.size}, count={len(self.files)}>"


@dataclass
class FileError:
    """A recovered per-file failure: the file is left out, the run goes on."""
    path: str
    kind: ErrorKind
    message: str

    def __str__(self):
        return f"[{self.kind.value}] {self.path}: {self.message}"


@dataclass
class RunResult:
    """
    Outcome of one run. `groups_found` is what the CLI prints as "Entries".
    """
    groups_found: int = 0
    files_deleted: int = 0
    files_scanned: int = 0
    files_hashed: int = 0
    groups: List[DuplicateGroup] = field(default_factory=list)
    deleted_paths: List[str] = field(default_factory=list)
    failures: List[FileError] = field(default_factory=list)
    dry_run: bool = False
    cancelled: bool = False

    @property
    def read_failures(self) -> int:
        return sum(1 for f in self.failures if f.kind == ErrorKind.READ)

    @property
    def delete_failures(self) -> int:
        return sum(1 for f in self.failures if f.kind == ErrorKind.DELETE)

    @property
    def files_to_delete(self) -> List[str]:
        return [f.path for group in self.groups for f in group.duplicates]


class DeduplicationStats:
    """
    Statistics collected during the deduplication process.
    """
    def __init__(self):
        self.total_time: float = 0.0
        self.stage_stats: Dict[str, Dict[str, Union[int, float]]] = {}

    def update_stage(
            self,
            stage_name: str,
            groups_found: int,
            files_processed: int,
            duration: float
    ) -> None:
        if stage_name not in self.stage_stats:
            self.stage_stats[stage_name] = {
                "groups": 0,
                "files": 0,
                "time": 0.0
            }
        self.stage_stats[stage_name]["groups"] += groups_found
        self.stage_stats[stage_name]["files"] += files_processed
        self.stage_stats[stage_name]["time"] += duration

    def print_summary(self) -> str:
        lines = [
            "📊 Deduplication Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s\n",
            "Stage: GROUPS / FILES / TIME"
        ]

        for stage, data in self.stage_stats.items():
            lines.append(f"{stage}: {data['groups']} / {data['files']} / {data['time']:.3f}s")

        return "\n".join(lines)


"""
DTO for deduplication parameters with built-in validation.
Interface-agnostic: built by the CLI, usable directly as a library API.
"""

@dataclass
class DeduplicationParams:
    """Parameters for a deduplication run with validation."""
    root_dir: str
    cores: int = 1
    algorithm: HashAlgorithmName = HashAlgorithmName.XXH128
    sort_order: SortOrder = SortOrder.NAME
    dry_run: bool = False
    use_trash: bool = False
    skip_empty: bool = False

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_dir:
            raise ValueError("Root directory cannot be empty")

        if isinstance(self.cores, bool) or not isinstance(self.cores, int):
            raise ValueError(f"Worker count must be an integer, got {self.cores!r}")

        if self.cores < 1:
            raise ValueError("Worker count must be at least 1")

        if not isinstance(self.algorithm, HashAlgorithmName):
            self.algorithm = HashAlgorithmName(self.algorithm)

        if not isinstance(self.sort_order, SortOrder):
            self.sort_order = SortOrder(self.sort_order)
