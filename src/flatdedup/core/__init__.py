"""
Core deduplication engine: scanner, hasher, work queue, worker pool, fingerprint table,
and resolution policy.

This package contains the concurrency-critical foundation of flatdedup:
- FlatScannerImpl: non-recursive directory listing with an explicit entry policy
- HasherImpl + XXHashAlgorithmImpl / Blake2bAlgorithmImpl: streaming full-content fingerprints
- FileGrouperImpl: size pre-filter before hashing
- WorkQueue + WorkerPool: fan-out/fan-in hashing across N threads with a join barrier
- FingerprintTable: sharded, per-shard locked (size, digest) -> files mapping
- ResolutionPolicy + Sorter: deterministic survivor selection
- Models: FileEntry, DuplicateGroup, RunResult, and configuration objects

No GUI dependencies; suitable for CLI and library usage.
"""

from .errors import DeduplicationError, ScanError, ReadError, DeleteError
from .scanner import FlatScannerImpl
from .grouper import FileGrouperImpl
from .hasher import HasherImpl, XXHashAlgorithmImpl, Blake2bAlgorithmImpl, get_algorithm
from .work_queue import WorkQueue
from .pool import WorkerPool, PoolReport
from .table import FingerprintTable
from .resolver import ResolutionPolicy, Resolution
from .sorter import Sorter
from .models import (
    FileEntry, DuplicateGroup, FileError, ErrorKind, RunResult, DeduplicationParams,
    DeduplicationStats, SortOrder, HashAlgorithmName)

__all__ = [
    "DeduplicationError",
    "ScanError",
    "ReadError",
    "DeleteError",
    "FlatScannerImpl",
    "FileGrouperImpl",
    "HasherImpl",
    "XXHashAlgorithmImpl",
    "Blake2bAlgorithmImpl",
    "get_algorithm",
    "WorkQueue",
    "WorkerPool",
    "PoolReport",
    "FingerprintTable",
    "ResolutionPolicy",
    "Resolution",
    "Sorter",
    "FileEntry",
    "DuplicateGroup",
    "FileError",
    "ErrorKind",
    "RunResult",
    "DeduplicationParams",
    "DeduplicationStats",
    "SortOrder",
    "HashAlgorithmName",
]
