"""
flatdedup: multi-threaded duplicate file remover for a single directory.

Core features:
- Non-recursive scan; symlinks, directories and special files are never touched
- Size pre-filter, then full-content fingerprints (xxHash3-128 or BLAKE2b-128) on N threads
- Deterministic survivor per duplicate group (first file name by default)
- Permanent deletion, or safe deletion to system trash (via send2trash)
"""

from importlib.metadata import version as _version, PackageNotFoundError

try:
    __version__ = _version("flatdedup")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Public API: only what users should import directly
from flatdedup.commands import DeduplicationCommand
from flatdedup.core import (
    DeduplicationParams, SortOrder, HashAlgorithmName, FileEntry, DuplicateGroup, RunResult,
    ScanError, ReadError, DeleteError)
from flatdedup.services.file_service import FileService

__all__ = [
    "DeduplicationCommand",
    "DeduplicationParams",
    "SortOrder",
    "HashAlgorithmName",
    "FileEntry",
    "DuplicateGroup",
    "RunResult",
    "ScanError",
    "ReadError",
    "DeleteError",
    "FileService",
    "__version__",
]
