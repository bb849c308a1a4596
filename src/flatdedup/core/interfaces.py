"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the deduplication engine.

Key Components:
---------------
- HashState / HashAlgorithm: incremental digest objects and their factories (xxHash, BLAKE2b).
- Hasher: computes the full-content fingerprint of one FileEntry.
- FileScanner: lists one directory and returns FileEntry candidates.
- FileRemover: removes one file from disk (unlink or trash).
"""

from typing import Protocol, List, Optional, Callable
from flatdedup.core.models import FileEntry


class HashState(Protocol):
    """Incremental digest object (hashlib/xxhash style)."""
    def update(self, data: bytes) -> None: ...
    def digest(self) -> bytes: ...


class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in different hashing functions without affecting the rest
    of the deduplication logic. Digests must have a fixed length.
    """
    name: str
    digest_size: int

    def new(self) -> HashState:
        """Returns a fresh incremental hash object."""
        ...


class Hasher(Protocol):
    """Interface for fingerprinting the complete content of a file."""
    def compute_fingerprint(self, entry: FileEntry) -> bytes: ...


class FileScanner(Protocol):
    """
    Interface for listing a directory and collecting file metadata.
    """
    def scan(
        self,
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[FileEntry]:
        """
        Scan files from the configured directory.

        Raises:
            ScanError: if the directory cannot be opened or listed.
        """
        ...


class FileRemover(Protocol):
    """Removes a single file. Raises OSError (or DeleteError) on failure."""
    def __call__(self, path: str) -> None: ...
