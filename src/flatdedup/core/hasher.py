"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements full-content fingerprinting of FileEntry objects with pluggable hash algorithms.

The file is streamed to EOF in fixed-size chunks, so the digest never depends on how the
OS splits reads. A file that was swapped, truncated or grown since it was listed raises
ReadError instead of producing a fingerprint.
"""

import os
import hashlib

import xxhash

from flatdedup.core.models import FileEntry, HashAlgorithmName
from flatdedup.core.errors import ReadError
from flatdedup.core.interfaces import Hasher, HashAlgorithm, HashState

READ_CHUNK_SIZE = 1024 * 1024


# Use the same way to implement and use any other hashing algorithm
class XXHashAlgorithmImpl(HashAlgorithm):
    name = "xxh128"
    digest_size = 16

    def new(self) -> HashState:
        return xxhash.xxh3_128()


class Blake2bAlgorithmImpl(HashAlgorithm):
    name = "blake2b"
    digest_size = 16

    def new(self) -> HashState:
        return hashlib.blake2b(digest_size=self.digest_size)


ALGORITHMS = {
    HashAlgorithmName.XXH128: XXHashAlgorithmImpl,
    HashAlgorithmName.BLAKE2B: Blake2bAlgorithmImpl,
}


def get_algorithm(name: HashAlgorithmName) -> HashAlgorithm:
    return ALGORITHMS[name]()


class HasherImpl(Hasher):
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.
    Holds no per-file state, so one instance is shared by every worker thread.
    """

    def __init__(self, algorithm: HashAlgorithm = None, chunk_size: int = READ_CHUNK_SIZE):
        self.algorithm = algorithm or XXHashAlgorithmImpl()
        self.chunk_size = chunk_size

    def compute_fingerprint(self, entry: FileEntry) -> bytes:
        """
        Digest of the full content of `entry`.

        Raises:
            ReadError: the file vanished, is unreadable, failed mid-read, is no longer
                the file that was listed, or its length differs from the listed size.
        """
        state = self.algorithm.new()
        total = 0
        try:
            with open(entry.path, 'rb') as f:
                st = os.fstat(f.fileno())
                if (st.st_dev, st.st_ino) != entry.file_id:
                    raise ReadError(f"File was replaced since scan: {entry.path}", entry.path)

                while True:
                    chunk = f.read(self.chunk_size)
                    if not chunk:
                        break
                    state.update(chunk)
                    total += len(chunk)
        except FileNotFoundError as e:
            raise ReadError(f"File vanished: {entry.path}", entry.path) from e
        except PermissionError as e:
            raise ReadError(f"Permission denied: {entry.path}", entry.path) from e
        except OSError as e:
            raise ReadError(f"I/O error reading {entry.path}: {e}", entry.path) from e

        if total != entry.size:
            raise ReadError(
                f"Size changed during read: {entry.path} (listed {entry.size}, read {total} bytes)",
                entry.path
            )

        return state.digest()
