"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/table.py
Sharded (size, fingerprint) -> [FileEntry] mapping filled concurrently by the worker pool.

Each shard owns its own lock, and the shard is chosen from the digest bytes, so workers
inserting different fingerprints almost never wait on each other. Once the pool has
joined, the table is frozen and becomes read-only for resolution.
"""

import threading
from collections import defaultdict
from typing import Dict, Iterator, List, Tuple

from flatdedup.core.models import FileEntry

BucketKey = Tuple[int, bytes]

DEFAULT_SHARDS = 16


class _Shard:
    __slots__ = ("lock", "buckets")

    def __init__(self):
        self.lock = threading.Lock()
        self.buckets: Dict[BucketKey, List[FileEntry]] = defaultdict(list)


class FingerprintTable:
    def __init__(self, shard_count: int = DEFAULT_SHARDS):
        if shard_count < 1:
            raise ValueError("Shard count must be at least 1")
        self._shards = [_Shard() for _ in range(shard_count)]
        self._frozen = False

    def _shard_for(self, digest: bytes) -> _Shard:
        return self._shards[int.from_bytes(digest[:4], "big") % len(self._shards)]

    def insert(self, entry: FileEntry, digest: bytes) -> None:
        """Append `entry` to the bucket of (entry.size, digest). Safe to call from any thread."""
        if self._frozen:
            raise RuntimeError("Fingerprint table is frozen")
        shard = self._shard_for(digest)
        with shard.lock:
            shard.buckets[(entry.size, digest)].append(entry)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def buckets(self) -> Iterator[Tuple[BucketKey, List[FileEntry]]]:
        """All buckets, in no particular order. Only available once frozen."""
        if not self._frozen:
            raise RuntimeError("Fingerprint table must be frozen before it is read")
        for shard in self._shards:
            for key, entries in shard.buckets.items():
                yield key, list(entries)

    def __len__(self) -> int:
        """Number of distinct buckets."""
        return sum(len(shard.buckets) for shard in self._shards)

    def entry_count(self) -> int:
        return sum(len(entries) for shard in self._shards for entries in shard.buckets.values())
