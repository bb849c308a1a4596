"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/work_queue.py
Thread-safe, non-blocking queue of FileEntry candidates shared by the worker pool.
"""

import threading
from typing import Iterable, Optional

from flatdedup.core.models import FileEntry


class WorkQueue:
    """
    Hands out each entry to exactly one caller of pop().

    The queue is filled before the workers start and never refilled, so an empty
    queue means the work is done: pop() returns None instead of blocking.
    cancel() drains nothing but makes every later pop() report exhaustion.
    """

    def __init__(self, entries: Iterable[FileEntry] = ()):
        self._entries = list(entries)
        self._next = 0
        self._lock = threading.Lock()
        self._cancelled = threading.Event()

    def pop(self) -> Optional[FileEntry]:
        if self._cancelled.is_set():
            return None
        with self._lock:
            if self._next >= len(self._entries):
                return None
            entry = self._entries[self._next]
            self._next += 1
        return entry

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def dispatched(self) -> int:
        """How many entries have been handed out so far."""
        with self._lock:
            return self._next

    def __len__(self) -> int:
        """Total number of entries, dispatched or not."""
        return len(self._entries)
