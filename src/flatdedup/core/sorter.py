"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/sorter.py
Pure ordering logic for duplicate groups, zero dependencies outside core.
The first file after sorting is the survivor.
"""
from typing import List, Callable, Any

from flatdedup.core.models import FileEntry, SortOrder


class _Reversed:
    """Inverts comparison of a wrapped value (for descending string keys)."""
    __slots__ = ("value",)

    def __init__(self, value):
        self.value = value

    def __lt__(self, other):
        return self.value > other.value

    def __eq__(self, other):
        return self.value == other.value


class Sorter:
    """
    Orders files inside a duplicate group.
    Sorting priority (applied lexicographically):
    1. Primary criterion depends on sort_order: name, or modification time
    2. File name, then full path, resolves remaining ties
    """

    @staticmethod
    def key_for(sort_order: SortOrder) -> Callable[[FileEntry], Any]:
        if sort_order == SortOrder.NAME_DESC:
            return lambda f: (_Reversed(f.name), _Reversed(f.path))
        if sort_order == SortOrder.OLDEST:
            return lambda f: (f.mtime, f.name, f.path)
        if sort_order == SortOrder.NEWEST:
            return lambda f: (-f.mtime, f.name, f.path)
        return lambda f: (f.name, f.path)

    @staticmethod
    def sort_files(files: List[FileEntry], sort_order: SortOrder = SortOrder.NAME) -> List[FileEntry]:
        return sorted(files, key=Sorter.key_for(sort_order))
