"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Size-based pre-filter: files of different length can never be duplicates,
so only lengths shared by two or more files are worth hashing.
"""

from typing import List, Dict, Any, Callable
from collections import defaultdict
import logging

from flatdedup.core.models import FileEntry

logger = logging.getLogger(__name__)


class FileGrouperImpl:
    """Groups FileEntry objects by cheap metadata keys."""

    def group_by_size(self, files: List[FileEntry]) -> Dict[int, List[FileEntry]]:
        """Groups files by their size. Sizes held by a single file are dropped."""
        return self._group_by(files, lambda f: f.size)

    def hash_candidates(self, files: List[FileEntry]) -> List[FileEntry]:
        """Flattened size groups, in the input order."""
        groups = self.group_by_size(files)
        keep = {id(f) for group in groups.values() for f in group}
        candidates = [f for f in files if id(f) in keep]
        logger.debug(f"Size pre-filter: {len(candidates)} of {len(files)} files need hashing")
        return candidates

    @staticmethod
    def _group_by(files: List[FileEntry], key_func: Callable[[FileEntry], Any]) -> Dict[Any, List[FileEntry]]:
        """
        Helper method to group files by any computed key.
        Args:
            files: List of files to group
            key_func: Function that computes a hashable key from a FileEntry
        Returns:
            Dict[key, List[FileEntry]] with groups of at least two files
        """
        groups = defaultdict(list)
        for file in files:
            groups[key_func(file)].append(file)

        return {key: group for key, group in groups.items() if len(group) >= 2}
