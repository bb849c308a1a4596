"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/resolver.py
Turns a frozen FingerprintTable into duplicate groups with one survivor each.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from flatdedup.core.models import DuplicateGroup, FileEntry, SortOrder
from flatdedup.core.sorter import Sorter
from flatdedup.core.table import FingerprintTable

logger = logging.getLogger(__name__)


@dataclass
class Resolution:
    groups: List[DuplicateGroup] = field(default_factory=list)

    @property
    def group_count(self) -> int:
        return len(self.groups)

    @property
    def candidates(self) -> List[FileEntry]:
        """Every file marked for deletion, group by group."""
        return [f for group in self.groups for f in group.duplicates]


class ResolutionPolicy:
    """
    For every bucket with two or more files: order by the keep policy, keep the first,
    mark the rest. Single-file buckets are unique content and are ignored.
    """

    def __init__(self, sort_order: SortOrder = SortOrder.NAME):
        self.sort_order = sort_order

    def resolve(self, table: FingerprintTable) -> Resolution:
        """
        Raises:
            RuntimeError: if the table is not frozen yet (workers may still be writing).
        """
        groups = []
        for (size, digest), entries in table.buckets():
            if len(entries) < 2:
                continue
            ordered = Sorter.sort_files(entries, self.sort_order)
            groups.append(DuplicateGroup(size=size, fingerprint=digest, files=ordered))

        groups.sort(key=lambda g: g.survivor.path)
        resolution = Resolution(groups=groups)
        logger.debug(f"Resolved {resolution.group_count} duplicate groups, "
                     f"{len(resolution.candidates)} files marked for deletion")
        return resolution
