"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/deleter.py
Deletion executor: removes every deletion candidate independently, recording failures.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from flatdedup.core.errors import DeleteError
from flatdedup.core.models import DuplicateGroup, ErrorKind, FileEntry, FileError
from flatdedup.core.interfaces import FileRemover
from flatdedup.services.file_service import FileService

logger = logging.getLogger(__name__)


@dataclass
class DeletionReport:
    deleted: List[str] = field(default_factory=list)
    failures: List[FileError] = field(default_factory=list)

    @property
    def deleted_count(self) -> int:
        return len(self.deleted)


class DeletionExecutor:
    """
    Deletes the duplicates of each group, never the survivor.

    Safety checks:
    - A group whose survivor is gone or was replaced keeps all its duplicates
    - Each duplicate is re-checked (device, inode, size, mtime) right before removal
    """

    def __init__(self, remover: Optional[FileRemover] = None, dry_run: bool = False):
        self.remover = remover or FileService.delete_file
        self.dry_run = dry_run

    @classmethod
    def for_trash(cls, dry_run: bool = False) -> "DeletionExecutor":
        return cls(remover=FileService.move_to_trash, dry_run=dry_run)

    def execute(
            self,
            groups: List[DuplicateGroup],
            progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> DeletionReport:
        report = DeletionReport()
        if self.dry_run:
            logger.debug("Dry run: nothing will be deleted")
            return report

        total = sum(len(g.duplicates) for g in groups)
        done = 0
        for group in groups:
            survivor_ok = FileService.is_same_file(group.survivor)
            if not survivor_ok:
                logger.warning(f"Survivor missing or changed, keeping its duplicates: {group.survivor.path}")

            for entry in group.duplicates:
                try:
                    if not survivor_ok:
                        raise DeleteError(
                            f"Survivor {group.survivor.path} is missing or changed; kept {entry.path}", entry.path
                        )
                    self._delete_one(entry)
                    report.deleted.append(entry.path)
                except DeleteError as e:
                    logger.warning(str(e))
                    report.failures.append(FileError(entry.path, ErrorKind.DELETE, str(e)))

                done += 1
                if progress_callback:
                    progress_callback("deleting", done, total)

        logger.debug(f"Deleted {report.deleted_count} files, {len(report.failures)} failures")
        return report

    def _delete_one(self, entry: FileEntry) -> None:
        if not FileService.is_same_file(entry):
            raise DeleteError(f"File vanished or changed since scan: {entry.path}", entry.path)
        try:
            self.remover(entry.path)
        except FileNotFoundError as e:
            raise DeleteError(f"File vanished: {entry.path}", entry.path) from e
        except PermissionError as e:
            raise DeleteError(f"Permission denied deleting {entry.path}", entry.path) from e
        except (OSError, RuntimeError) as e:
            raise DeleteError(f"Failed to delete {entry.path}: {e}", entry.path) from e
