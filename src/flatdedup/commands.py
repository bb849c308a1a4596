"""
Unified command orchestrator for deduplication.
This is the SINGLE source of truth for the run workflow, used by the CLI and library callers.
"""
import time
import logging
from typing import Optional, Callable, Tuple

from flatdedup.core.models import DeduplicationParams, DeduplicationStats, RunResult, Stage
from flatdedup.core.scanner import FlatScannerImpl
from flatdedup.core.grouper import FileGrouperImpl
from flatdedup.core.hasher import HasherImpl, get_algorithm
from flatdedup.core.work_queue import WorkQueue
from flatdedup.core.pool import WorkerPool
from flatdedup.core.table import FingerprintTable
from flatdedup.core.resolver import ResolutionPolicy
from flatdedup.services.deleter import DeletionExecutor

logger = logging.getLogger(__name__)


class DeduplicationCommand:
    """
    Orchestrates the entire deduplication workflow:
    1. List the directory (ScanError aborts here, before any work)
    2. Drop files whose size is unique
    3. Fingerprint the rest on `params.cores` threads, then join
    4. Resolve one survivor per group
    5. Delete (or trash, or only plan) the other files

    Usage:
        params = DeduplicationParams(root_dir="/data/inbox", cores=8)
        result, stats = DeduplicationCommand().execute(params)
        print(f"Entries: {result.groups_found}")
    """

    def __init__(self, grouper: FileGrouperImpl = None):
        self._grouper = grouper or FileGrouperImpl()

    def execute(
            self,
            params: DeduplicationParams,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None,
            stopped_flag: Optional[Callable[[], bool]] = None
    ) -> Tuple[RunResult, DeduplicationStats]:
        """
        Execute deduplication with given parameters.

        Args:
            params: Validated deduplication parameters
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None
            stopped_flag: () -> bool (returns True if operation should stop)

        Returns:
            Tuple of (run result, statistics). A cancelled run has result.cancelled set
            and deletes nothing.

        Raises:
            ScanError: If the directory cannot be listed
        """
        stats = DeduplicationStats()
        total_start = time.time()
        result = RunResult(dry_run=params.dry_run)

        # Step 1: list the directory
        start = time.time()
        scanner = FlatScannerImpl(params.root_dir, skip_empty=params.skip_empty)
        entries = scanner.scan(stopped_flag=stopped_flag, progress_callback=progress_callback)
        result.files_scanned = len(entries)
        stats.update_stage(Stage.SCAN.value, 0, len(entries), time.time() - start)

        # Step 2: size pre-filter
        start = time.time()
        candidates = self._grouper.hash_candidates(entries)
        size_groups = len(self._grouper.group_by_size(candidates))
        stats.update_stage(Stage.SIZE.value, size_groups, len(candidates), time.time() - start)

        # Step 3: parallel fingerprinting, joined before anything reads the table
        start = time.time()
        table = FingerprintTable()
        pool = WorkerPool(params.cores, HasherImpl(get_algorithm(params.algorithm)))
        pool_report = pool.run(
            WorkQueue(candidates),
            table,
            stopped_flag=stopped_flag,
            progress_callback=progress_callback
        )
        table.freeze()
        result.files_hashed = pool_report.hashed
        result.failures.extend(pool_report.failures)
        stats.update_stage(Stage.HASH.value, len(table), pool_report.hashed, time.time() - start)

        if pool_report.cancelled or (stopped_flag and stopped_flag()):
            logger.warning("Run cancelled before resolution; nothing was deleted")
            result.cancelled = True
            stats.total_time = time.time() - total_start
            return result, stats

        # Step 4: one survivor per group
        start = time.time()
        resolution = ResolutionPolicy(params.sort_order).resolve(table)
        result.groups = resolution.groups
        result.groups_found = resolution.group_count
        stats.update_stage(Stage.RESOLVE.value, resolution.group_count,
                           len(resolution.candidates), time.time() - start)

        # Step 5: deletion
        start = time.time()
        if params.use_trash:
            executor = DeletionExecutor.for_trash(dry_run=params.dry_run)
        else:
            executor = DeletionExecutor(dry_run=params.dry_run)
        deletion = executor.execute(resolution.groups, progress_callback=progress_callback)
        result.deleted_paths = deletion.deleted
        result.files_deleted = deletion.deleted_count
        result.failures.extend(deletion.failures)
        stats.update_stage(Stage.DELETE.value, 0, deletion.deleted_count, time.time() - start)

        stats.total_time = time.time() - total_start
        return result, stats
