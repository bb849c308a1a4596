"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/pool.py
Fixed-size pool of fingerprinting threads: fan-out over a WorkQueue, fan-in into a
FingerprintTable, then a join barrier before anyone reads the table.

Per-file ReadErrors are kept in each worker's own report and merged after the join.
Any other exception is treated as a bug: it is re-raised in the coordinating thread
once every worker has stopped.
"""

import threading
import time
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from flatdedup.core.models import ErrorKind, FileError
from flatdedup.core.errors import ReadError
from flatdedup.core.interfaces import Hasher
from flatdedup.core.table import FingerprintTable
from flatdedup.core.work_queue import WorkQueue

logger = logging.getLogger(__name__)

PROGRESS_LOG_INTERVAL = 1000


@dataclass
class WorkerReport:
    worker_id: int
    hashed: int = 0
    failures: List[FileError] = field(default_factory=list)
    exception: Optional[BaseException] = None


@dataclass
class PoolReport:
    hashed: int = 0
    failures: List[FileError] = field(default_factory=list)
    cancelled: bool = False


class WorkerPool:
    """
    Runs exactly `cores` worker threads until the queue is exhausted.

    Usage:
        pool = WorkerPool(cores=4, hasher=HasherImpl())
        report = pool.run(WorkQueue(entries), table)
        table.freeze()
    """

    def __init__(self, cores: int, hasher: Hasher):
        if cores < 1:
            raise ValueError("Worker pool needs at least one worker")
        self.cores = cores
        self.hasher = hasher
        self._progress_lock = threading.Lock()
        self._processed = 0

    def run(
            self,
            queue: WorkQueue,
            table: FingerprintTable,
            stopped_flag: Optional[Callable[[], bool]] = None,
            progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> PoolReport:
        """Blocks until every worker has joined."""
        self._processed = 0
        reports = [WorkerReport(worker_id=i) for i in range(self.cores)]
        threads = [
            threading.Thread(
                target=self._worker,
                args=(report, queue, table, stopped_flag, progress_callback),
                name=f"dedup-worker-{report.worker_id}",
                daemon=True,
            )
            for report in reports
        ]

        logger.debug(f"Starting {len(threads)} workers for {len(queue)} files")
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        for report in reports:
            if report.exception is not None:
                raise report.exception

        pool_report = PoolReport(cancelled=queue.cancelled)
        for report in reports:
            pool_report.hashed += report.hashed
            pool_report.failures.extend(report.failures)
        return pool_report

    def _worker(
            self,
            report: WorkerReport,
            queue: WorkQueue,
            table: FingerprintTable,
            stopped_flag: Optional[Callable[[], bool]],
            progress_callback: Optional[Callable[[str, int, object], None]]
    ) -> None:
        start_time = time.time()
        handled = 0
        try:
            while True:
                if stopped_flag and stopped_flag():
                    queue.cancel()
                    logger.debug(f"Worker {report.worker_id} stopping on cancellation")
                    break

                entry = queue.pop()
                if entry is None:
                    break

                try:
                    digest = self.hasher.compute_fingerprint(entry)
                except ReadError as e:
                    logger.warning(str(e))
                    report.failures.append(FileError(entry.path, ErrorKind.READ, str(e)))
                else:
                    entry.assign_fingerprint(digest)
                    table.insert(entry, digest)
                    report.hashed += 1

                handled += 1
                if handled % PROGRESS_LOG_INTERVAL == 0:
                    elapsed = time.time() - start_time
                    rate = handled / elapsed if elapsed > 0 else float(handled)
                    logger.debug(f"Worker {report.worker_id}: {handled} files, {rate:6.2f} files/sec")

                self._report_progress(progress_callback, len(queue))
        except Exception as e:
            queue.cancel()
            report.exception = e

    def _report_progress(self, progress_callback, total: int) -> None:
        if not progress_callback:
            return
        with self._progress_lock:
            self._processed += 1
            current = self._processed
        progress_callback("hashing", current, total)
