#!/usr/bin/env python3
"""
flatdedup CLI: remove byte-identical files from one directory using N hashing threads.

stdout carries a single line, "Entries: <N>", where N is the number of duplicate groups
found. Per-file problems go to stderr and never change the exit code.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import logging
import os
import signal
import sys
import threading
import time
from pathlib import Path
from typing import Optional, NoReturn

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

from flatdedup import __version__
from flatdedup.core.errors import ScanError
from flatdedup.core.models import DeduplicationParams, HashAlgorithmName, RunResult, SortOrder
from flatdedup.commands import DeduplicationCommand
from flatdedup.aliases import (
    KEEP_ALIASES, KEEP_CHOICES, KEEP_HELP_TEXT,
    ALGORITHM_ALIASES, ALGORITHM_CHOICES, ALGORITHM_HELP_TEXT,
    EPILOG_TEXT
)

EXIT_SCAN_ERROR = 1
EXIT_CANCELLED = 130


def default_cores() -> int:
    return os.cpu_count() or 1


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False
        self._stop_event = threading.Event()

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments. --cores is validated later, never rejected here."""
        parser = argparse.ArgumentParser(
            prog="flatdedup",
            description="flatdedup: remove duplicate files from a single directory",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "--cores", "-c",
            default=None,
            type=str,
            metavar='N',
            help="Number of hashing threads. Default: number of CPUs"
        )
        parser.add_argument(
            "--input-directory", "-i",
            default=".",
            type=str,
            dest="input_directory",
            help="Directory containing the files to de-duplicate (non-recursive). Default: ."
        )

        parser.add_argument(
            "--algorithm",
            choices=ALGORITHM_CHOICES,
            default="xxh128",
            type=str,
            help=ALGORITHM_HELP_TEXT
        )
        parser.add_argument(
            "--keep",
            choices=KEEP_CHOICES,
            default="name",
            type=str,
            help=KEEP_HELP_TEXT
        )

        # Actions
        parser.add_argument(
            "--dry-run", "-n",
            action="store_true",
            dest="dry_run",
            help="Show which files would be kept and deleted, delete nothing"
        )
        parser.add_argument(
            "--trash",
            action="store_true",
            help="Move duplicates to the system trash instead of deleting them"
        )
        parser.add_argument(
            "--skip-empty",
            action="store_true",
            dest="skip_empty",
            help="Ignore zero-byte files"
        )

        # Output options
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Only report errors on stderr"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show the keep/delete plan, statistics and debug logging"
        )
        parser.add_argument(
            "--version",
            action="version",
            version=f"%(prog)s {__version__}"
        )

        return parser.parse_args(args)

    def resolve_cores(self, value: Optional[str]) -> int:
        """Positive integer from --cores, or the CPU count when missing or invalid."""
        if value is None:
            return default_cores()
        try:
            cores = int(value)
        except (TypeError, ValueError):
            cores = 0
        if cores < 1:
            fallback = default_cores()
            self.warning(f"Invalid --cores value {value!r}, using {fallback}")
            return fallback
        return cores

    def create_params(self, args: argparse.Namespace) -> DeduplicationParams:
        """Create DeduplicationParams from CLI arguments."""
        try:
            return DeduplicationParams(
                root_dir=str(Path(args.input_directory).resolve()),
                cores=self.resolve_cores(args.cores),
                algorithm=ALGORITHM_ALIASES.get(args.algorithm, HashAlgorithmName.XXH128),
                sort_order=KEEP_ALIASES.get(args.keep, SortOrder.NAME),
                dry_run=args.dry_run,
                use_trash=args.trash,
                skip_empty=args.skip_empty,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def configure_logging(self) -> None:
        level = logging.WARNING
        if self.verbose:
            level = logging.DEBUG
        elif self.quiet:
            level = logging.ERROR
        logging.getLogger("flatdedup").setLevel(level)

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(f"\r  [{stage}] {current}/{total} ({percent:.1f}%)")
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files processed...")
        sys.stderr.flush()

    def stopped_flag(self) -> bool:
        """True once SIGINT has been received."""
        return self._stop_event.is_set()

    def _on_sigint(self, signum, frame) -> None:
        self._stop_event.set()

    def run_deduplication(self, params: DeduplicationParams) -> RunResult:
        """Execute deduplication workflow."""
        command = DeduplicationCommand()
        if self.verbose:
            print(f"Scanning directory: {params.root_dir} ({params.cores} workers)")

        try:
            result, stats = command.execute(
                params,
                progress_callback=self.progress_callback if self.verbose else None,
                stopped_flag=self.stopped_flag
            )
        except ScanError as e:
            self.error_exit(str(e), EXIT_SCAN_ERROR)

        if self.verbose:
            sys.stderr.write("\n")
            print(stats.print_summary())

        return result

    def output_plan(self, result: RunResult) -> None:
        """Print the survivor and the deleted files of every group."""
        for idx, group in enumerate(result.groups, 1):
            print(f"Group {idx} | Size: {group.size} bytes | Files: {len(group.files)}")
            print(f"   [KEEP] {group.survivor.path}")
            for file in group.duplicates:
                print(f"   [DEL]  {file.path}")

    def output_failures(self, result: RunResult) -> None:
        if not result.failures or self.quiet:
            return
        self.warning(
            f"{len(result.failures)} file(s) could not be processed "
            f"({result.read_failures} read, {result.delete_failures} delete)"
        )
        for failure in result.failures[:5]:
            print(f"  • {failure}", file=sys.stderr)
        if len(result.failures) > 5:
            print(f"  ...and {len(result.failures) - 5} more files", file=sys.stderr)

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv=None) -> None:
        """Main entry point. Exits with 1 on scan failure and 130 on cancellation."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        self.configure_logging()

        params = self.create_params(args)

        previous_handler = None
        if threading.current_thread() is threading.main_thread():
            previous_handler = signal.signal(signal.SIGINT, self._on_sigint)
        try:
            result = self.run_deduplication(params)
        finally:
            if previous_handler is not None:
                signal.signal(signal.SIGINT, previous_handler)

        if result.cancelled:
            print("\n⚠️  Operation cancelled by user (Ctrl+C), nothing was deleted", file=sys.stderr)
            sys.exit(EXIT_CANCELLED)

        if params.dry_run or self.verbose:
            self.output_plan(result)
        self.output_failures(result)

        if self.verbose:
            action = "Would delete" if params.dry_run else "Deleted"
            count = len(result.files_to_delete) if params.dry_run else result.files_deleted
            print(f"{action} {count} files, remaining files: {result.files_scanned - result.files_deleted}")
            print(f"✅ Completed in {time.time() - self.start_time:.2f} seconds")

        print(f"Entries: {result.groups_found}")


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)", file=sys.stderr)
        sys.exit(EXIT_CANCELLED)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
