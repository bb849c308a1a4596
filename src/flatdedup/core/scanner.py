"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Lists a single directory (non-recursive) and produces FileEntry candidates.

Entry policy:
- Regular files are accepted, including empty ones unless skip_empty is set
- Directories are skipped (no recursion)
- Symbolic links are skipped: never followed, never deleted
- Sockets, FIFOs and device nodes are skipped
"""

import os
import stat
import time
import logging
from pathlib import Path
from typing import List, Optional, Callable

logger = logging.getLogger(__name__)

# Local imports
from flatdedup.core.models import FileEntry
from flatdedup.core.errors import ScanError
from flatdedup.core.interfaces import FileScanner


class FlatScannerImpl(FileScanner):
    """
    Scans exactly one directory level with os.scandir.

    Attributes:
        root_dir: Directory to list
        skip_empty: Leave zero-byte files out of consideration
    """

    def __init__(self, root_dir: str, skip_empty: bool = False):
        self.root_dir = root_dir
        self.skip_empty = skip_empty

    def scan(self,
             stopped_flag: Optional[Callable[[], bool]] = None,
             progress_callback: Optional[Callable[[str, int, object], None]] = None) -> List[FileEntry]:
        """
        Returns the accepted entries sorted by name.

        Raises:
            ScanError: directory missing, not a directory, or not listable.
        """
        root_path = Path(self.root_dir).resolve()
        logger.debug(f"Scanning directory: {root_path}")

        if stopped_flag and stopped_flag():
            logger.debug("Scan cancelled before start")
            return []

        start_time = time.time()
        found: List[FileEntry] = []
        processed = 0

        try:
            with os.scandir(root_path) as it:
                for dir_entry in it:
                    if stopped_flag and stopped_flag():
                        logger.debug("Scan interrupted by user")
                        return []

                    entry = self._process_entry(dir_entry)
                    if entry:
                        found.append(entry)
                    processed += 1
        except FileNotFoundError as e:
            raise ScanError(f"Directory does not exist: {self.root_dir}", str(root_path)) from e
        except NotADirectoryError as e:
            raise ScanError(f"Not a directory: {self.root_dir}", str(root_path)) from e
        except PermissionError as e:
            raise ScanError(f"Permission denied listing {self.root_dir}", str(root_path)) from e
        except OSError as e:
            raise ScanError(f"Cannot list {self.root_dir}: {e}", str(root_path)) from e

        if progress_callback:
            progress_callback("scanning", processed, processed)

        found.sort(key=lambda f: f.name)
        logger.debug(f"Scan completed in {time.time() - start_time:.2f}s: "
                     f"{len(found)} of {processed} entries accepted")
        return found

    def _process_entry(self, dir_entry: os.DirEntry) -> Optional[FileEntry]:
        """
        Classify one listing entry. Returns None for anything that is not an acceptable
        regular file, including entries that vanished after listing.
        """
        # os.lstat rather than DirEntry.stat: the cached Windows result has no inode
        try:
            st = os.lstat(dir_entry.path)
        except FileNotFoundError:
            logger.debug(f"Entry vanished before stat: {dir_entry.path}")
            return None
        except OSError as e:
            logger.debug(f"Could not stat {dir_entry.path}: {e}")
            return None

        mode = st.st_mode
        if stat.S_ISLNK(mode):
            logger.debug(f"Skipping symbolic link: {dir_entry.path}")
            return None
        if stat.S_ISDIR(mode):
            logger.debug(f"Skipping directory: {dir_entry.path}")
            return None
        if not stat.S_ISREG(mode):
            logger.debug(f"Skipping non-regular file: {dir_entry.path}")
            return None

        if self.skip_empty and st.st_size == 0:
            logger.debug(f"Skipping zero-byte file: {dir_entry.path}")
            return None

        return FileEntry.from_stat(os.path.abspath(dir_entry.path), st)
