"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
File removal primitives: permanent unlink or move to the system trash (send2trash).
"""
import os
from pathlib import Path

from send2trash import send2trash

from flatdedup.core.models import FileEntry


class FileService:
    """
    Cross-platform file operations used by the deletion executor.
    Both removal methods raise on failure; callers decide how to record it.
    """

    @staticmethod
    def delete_file(file_path: str):
        """Permanently removes a file."""
        os.remove(file_path)

    @staticmethod
    def move_to_trash(file_path: str):
        """Moves a file to the system trash."""
        path = Path(file_path).resolve()

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            send2trash(str(path))
        except Exception as e:
            raise RuntimeError(f"Failed to move to trash: {e}") from e

    @staticmethod
    def is_same_file(entry: FileEntry) -> bool:
        """
        True if entry.path still names the regular file that was listed, unmodified:
        same device and inode, same size, and same mtime_ns when it was recorded.
        An in-place rewrite keeps the inode, so identity alone is not enough.
        Symlinks are compared as themselves, never followed.
        """
        try:
            st = os.lstat(entry.path)
        except OSError:
            return False
        if (st.st_dev, st.st_ino) != entry.file_id or st.st_size != entry.size:
            return False
        return entry.mtime_ns is None or st.st_mtime_ns == entry.mtime_ns
