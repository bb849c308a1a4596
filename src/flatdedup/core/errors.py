"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/errors.py
Error kinds raised by the deduplication engine.

ScanError is fatal for the run. ReadError and DeleteError concern one file only;
they are caught at the worker/deleter boundary and turned into FileError records.
"""

from typing import Optional


class DeduplicationError(RuntimeError):
    """Base class for all engine errors. Carries the offending path when known."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ScanError(DeduplicationError):
    """The target directory cannot be opened or listed."""


class ReadError(DeduplicationError):
    """A file could not be read completely and consistently."""


class DeleteError(DeduplicationError):
    """A deletion candidate could not be removed."""
