from .file_service import FileService
from .deleter import DeletionExecutor, DeletionReport

__all__ = ["FileService", "DeletionExecutor", "DeletionReport"]
