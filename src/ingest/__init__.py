"""Import pipeline: file handles, filters, priority scoring, chunked processing.

Public API:
- ImportProcessor: run an import over a list of file handles
- collect_folder: list a local directory as file handles
"""

from foldercontext.ingest.errors import (
    EmptyImportError,
    ImportInProgressError,
    ImportProcessingError,
    SizeLimitExceededError,
)
from foldercontext.ingest.file_handle import (
    BaseFileHandle,
    LocalFileHandle,
    MemoryFileHandle,
    collect_folder,
)
from foldercontext.ingest.processor import ImportProcessor

__all__ = [
    "BaseFileHandle",
    "EmptyImportError",
    "ImportInProgressError",
    "ImportProcessingError",
    "ImportProcessor",
    "LocalFileHandle",
    "MemoryFileHandle",
    "SizeLimitExceededError",
    "collect_folder",
]
