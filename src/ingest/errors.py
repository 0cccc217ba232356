# src/ingest/errors.py - v1
"""Import pipeline exceptions.

Only SizeLimitExceededError aborts a run once it has started; every other
per-file problem is converted into a skip by the chunk processor.
"""

from __future__ import annotations


class ImportProcessingError(Exception):
    """Base class for import pipeline failures."""


class SizeLimitExceededError(ImportProcessingError):
    """Accepted files exceed the configured total size budget."""

    def __init__(self, limit: int, total_size: int, path: str | None = None) -> None:
        self.limit = limit
        self.total_size = total_size
        self.path = path
        super().__init__(
            f"Total size limit of {limit / (1024 * 1024):g} MB exceeded"
        )


class EmptyImportError(ImportProcessingError, ValueError):
    """No files were given to import."""

    def __init__(self, message: str = "No files selected") -> None:
        super().__init__(message)


class ImportInProgressError(ImportProcessingError, RuntimeError):
    """A processor instance was asked to start a second concurrent run."""
