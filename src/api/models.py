# src/api/models.py - v1
"""API-level models: ImportOverrides, FolderImportResult."""

from __future__ import annotations

from pydantic import BaseModel, Field

from foldercontext.core.models import ContextMessage, ImportSummary, ProcessedFile


class ImportOverrides(BaseModel):
    """Per-import overrides, a validated subset of Settings."""

    chunk_size: int | None = Field(default=None, ge=1)
    max_single_file_size: int | None = Field(default=None, ge=0)
    max_total_size: int | None = Field(default=None, ge=0)
    binary_check_sample_size: int | None = Field(default=None, ge=1)
    priority_files: str | None = None


class FolderImportResult(BaseModel):
    """Return value of facade.import_folder()."""

    import_id: str
    folder_name: str
    files: list[ProcessedFile]
    messages: list[ContextMessage]
    binary_paths: list[str] = Field(default_factory=list)
    summary: ImportSummary

    @property
    def file_count(self) -> int:
        return len(self.files)
