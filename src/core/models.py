# src/core/models.py - v1
"""Shared Pydantic domain models used across modules.

No module redefines these types; all imports come from core.models.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

ImportStage = Literal["scanning", "filtering", "processing", "creating"]
SkipReason = Literal["too_large", "excluded", "binary", "unreadable"]


# === PROGRESS ===


class ImportProgress(BaseModel):
    """Progress event emitted at each stage transition of an import run.

    ``processing`` is re-emitted once per chunk; ``creating`` belongs to the
    caller that turns processed files into conversation messages.
    """

    model_config = ConfigDict(frozen=True)

    stage: ImportStage
    processed: int = Field(ge=0)
    total: int = Field(ge=0)
    details: str = ""

    @model_validator(mode="after")
    def validate_bounds(self) -> ImportProgress:
        if self.processed > self.total:
            raise ValueError(
                f"processed ({self.processed}) exceeds total ({self.total})"
            )
        return self

    @property
    def percent(self) -> int:
        """Rounded completion percentage (100 when total is zero)."""
        if self.total == 0:
            return 100
        return round(self.processed / self.total * 100)

    def describe(self) -> str:
        """Short status line, e.g. ``processing 40%: Processed 12 files...``."""
        return f"{self.stage} {self.percent}%: {self.details}"


# === FILES ===


class ProcessedFile(BaseModel):
    """A text file accepted by the import pipeline. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    path: str
    content: str
    size: int = Field(ge=0)
    priority: int = Field(ge=0)


class ImportSummary(BaseModel):
    """Statistics for one completed import run."""

    total_files: int
    file_count: int
    total_size: int
    skipped: dict[SkipReason, int] = Field(default_factory=dict)
    duration_seconds: float

    @property
    def skipped_count(self) -> int:
        return sum(self.skipped.values())


# === CONVERSATION ===


class ContextMessage(BaseModel):
    """A single conversation message built from imported files."""

    id: str
    role: Literal["user", "assistant"]
    content: str
