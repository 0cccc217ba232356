# src/logging/context.py - v1
"""Contextual logging support: attach import_id, folder and stage to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Set per import run; asyncio tasks inherit a copy at creation.
_import_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "import_id", default=None
)
_folder: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "folder", default=None
)
_stage: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "stage", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    import_id: str | None = None
    folder: str | None = None
    stage: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        import_id=_import_id.get(),
        folder=_folder.get(),
        stage=_stage.get(),
    )


def set_import_context(import_id: str, folder: str | None = None) -> None:
    """Set run-level context (called once per import run)."""
    _import_id.set(import_id)
    _folder.set(folder)


def set_stage_context(stage: str | None) -> None:
    _stage.set(stage)


def clear_context() -> None:
    """Reset all context variables."""
    _import_id.set(None)
    _folder.set(None)
    _stage.set(None)
