# src/api/facade.py - v1
"""Public API facade: import a folder into conversation messages.

Usage:
    from foldercontext.api.facade import import_directory
    result = await import_directory(Path("myrepo"))
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

from foldercontext.api.models import FolderImportResult, ImportOverrides
from foldercontext.config.settings import Settings
from foldercontext.context.builder import build_context_from_files
from foldercontext.core.models import ImportProgress
from foldercontext.ingest.errors import EmptyImportError
from foldercontext.ingest.file_handle import collect_folder, folder_name
from foldercontext.ingest.processor import ImportProcessor
from foldercontext.ingest.progress import BaseProgressSink, as_progress_sink, safe_emit
from foldercontext.logging.context import clear_context, set_import_context, set_stage_context
from foldercontext.logging.events import log_event

if TYPE_CHECKING:
    from foldercontext.ingest.file_handle import BaseFileHandle

logger = logging.getLogger(__name__)


async def import_folder(
    files: Sequence[BaseFileHandle],
    settings: Settings | None = None,
    progress: BaseProgressSink | Callable[[ImportProgress], None] | None = None,
    overrides: ImportOverrides | None = None,
) -> FolderImportResult:
    """Import a folder's files and build the conversation context for them.

    This is the main public API:
      1. Reject empty input
      2. Run the import pipeline (scanning, processing)
      3. Emit the ``creating`` stage and build the messages
      4. Return FolderImportResult

    Args:
        files: Handles whose paths share the folder name as first segment.
        settings: Global settings. Loaded from .env if None.
        progress: Sink or callable receiving ImportProgress events.
        overrides: Per-import settings overrides.

    Raises:
        EmptyImportError: If ``files`` is empty.
        SizeLimitExceededError: If the folder exceeds the total size budget.
    """
    if not files:
        raise EmptyImportError()

    settings = _apply_overrides(settings or Settings(), overrides)
    sink = as_progress_sink(progress)
    name = folder_name(list(files))
    import_id = _generate_import_id()

    set_import_context(import_id, name)
    try:
        logger.info("Importing %s (%d files)", name, len(files))
        processor = ImportProcessor(progress=sink, settings=settings)
        try:
            processed = await processor.process_files(files)
        except Exception as exc:
            log_event("error", "Failed to import folder", {"folderName": name}, exc=exc, logger=logger)
            raise

        set_stage_context("creating")
        safe_emit(
            sink,
            ImportProgress(
                stage="creating",
                processed=len(files),
                total=len(files),
                details="Creating import messages...",
            ),
        )
        messages = build_context_from_files(processed, processor.binary_paths, name)

        log_event(
            "system",
            "Folder imported successfully",
            {"folderName": name, "fileCount": len(processed)},
            logger=logger,
        )
        return FolderImportResult(
            import_id=import_id,
            folder_name=name,
            files=processed,
            messages=messages,
            binary_paths=processor.binary_paths,
            summary=processor.last_summary,
        )
    finally:
        clear_context()


async def import_directory(
    root: Path,
    settings: Settings | None = None,
    progress: BaseProgressSink | Callable[[ImportProgress], None] | None = None,
    overrides: ImportOverrides | None = None,
) -> FolderImportResult:
    """Collect every file under ``root`` and import it via import_folder()."""
    files = collect_folder(root)
    return await import_folder(files, settings=settings, progress=progress, overrides=overrides)


def _apply_overrides(settings: Settings, overrides: ImportOverrides | None) -> Settings:
    """Apply per-import config overrides if provided."""
    if overrides is None:
        return settings
    values = overrides.model_dump(exclude_none=True)
    if not values:
        return settings
    current = settings.model_dump()
    current.update(values)
    return Settings(**current)


def _generate_import_id() -> str:
    """Generate a unique import ID: yyyymmdd_hhmmss_{uuid4_short}."""
    ts = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    return f"{ts}_{uuid.uuid4().hex[:8]}"
