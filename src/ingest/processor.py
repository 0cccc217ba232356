# src/ingest/processor.py - v1
"""Import orchestrator: priority sort, chunked processing, progress, summary.

Usage:
    processor = ImportProcessor(progress=CallbackProgressSink(print))
    files = await processor.process_files(collect_folder(Path("myrepo")))

Workflow:
    1. Reset run state and emit ``scanning``
    2. Stable-sort files by priority score, highest first
    3. Process fixed-size chunks in order, emitting ``processing`` after each
       and yielding to the event loop between chunks
    4. Log the summary and return the accepted files

A run either returns every accepted file or raises; partial results are never
returned.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from foldercontext.config.settings import Settings
from foldercontext.core.models import ImportProgress, ImportStage, ImportSummary, ProcessedFile
from foldercontext.ingest.chunk_processor import BinaryDetector, ChunkProcessor, InclusionFilter
from foldercontext.ingest.errors import EmptyImportError, ImportInProgressError
from foldercontext.ingest.priority import PriorityScorer
from foldercontext.ingest.progress import BaseProgressSink, as_progress_sink, safe_emit
from foldercontext.logging.context import set_stage_context
from foldercontext.logging.events import log_event

if TYPE_CHECKING:
    from foldercontext.ingest.file_handle import BaseFileHandle

logger = logging.getLogger(__name__)


class ImportProcessor:
    """Runs one import at a time over a list of file handles.

    Starting a second run while one is in flight raises ImportInProgressError;
    sequential runs on the same instance are fine and reset all run state.
    """

    def __init__(
        self,
        progress: BaseProgressSink | Callable[[ImportProgress], None] | None = None,
        settings: Settings | None = None,
        include: InclusionFilter | None = None,
        binary_detector: BinaryDetector | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._sink = as_progress_sink(progress)
        self._include = include
        self._binary_detector = binary_detector
        self._scorer = PriorityScorer(self._settings.priority_files_list)
        self._running = False

        self.processed_files: list[ProcessedFile] = []
        self.total_size = 0
        self.binary_paths: list[str] = []
        self.last_summary: ImportSummary | None = None

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def is_running(self) -> bool:
        return self._running

    def priority_score(self, path: str) -> int:
        return self._scorer.score(path)

    async def process_files(self, files: Sequence[BaseFileHandle]) -> list[ProcessedFile]:
        """Import ``files`` and return the accepted ones in priority order.

        Raises:
            EmptyImportError: If ``files`` is empty (before any run state exists).
            ImportInProgressError: If another run is in flight on this instance.
            SizeLimitExceededError: If accepted files exceed ``max_total_size``.
        """
        if not files:
            raise EmptyImportError()
        if self._running:
            raise ImportInProgressError("An import is already running on this processor")

        self._running = True
        try:
            return await self._run(files)
        finally:
            self._running = False
            set_stage_context(None)

    async def _run(self, files: Sequence[BaseFileHandle]) -> list[ProcessedFile]:
        t0 = time.perf_counter()
        self.processed_files = []
        self.total_size = 0
        self.binary_paths = []
        self.last_summary = None

        total = len(files)
        chunk_size = self._settings.chunk_size
        chunks = ChunkProcessor(
            self._settings,
            scorer=self._scorer,
            include=self._include,
            binary_detector=self._binary_detector,
        )

        try:
            self._update_progress("scanning", 0, total, "Scanning repository...")

            sorted_files = self._scorer.sort(files)

            for start in range(0, total, chunk_size):
                chunk = await chunks.process_chunk(sorted_files, start, chunk_size)
                self.processed_files.extend(chunk)
                self.total_size = chunks.total_size

                self._update_progress(
                    "processing",
                    min(start + chunk_size, total),
                    total,
                    f"Processed {len(self.processed_files)} files...",
                )

                # Let the event loop run other tasks between chunks
                await asyncio.sleep(0)

        except Exception as exc:
            self.total_size = chunks.total_size
            log_event(
                "error",
                "Import failed",
                {"files_accepted": len(self.processed_files), "total_size": chunks.total_size},
                exc=exc,
                logger=logger,
            )
            raise

        self.binary_paths = list(chunks.binary_paths)
        duration = time.perf_counter() - t0
        self.last_summary = ImportSummary(
            total_files=total,
            file_count=len(self.processed_files),
            total_size=self.total_size,
            skipped=dict(chunks.skipped),
            duration_seconds=round(duration, 3),
        )
        log_event(
            "system",
            "Import completed",
            {
                "fileCount": self.last_summary.file_count,
                "totalSize": self.last_summary.total_size,
                "skipped": self.last_summary.skipped_count,
                "duration": self.last_summary.duration_seconds,
            },
            logger=logger,
        )
        return list(self.processed_files)

    def _update_progress(
        self, stage: ImportStage, processed: int, total: int, details: str,
    ) -> None:
        set_stage_context(stage)
        safe_emit(
            self._sink,
            ImportProgress(stage=stage, processed=processed, total=total, details=details),
        )
