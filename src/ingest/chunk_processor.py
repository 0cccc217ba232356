# src/ingest/chunk_processor.py - v1
"""Chunk processing: filter, read and score one window of the sorted input.

Every per-file problem becomes a skip. The only error that escapes is
SizeLimitExceededError, raised when the next accepted file would push the
running total past ``max_total_size``.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Awaitable, Callable, Sequence
from functools import partial
from typing import TYPE_CHECKING

from foldercontext.core.models import ProcessedFile, SkipReason
from foldercontext.ingest.errors import SizeLimitExceededError
from foldercontext.ingest.filters import is_binary, is_included
from foldercontext.ingest.priority import PriorityScorer
from foldercontext.logging.events import log_event

if TYPE_CHECKING:
    from foldercontext.config.settings import Settings
    from foldercontext.ingest.file_handle import BaseFileHandle

logger = logging.getLogger(__name__)

InclusionFilter = Callable[[str], bool]
BinaryDetector = Callable[["BaseFileHandle", int], Awaitable[bool]]


class ChunkProcessor:
    """Turns slices of the priority-sorted file list into ProcessedFile records.

    One instance holds the size accounting for exactly one import run.
    """

    def __init__(
        self,
        settings: Settings,
        scorer: PriorityScorer | None = None,
        include: InclusionFilter | None = None,
        binary_detector: BinaryDetector | None = None,
    ) -> None:
        self._settings = settings
        self._scorer = scorer or PriorityScorer(settings.priority_files_list)
        self._include = include or partial(
            is_included,
            extra_dirs=settings.extra_excluded_dirs_list,
            extra_exts=settings.extra_excluded_extensions_list,
        )
        self._is_binary = binary_detector or is_binary
        self.total_size = 0
        self.skipped: Counter[SkipReason] = Counter()
        self.binary_paths: list[str] = []

    async def process_chunk(
        self,
        files: Sequence[BaseFileHandle],
        start_index: int,
        chunk_size: int,
    ) -> list[ProcessedFile]:
        """Process ``files[start_index:start_index + chunk_size]`` in order.

        Raises:
            SizeLimitExceededError: If accepting a file would exceed the budget.
        """
        chunk = files[start_index:start_index + chunk_size]
        processed: list[ProcessedFile] = []

        for handle in chunk:
            try:
                result = await self._process_file(handle)
            except SizeLimitExceededError:
                raise
            except Exception as exc:
                self._skip("unreadable")
                log_event(
                    "error",
                    f"Error processing file: {handle.name}",
                    {"path": handle.path},
                    exc=exc,
                    logger=logger,
                )
                continue
            if result is not None:
                processed.append(result)

        return processed

    async def _process_file(self, handle: BaseFileHandle) -> ProcessedFile | None:
        settings = self._settings

        if handle.size > settings.max_single_file_size:
            self._skip("too_large")
            log_event(
                "warning",
                f"Skipping large file: {handle.name}",
                {"path": handle.path, "size": handle.size},
                logger=logger,
            )
            return None

        relative_path = handle.relative_path
        if not self._include(relative_path):
            self._skip("excluded")
            logger.debug("Excluded by path filter: %s", relative_path)
            return None

        if await self._is_binary(handle, settings.binary_check_sample_size):
            self._skip("binary")
            self.binary_paths.append(relative_path)
            logger.debug("Skipping binary file: %s", relative_path)
            return None

        # Budget is charged before the content is read, so accepted files
        # never sum past max_total_size.
        if self.total_size + handle.size > settings.max_total_size:
            raise SizeLimitExceededError(
                limit=settings.max_total_size,
                total_size=self.total_size + handle.size,
                path=relative_path,
            )

        content = await handle.read_text()
        self.total_size += handle.size

        return ProcessedFile(
            path=relative_path,
            content=content,
            size=handle.size,
            priority=self._scorer.score(relative_path),
        )

    def _skip(self, reason: SkipReason) -> None:
        self.skipped[reason] += 1
