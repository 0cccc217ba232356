# src/ingest/progress.py - v1
"""Progress channel between an import run and whoever renders it.

The processor emits ImportProgress events to a sink in a fixed order: one
``scanning`` event, then one ``processing`` event per chunk.
"""

from __future__ import annotations

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Callable

from foldercontext.core.models import ImportProgress

logger = logging.getLogger(__name__)


class BaseProgressSink(ABC):
    """Receives progress events for one or more import runs."""

    @abstractmethod
    def emit(self, progress: ImportProgress) -> None:
        """Deliver one event. Must not block."""


class NullProgressSink(BaseProgressSink):
    def emit(self, progress: ImportProgress) -> None:
        return None


class CallbackProgressSink(BaseProgressSink):
    """Forward events to a plain callable."""

    def __init__(self, callback: Callable[[ImportProgress], None]) -> None:
        self._callback = callback

    def emit(self, progress: ImportProgress) -> None:
        self._callback(progress)


class QueueProgressSink(BaseProgressSink):
    """Push events onto an asyncio.Queue for a consumer task.

    With a bounded queue, the oldest pending event is dropped to make room so
    the import never waits on a slow consumer.
    """

    def __init__(self, maxsize: int = 0) -> None:
        self.queue: asyncio.Queue[ImportProgress] = asyncio.Queue(maxsize=maxsize)
        self.dropped = 0

    def emit(self, progress: ImportProgress) -> None:
        try:
            self.queue.put_nowait(progress)
        except asyncio.QueueFull:
            self.queue.get_nowait()
            self.dropped += 1
            self.queue.put_nowait(progress)

    def drain(self) -> list[ImportProgress]:
        """Remove and return every pending event."""
        events: list[ImportProgress] = []
        while not self.queue.empty():
            events.append(self.queue.get_nowait())
        return events


class ThrottledProgressSink(BaseProgressSink):
    """Rate-limit ``processing`` events for interactive output.

    Other stages and the final window of a run (``processed == total``) are
    always forwarded.
    """

    def __init__(
        self,
        inner: BaseProgressSink,
        interval_s: float = 0.1,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._inner = inner
        self._interval_s = interval_s
        self._clock = clock
        self._last_emit: float | None = None

    def emit(self, progress: ImportProgress) -> None:
        now = self._clock()
        if (
            progress.stage == "processing"
            and progress.processed < progress.total
            and self._last_emit is not None
            and now - self._last_emit < self._interval_s
        ):
            return
        self._last_emit = now
        self._inner.emit(progress)


def safe_emit(sink: BaseProgressSink, progress: ImportProgress) -> None:
    """Emit to a sink; a failing sink is logged and never aborts the run."""
    try:
        sink.emit(progress)
    except Exception:
        logger.exception("Progress sink %s failed on %s", type(sink).__name__, progress.stage)


def as_progress_sink(
    progress: BaseProgressSink | Callable[[ImportProgress], None] | None,
) -> BaseProgressSink:
    """Accept a sink, a bare callable or None."""
    if progress is None:
        return NullProgressSink()
    if isinstance(progress, BaseProgressSink):
        return progress
    return CallbackProgressSink(progress)
