# src/logging/events.py - v1
"""Fire-and-forget event logging for import runs.

``log_event("warning", "Skipping large file: big.bin", {"size": 42})`` writes a
record whose structured payload is rendered by the formatters in logger.py.
"""

from __future__ import annotations

import logging
from typing import Any, Literal

EventKind = Literal["system", "info", "warning", "error"]

_LEVELS: dict[str, int] = {
    "system": logging.INFO,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

_event_logger = logging.getLogger("foldercontext.events")


def log_event(
    kind: EventKind,
    message: str,
    context: dict[str, Any] | None = None,
    exc: BaseException | None = None,
    logger: logging.Logger | None = None,
) -> None:
    """Log an import event. Handler errors are absorbed by the logging module."""
    target = logger or _event_logger
    level = _LEVELS.get(kind, logging.INFO)
    data = dict(context or {})
    data["kind"] = kind
    if exc is not None:
        data["error"] = str(exc) or type(exc).__name__
    target.log(level, message, extra={"data": data})
