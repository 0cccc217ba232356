# src/ingest/file_handle.py - v1
"""File handles consumed by the import pipeline.

A handle exposes a root-prefixed path (``myrepo/src/app.py``), a byte size and
async read access. LocalFileHandle reads from disk off the event loop;
MemoryFileHandle wraps bytes already in memory.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath

logger = logging.getLogger(__name__)

UNKNOWN_FOLDER = "Unknown Folder"


class BaseFileHandle(ABC):
    """Unified interface for importable files."""

    @property
    @abstractmethod
    def path(self) -> str:
        """Forward-slash path whose first segment is the imported root folder."""

    @property
    @abstractmethod
    def size(self) -> int:
        """Original size in bytes."""

    @abstractmethod
    async def read_head(self, n: int) -> bytes:
        """Read up to ``n`` leading bytes."""

    @abstractmethod
    async def read_text(self) -> str:
        """Read the full content decoded as UTF-8."""

    @property
    def name(self) -> str:
        return PurePosixPath(self.path).name

    @property
    def relative_path(self) -> str:
        """Path with the root folder segment stripped."""
        parts = self.path.split("/", 1)
        return parts[1] if len(parts) == 2 else parts[0]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={self.path!r}, size={self.size})"


class LocalFileHandle(BaseFileHandle):
    """File on the local filesystem, addressed relative to an imported root."""

    def __init__(self, file_path: Path, display_path: str) -> None:
        self._file_path = file_path
        self._display_path = display_path
        self._size = file_path.stat().st_size

    @property
    def path(self) -> str:
        return self._display_path

    @property
    def size(self) -> int:
        return self._size

    async def read_head(self, n: int) -> bytes:
        return await asyncio.to_thread(self._read_head_sync, n)

    async def read_text(self) -> str:
        data = await asyncio.to_thread(self._file_path.read_bytes)
        return data.decode("utf-8", errors="replace")

    def _read_head_sync(self, n: int) -> bytes:
        with self._file_path.open("rb") as fh:
            return fh.read(n)


class MemoryFileHandle(BaseFileHandle):
    """In-memory file, e.g. uploaded content or test fixtures."""

    def __init__(self, path: str, content: bytes | str) -> None:
        self._path = path.replace("\\", "/")
        self._data = content.encode("utf-8") if isinstance(content, str) else content

    @property
    def path(self) -> str:
        return self._path

    @property
    def size(self) -> int:
        return len(self._data)

    async def read_head(self, n: int) -> bytes:
        return self._data[:n]

    async def read_text(self) -> str:
        return self._data.decode("utf-8", errors="replace")


def collect_folder(root: Path) -> list[LocalFileHandle]:
    """List every file under ``root`` as handles prefixed with the root's name.

    Files are returned in sorted path order; unreadable entries are skipped.

    Raises:
        ValueError: If ``root`` is not a directory.
    """
    root = Path(root)
    if not root.is_dir():
        msg = f"Import root is not a directory: {root}"
        raise ValueError(msg)

    root_name = root.resolve().name or UNKNOWN_FOLDER
    handles: list[LocalFileHandle] = []
    for path in sorted(root.rglob("*")):
        if not path.is_file():
            continue
        rel = path.relative_to(root).as_posix()
        try:
            handles.append(LocalFileHandle(path, f"{root_name}/{rel}"))
        except OSError as exc:
            logger.warning("Cannot stat %s: %s", path, exc)

    logger.info("Collected %d files under %s", len(handles), root)
    return handles


def folder_name(files: list[BaseFileHandle]) -> str:
    """Root folder name shared by the handles."""
    if not files:
        return UNKNOWN_FOLDER
    first = files[0].path.split("/", 1)[0]
    return first or UNKNOWN_FOLDER
