# tests/conftest.py - v1
"""Shared test fixtures for unit and integration tests.

File handles are in-memory unless a test builds a real directory under tmp_path.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from foldercontext.config.settings import Settings
from foldercontext.core.models import ImportProgress
from foldercontext.ingest.file_handle import MemoryFileHandle
from foldercontext.ingest.progress import CallbackProgressSink

PNG_HEADER = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"


def text_file(path: str, size: int, char: str = "a") -> MemoryFileHandle:
    """In-memory text file of exactly ``size`` bytes under the ``repo/`` root."""
    return MemoryFileHandle(f"repo/{path}", (char * size).encode("utf-8"))


def binary_file(path: str, size: int) -> MemoryFileHandle:
    """In-memory PNG-like file of exactly ``size`` bytes."""
    data = PNG_HEADER + b"\x00" * max(0, size - len(PNG_HEADER))
    return MemoryFileHandle(f"repo/{path}", data[:size])


class RecordingSink(CallbackProgressSink):
    """Progress sink that keeps every event it receives."""

    def __init__(self) -> None:
        self.events: list[ImportProgress] = []
        super().__init__(self.events.append)

    @property
    def stages(self) -> list[str]:
        return [e.stage for e in self.events]


# === FIXTURES: Settings ===


@pytest.fixture
def settings() -> Settings:
    """Default settings without reading a .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def small_settings() -> Settings:
    """Settings with tiny limits so size rules are easy to trigger."""
    return Settings(
        _env_file=None,
        chunk_size=2,
        max_single_file_size=200,
        max_total_size=250,
    )


# === FIXTURES: Progress ===


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


# === FIXTURES: Files ===


@pytest.fixture
def scenario_files() -> list[MemoryFileHandle]:
    """package.json (text), image.png (binary), src/a.txt (text)."""
    return [
        text_file("package.json", 50),
        binary_file("image.png", 2000),
        text_file("src/a.txt", 100),
    ]


@pytest.fixture
def sample_repo(tmp_path: Path) -> Path:
    """Small project directory on disk."""
    root = tmp_path / "myrepo"
    files: dict[str, bytes] = {
        "README.md": b"# My repo\n",
        "package.json": b'{"name": "myrepo"}\n',
        "requirements.txt": b"pydantic\n",
        "src/main.py": b"print('hello')\n",
        "src/util.py": b"def f():\n    return 1\n",
        "node_modules/lib/index.js": b"module.exports = {}\n",
        "assets/logo.png": PNG_HEADER + b"\x00" * 64,
        "data/blob.dat": b"\x00\x01\x02\x03" * 16,
    }
    for rel, content in files.items():
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(content)
    return root


@pytest.fixture
def make_text():
    """Factory: ``make_text("src/a.txt", 100)``."""
    return text_file


@pytest.fixture
def make_binary():
    """Factory: ``make_binary("logo.png", 2000)``."""
    return binary_file
