# src/ingest/filters.py - v1
"""Per-file eligibility predicates: path inclusion and binary sniffing."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from foldercontext.ingest.file_handle import BaseFileHandle

logger = logging.getLogger(__name__)

EXCLUDED_DIRECTORIES: frozenset[str] = frozenset({
    "node_modules", ".git", ".svn", ".hg", "__pycache__", ".next", ".nuxt",
    "dist", "build", "out", ".output", "target",
    ".idea", ".vscode", ".vs",
    "vendor", "bower_components",
    ".tox", ".nox", ".mypy_cache", ".pytest_cache", ".ruff_cache",
    "coverage", ".nyc_output", "htmlcov",
    ".terraform", ".serverless", ".cache",
    "venv", ".venv", "env",
})

EXCLUDED_FILENAMES: frozenset[str] = frozenset({
    "package-lock.json", "yarn.lock", "pnpm-lock.yaml",
    "pipfile.lock", "poetry.lock", "cargo.lock", "composer.lock",
    "gemfile.lock", "go.sum",
    ".ds_store", "thumbs.db",
})

EXCLUDED_EXTENSIONS: frozenset[str] = frozenset({
    # Binary / compiled
    ".exe", ".dll", ".so", ".dylib", ".o", ".obj", ".a", ".lib", ".bin",
    ".wasm", ".pyc", ".pyo", ".class", ".jar",
    # Images
    ".png", ".jpg", ".jpeg", ".gif", ".bmp", ".ico", ".webp", ".tiff",
    # Fonts
    ".woff", ".woff2", ".ttf", ".otf", ".eot",
    # Media
    ".mp3", ".mp4", ".avi", ".mov", ".wav", ".flac", ".ogg", ".webm",
    # Archives
    ".zip", ".tar", ".gz", ".rar", ".7z", ".bz2",
    # Databases
    ".sqlite", ".db", ".sqlite3",
    # Office documents
    ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx",
    # Sourcemaps
    ".map",
})

# Control characters other than tab, LF, FF, CR
_TEXT_CONTROL_OK = {9, 10, 12, 13}
_BINARY_CONTROL_RATIO = 0.3


def is_included(
    relative_path: str,
    extra_dirs: Iterable[str] = (),
    extra_exts: Iterable[str] = (),
) -> bool:
    """Decide whether a root-relative path is eligible for import."""
    parts = [p for p in relative_path.replace("\\", "/").split("/") if p]
    if not parts:
        return False

    excluded_dirs = EXCLUDED_DIRECTORIES.union(extra_dirs)
    if any(part in excluded_dirs for part in parts[:-1]):
        return False

    filename = parts[-1].lower()
    if filename in EXCLUDED_FILENAMES:
        return False

    if "." in filename:
        ext = "." + filename.rsplit(".", 1)[-1]
        if ext in EXCLUDED_EXTENSIONS or ext in set(extra_exts):
            return False

    return True


def looks_binary(sample: bytes) -> bool:
    """Heuristic: NUL byte, or a high ratio of control bytes in the sample."""
    if not sample:
        return False
    if b"\x00" in sample:
        return True
    control = sum(1 for b in sample if b < 32 and b not in _TEXT_CONTROL_OK)
    return control / len(sample) > _BINARY_CONTROL_RATIO


async def is_binary(handle: BaseFileHandle, sample_size: int = 8192) -> bool:
    """Sample the leading ``sample_size`` bytes of a file and classify them."""
    sample = await handle.read_head(sample_size)
    return looks_binary(sample)
