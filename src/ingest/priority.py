# src/ingest/priority.py - v1
"""Priority scoring: manifest-like files are processed first."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from foldercontext.ingest.file_handle import BaseFileHandle

_H = TypeVar("_H", bound="BaseFileHandle")


class PriorityScorer:
    """Map a path to an integer score from an ordered list of file names.

    With ``L`` names, the name at index ``i`` scores ``L - i``; anything not in
    the list scores 0. Matching is on the lowercased final path segment.
    """

    def __init__(self, priority_files: Sequence[str]) -> None:
        self._names = [name.lower() for name in priority_files]
        self._index: dict[str, int] = {}
        for i, name in enumerate(self._names):
            self._index.setdefault(name, i)

    def score(self, path: str) -> int:
        file_name = path.replace("\\", "/").rsplit("/", 1)[-1].lower()
        i = self._index.get(file_name)
        return 0 if i is None else len(self._names) - i

    def sort(self, files: Sequence[_H]) -> list[_H]:
        """Stable sort, highest score first; ties keep their input order."""
        return sorted(files, key=lambda f: self.score(f.path), reverse=True)
