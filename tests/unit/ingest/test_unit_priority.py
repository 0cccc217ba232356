# tests/unit/ingest/test_unit_priority.py - v1
"""Tests for ingest/priority.py: priority scoring and stable ordering."""

from __future__ import annotations

import pytest

from foldercontext.ingest.file_handle import MemoryFileHandle
from foldercontext.ingest.priority import PriorityScorer

NAMES = ["package.json", "composer.json", "requirements.txt", "go.mod", "Cargo.toml"]


@pytest.fixture
def scorer() -> PriorityScorer:
    return PriorityScorer(NAMES)


class TestScore:
    def test_first_entry_scores_list_length(self, scorer):
        assert scorer.score("package.json") == 5

    def test_last_entry_scores_one(self, scorer):
        assert scorer.score("Cargo.toml") == 1

    def test_unlisted_scores_zero(self, scorer):
        assert scorer.score("src/main.py") == 0

    def test_uses_final_segment(self, scorer):
        assert scorer.score("repo/backend/requirements.txt") == 3

    def test_case_insensitive(self, scorer):
        assert scorer.score("PACKAGE.JSON") == 5
        assert scorer.score("cargo.toml") == 1

    def test_backslash_paths(self, scorer):
        assert scorer.score("repo\\go.mod") == 2

    def test_listed_beats_unlisted(self, scorer):
        for name in NAMES:
            assert scorer.score(name) > scorer.score("README.md")

    def test_earlier_beats_later(self, scorer):
        scores = [scorer.score(n) for n in NAMES]
        assert scores == sorted(scores, reverse=True)
        assert len(set(scores)) == len(scores)

    def test_duplicate_names_keep_first_position(self):
        s = PriorityScorer(["a.txt", "b.txt", "a.txt"])
        assert s.score("a.txt") == 3


class TestSort:
    def test_priority_descending(self, scorer):
        files = [
            MemoryFileHandle("repo/src/a.txt", "a"),
            MemoryFileHandle("repo/go.mod", "m"),
            MemoryFileHandle("repo/package.json", "{}"),
        ]
        ordered = [f.path for f in scorer.sort(files)]
        assert ordered == ["repo/package.json", "repo/go.mod", "repo/src/a.txt"]

    def test_stable_for_equal_scores(self, scorer):
        files = [MemoryFileHandle(f"repo/f{i}.txt", "x") for i in range(20)]
        files.insert(7, MemoryFileHandle("repo/package.json", "{}"))
        ordered = [f.path for f in scorer.sort(files)]
        assert ordered[0] == "repo/package.json"
        assert ordered[1:] == [f"repo/f{i}.txt" for i in range(20)]

    def test_does_not_mutate_input(self, scorer):
        files = [MemoryFileHandle("repo/a.txt", "x"), MemoryFileHandle("repo/package.json", "{}")]
        scorer.sort(files)
        assert files[0].path == "repo/a.txt"
