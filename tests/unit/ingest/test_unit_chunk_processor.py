# tests/unit/ingest/test_unit_chunk_processor.py - v1
"""Tests for ingest/chunk_processor.py: per-file filtering and size accounting."""

from __future__ import annotations

import logging

import pytest

from foldercontext.config.settings import Settings
from foldercontext.ingest.chunk_processor import ChunkProcessor
from foldercontext.ingest.errors import SizeLimitExceededError
from foldercontext.ingest.file_handle import MemoryFileHandle


class FailingReadHandle(MemoryFileHandle):
    async def read_text(self) -> str:
        raise OSError("permission denied")


class FailingSampleHandle(MemoryFileHandle):
    async def read_head(self, n: int) -> bytes:
        raise OSError("device not ready")


class TestProcessChunk:
    @pytest.mark.asyncio
    async def test_reads_text_files(self, settings: Settings, make_text):
        files = [make_text("package.json", 10), make_text("src/a.txt", 5)]
        cp = ChunkProcessor(settings)
        out = await cp.process_chunk(files, 0, 10)

        assert [f.path for f in out] == ["package.json", "src/a.txt"]
        assert out[0].content == "a" * 10
        assert out[0].priority == 5
        assert out[1].priority == 0
        assert cp.total_size == 15

    @pytest.mark.asyncio
    async def test_only_processes_window(self, settings: Settings, make_text):
        files = [make_text(f"f{i}.txt", 1) for i in range(5)]
        out = await ChunkProcessor(settings).process_chunk(files, 2, 2)
        assert [f.path for f in out] == ["f2.txt", "f3.txt"]

    @pytest.mark.asyncio
    async def test_window_past_end(self, settings: Settings, make_text):
        files = [make_text("a.txt", 1)]
        assert await ChunkProcessor(settings).process_chunk(files, 5, 2) == []

    @pytest.mark.asyncio
    async def test_skips_oversized(self, small_settings: Settings, make_text, caplog):
        files = [make_text("big.txt", 201), make_text("ok.txt", 10)]
        cp = ChunkProcessor(small_settings)
        with caplog.at_level(logging.WARNING, logger="foldercontext"):
            out = await cp.process_chunk(files, 0, 10)

        assert [f.path for f in out] == ["ok.txt"]
        assert cp.skipped["too_large"] == 1
        assert cp.total_size == 10
        assert any("Skipping large file: big.txt" in r.getMessage() for r in caplog.records)

    @pytest.mark.asyncio
    async def test_skips_excluded_path(self, settings: Settings, make_text):
        files = [make_text("node_modules/x.js", 5), make_text("src/x.js", 5)]
        cp = ChunkProcessor(settings)
        out = await cp.process_chunk(files, 0, 10)
        assert [f.path for f in out] == ["src/x.js"]
        assert cp.skipped["excluded"] == 1

    @pytest.mark.asyncio
    async def test_custom_inclusion_filter(self, settings: Settings, make_text):
        files = [make_text("keep.md", 5), make_text("drop.md", 5)]
        cp = ChunkProcessor(settings, include=lambda p: p.startswith("keep"))
        out = await cp.process_chunk(files, 0, 10)
        assert [f.path for f in out] == ["keep.md"]

    @pytest.mark.asyncio
    async def test_skips_binary(self, settings: Settings, make_text, make_binary):
        files = [make_binary("blob.dat", 100), make_text("a.txt", 5)]
        cp = ChunkProcessor(settings)
        out = await cp.process_chunk(files, 0, 10)
        assert [f.path for f in out] == ["a.txt"]
        assert cp.skipped["binary"] == 1
        assert cp.binary_paths == ["blob.dat"]
        assert cp.total_size == 5

    @pytest.mark.asyncio
    async def test_binary_detector_gets_sample_size(self, make_text):
        seen: list[int] = []

        async def detector(handle, sample_size):
            seen.append(sample_size)
            return False

        s = Settings(_env_file=None, binary_check_sample_size=16)
        await ChunkProcessor(s, binary_detector=detector).process_chunk([make_text("a.txt", 1)], 0, 1)
        assert seen == [16]

    @pytest.mark.asyncio
    async def test_unreadable_file_is_skipped(self, settings: Settings, make_text):
        files = [
            make_text("a.txt", 5),
            FailingReadHandle("repo/locked.txt", "secret"),
            make_text("b.txt", 5),
        ]
        cp = ChunkProcessor(settings)
        out = await cp.process_chunk(files, 0, 10)
        assert [f.path for f in out] == ["a.txt", "b.txt"]
        assert cp.skipped["unreadable"] == 1
        assert cp.total_size == 10

    @pytest.mark.asyncio
    async def test_failed_sample_is_skipped(self, settings: Settings, make_text):
        files = [FailingSampleHandle("repo/odd.txt", "x"), make_text("b.txt", 5)]
        cp = ChunkProcessor(settings)
        out = await cp.process_chunk(files, 0, 10)
        assert [f.path for f in out] == ["b.txt"]
        assert cp.skipped["unreadable"] == 1


class TestSizeBudget:
    @pytest.mark.asyncio
    async def test_raises_when_budget_crossed(self, small_settings: Settings, make_text):
        files = [make_text("a.txt", 100), make_text("b.txt", 100), make_text("c.txt", 100)]
        cp = ChunkProcessor(small_settings)
        with pytest.raises(SizeLimitExceededError, match="Total size limit") as exc_info:
            await cp.process_chunk(files, 0, 3)
        assert exc_info.value.path == "c.txt"
        assert exc_info.value.limit == 250
        assert cp.total_size == 200

    @pytest.mark.asyncio
    async def test_exact_budget_is_accepted(self, small_settings: Settings, make_text):
        files = [make_text("a.txt", 150), make_text("b.txt", 100)]
        cp = ChunkProcessor(small_settings)
        out = await cp.process_chunk(files, 0, 2)
        assert len(out) == 2
        assert cp.total_size == 250

    @pytest.mark.asyncio
    async def test_skipped_files_do_not_count(self, small_settings: Settings, make_text, make_binary):
        files = [
            make_binary("a.bin.dat", 200),
            make_text("node_modules/x.js", 200),
            make_text("ok.txt", 200),
        ]
        cp = ChunkProcessor(small_settings)
        out = await cp.process_chunk(files, 0, 3)
        assert [f.path for f in out] == ["ok.txt"]
        assert cp.total_size == 200

    @pytest.mark.asyncio
    async def test_budget_spans_chunks(self, small_settings: Settings, make_text):
        files = [make_text(f"f{i}.txt", 100) for i in range(3)]
        cp = ChunkProcessor(small_settings)
        await cp.process_chunk(files, 0, 2)
        with pytest.raises(SizeLimitExceededError):
            await cp.process_chunk(files, 2, 2)

    @pytest.mark.asyncio
    async def test_over_budget_file_is_not_read(self, small_settings: Settings, make_text):
        class TrackingHandle(MemoryFileHandle):
            read = False

            async def read_text(self) -> str:
                TrackingHandle.read = True
                return await super().read_text()

        files = [make_text("a.txt", 200), TrackingHandle("repo/b.txt", "b" * 100)]
        with pytest.raises(SizeLimitExceededError):
            await ChunkProcessor(small_settings).process_chunk(files, 0, 2)
        assert TrackingHandle.read is False
