# tests/chunker/test_sliding_window.py
"""Tests for the sliding window chunker."""

import pytest
from pydantic import ValidationError

from quarry.chunker import Chunker, SlidingWindowChunker, split_text, window_spans


class TestWindowSpans:
    def test_defaults_on_2500_chars(self):
        spans = window_spans("x" * 2500)
        assert spans == [(0, 1000), (800, 1800), (1600, 2500), (2300, 2500)]

    def test_consecutive_windows_share_overlap(self):
        spans = window_spans("y" * 5000, chunk_size=700, overlap=150)
        for (_, prev_end), (start, _) in zip(spans, spans[1:]):
            assert start == prev_end - 150

    def test_windows_cover_every_character(self):
        text = "z" * 3333
        spans = window_spans(text, chunk_size=512, overlap=64)
        covered = set()
        for start, end in spans:
            covered.update(range(start, end))
        assert covered == set(range(len(text)))

    def test_overlap_clamped_to_half_chunk(self):
        spans = window_spans("x" * 2500, chunk_size=1000, overlap=900)
        assert spans == [(0, 1000), (500, 1500), (1000, 2000), (1500, 2500), (2000, 2500)]

    def test_negative_overlap_treated_as_zero(self):
        spans = window_spans("x" * 300, chunk_size=100, overlap=-5)
        assert spans == [(0, 100), (100, 200), (200, 300)]

    def test_chunk_size_clamped_to_minimum(self):
        spans = window_spans("x" * 500, chunk_size=10, overlap=200)
        assert all(end - start <= 100 for start, end in spans)
        assert spans[0] == (0, 100)
        assert spans[1] == (50, 150)

    def test_text_exactly_chunk_size(self):
        assert window_spans("x" * 1000) == [(0, 1000), (800, 1000)]

    def test_short_text_single_window(self):
        assert window_spans("short text") == [(0, 10)]

    def test_empty_text(self):
        assert window_spans("") == []


class TestSplitText:
    def test_none_yields_single_empty_segment(self):
        assert split_text(None) == [""]

    def test_empty_yields_single_empty_segment(self):
        assert split_text("") == [""]

    def test_whitespace_only_returns_original(self):
        text = "   \n\t  "
        assert split_text(text) == [text]

    def test_segments_are_trimmed(self):
        text = "  " + "a" * 150 + "  "
        segments = split_text(text, chunk_size=100, overlap=0)
        assert all(segment == segment.strip() for segment in segments)

    def test_blank_windows_dropped(self):
        text = "a" * 100 + " " * 300 + "b" * 100
        segments = split_text(text, chunk_size=100, overlap=0)
        assert segments == ["a" * 100, "b" * 100]

    def test_segment_count_on_2500_chars(self):
        segments = split_text("x" * 2500)
        assert [len(s) for s in segments] == [1000, 1000, 900, 200]

    def test_never_empty(self):
        for text in ["", None, " ", "a", "a" * 99, "a" * 10_000]:
            assert len(split_text(text)) >= 1


class TestSlidingWindowChunker:
    def test_is_chunker(self):
        assert isinstance(SlidingWindowChunker(), Chunker)

    def test_defaults(self):
        chunker = SlidingWindowChunker()
        assert chunker.chunk_size == 1000
        assert chunker.overlap == 200

    def test_split_uses_settings(self):
        chunker = SlidingWindowChunker(chunk_size=100, overlap=0)
        assert len(chunker.split("x" * 300)) == 3

    def test_chunk_ids_and_metadata(self):
        chunker = SlidingWindowChunker()
        chunks = chunker.chunk("x" * 2500, document_id="doc-1", filename="notes.txt")

        assert [c.id for c in chunks] == [f"doc-1_chunk_{i}" for i in range(4)]
        assert [c.index for c in chunks] == [0, 1, 2, 3]
        assert all(c.document_id == "doc-1" for c in chunks)
        assert all(c.filename == "notes.txt" for c in chunks)

    def test_chunk_empty_document(self):
        chunks = SlidingWindowChunker().chunk("", document_id="empty")
        assert len(chunks) == 1
        assert chunks[0].text == ""
        assert chunks[0].id == "empty_chunk_0"

    def test_chunks_are_frozen(self):
        chunk = SlidingWindowChunker().chunk("hello world", document_id="d")[0]
        with pytest.raises(ValidationError):
            chunk.text = "changed"  # type: ignore[misc]
