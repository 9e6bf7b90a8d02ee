# src/quarry/chunker/sliding_window.py
"""Fixed-size sliding window chunker."""

from quarry.chunker.base import Chunker

DEFAULT_CHUNK_SIZE = 1000
DEFAULT_OVERLAP = 200
MIN_CHUNK_SIZE = 100


def _clamp(text_length: int, chunk_size: int, overlap: int) -> tuple[int, int]:
    chunk_size = max(MIN_CHUNK_SIZE, min(chunk_size, text_length))
    overlap = max(0, min(overlap, chunk_size // 2))
    return chunk_size, overlap


def window_spans(
    text: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    overlap: int = DEFAULT_OVERLAP,
) -> list[tuple[int, int]]:
    """Compute the untrimmed [start, end) windows used to split text.

    Each window starts `overlap` characters before the previous one ended.
    Once a window reaches the end of the text, the next start is end - overlap,
    which yields at most one trailing fragment; the walk stops as soon as the
    start would not advance.

    Example (2500 characters, defaults):
        [(0, 1000), (800, 1800), (1600, 2500), (2300, 2500)]
    """
    if not text:
        return []

    chunk_size, overlap = _clamp(len(text), chunk_size, overlap)

    spans: list[tuple[int, int]] = []
    start = 0
    while start < len(text):
        end = min(start + chunk_size, len(text))
        spans.append((start, end))
        next_start = end - overlap
        if next_start <= start:
            break
        start = next_start

    return spans


def split_text(
    text: str | None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    overlap: int = DEFAULT_OVERLAP,
) -> list[str]:
    """Split text into overlapping, whitespace-trimmed segments.

    Args:
        text: Text to split. Empty or None yields [""] rather than [].
        chunk_size: Window size, clamped to [100, len(text)].
        overlap: Characters shared by consecutive windows, clamped to [0, chunk_size // 2].

    Returns:
        Non-empty list of segments. Segments that are blank after trimming are dropped;
        if every segment is blank the original text is returned as the only segment.
    """
    if not text:
        return [text or ""]

    segments = []
    for start, end in window_spans(text, chunk_size, overlap):
        segment = text[start:end].strip()
        if segment:
            segments.append(segment)

    return segments or [text]


class SlidingWindowChunker(Chunker):
    """Chunker that slides a fixed-size character window over the text.

    Consecutive windows overlap so that a sentence straddling a boundary is
    still retrievable in full from one of the two chunks.

    Example:
        chunker = SlidingWindowChunker(chunk_size=1000, overlap=200)
        chunks = chunker.chunk(document_text, document_id="doc-1", filename="notes.txt")
    """

    def __init__(
        self,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        overlap: int = DEFAULT_OVERLAP,
    ) -> None:
        """Initialize the chunker.

        Args:
            chunk_size: Target characters per chunk (clamped per document).
            overlap: Characters of overlap between consecutive chunks.
        """
        self.chunk_size = chunk_size
        self.overlap = overlap

    def split(self, text: str | None) -> list[str]:
        """Split text using this chunker's window settings."""
        return split_text(text, self.chunk_size, self.overlap)
