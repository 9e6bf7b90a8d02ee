"""Text chunking for Quarry."""

from quarry.chunker.base import Chunker
from quarry.chunker.sliding_window import SlidingWindowChunker, split_text, window_spans

__all__ = ["Chunker", "SlidingWindowChunker", "split_text", "window_spans"]
