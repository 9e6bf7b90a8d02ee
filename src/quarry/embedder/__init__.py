"""Embedding functionality for Quarry."""

from quarry.embedder.base import Embedder
from quarry.embedder.client import FallbackEmbedder
from quarry.embedder.exceptions import EmbeddingError

__all__ = ["Embedder", "FallbackEmbedder", "EmbeddingError"]
