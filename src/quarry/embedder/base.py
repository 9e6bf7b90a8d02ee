# src/quarry/embedder/base.py
"""Embedder abstract base class."""

from abc import ABC, abstractmethod

from quarry.models import EmbeddingResult


class Embedder(ABC):
    """Abstract base class for text embedding.

    Results carry the model that produced the vector so callers can keep
    vectors of one provenance together.
    """

    @property
    @abstractmethod
    def models(self) -> list[str]:
        """Model identifiers this embedder can use, in preference order."""
        ...

    @abstractmethod
    def embed_text(self, text: str, model: str | None = None) -> EmbeddingResult:
        """Embed a single text, optionally restricted to one model."""
        ...

    async def aembed_text(self, text: str, model: str | None = None) -> EmbeddingResult:
        """Embed a single text (async).

        Default implementation calls sync embed_text().
        """
        return self.embed_text(text, model)
