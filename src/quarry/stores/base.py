# src/quarry/stores/base.py
"""Abstract base class for chunk vector storage."""

from abc import ABC, abstractmethod

from quarry.models import Chunk


class VectorStore(ABC):
    """Abstract base class for a searchable collection of embedded chunks.

    A store is confined to one pipeline run and has no internal locking.
    """

    @abstractmethod
    async def add_documents(self, chunks: list[Chunk]) -> None:
        """Embed and add chunks. Chunks that fail to embed are skipped."""
        ...

    @abstractmethod
    async def similarity_search(self, query: str, k: int = 5) -> list[Chunk]:
        """Return up to k chunks most similar to query, best first."""
        ...

    @abstractmethod
    def clear(self) -> None:
        """Discard all stored chunks."""
        ...

    @abstractmethod
    def count(self) -> int:
        """Count the chunks currently stored."""
        ...
