# src/quarry/stores/memory.py
"""In-memory vector store with exact cosine search."""

import logging

import numpy as np

from quarry.embedder import Embedder, EmbeddingError
from quarry.models import Chunk, EmbeddedChunk
from quarry.stores.base import VectorStore

logger = logging.getLogger(__name__)


def cosine_similarity(a: list[float], b: list[float]) -> float:
    """Compute cosine similarity between two vectors.

    Formula: cos(θ) = (a · b) / (||a|| * ||b||)

    Vectors of different length (e.g. from different embedding models) and
    zero vectors have no meaningful similarity and score 0.0.
    """
    if len(a) != len(b) or not a:
        return 0.0

    a_arr, b_arr = np.asarray(a, dtype=float), np.asarray(b, dtype=float)
    norm_a, norm_b = np.linalg.norm(a_arr), np.linalg.norm(b_arr)
    if norm_a == 0 or norm_b == 0:
        return 0.0

    return float(np.dot(a_arr, b_arr) / (norm_a * norm_b))


class InMemoryVectorStore(VectorStore):
    """Vector store holding EmbeddedChunks in insertion order.

    The embedding model that answers for the first chunk is pinned for the rest
    of the store's life: later chunks and every query are embedded with that
    model only, so all vectors in the store are comparable. clear() releases
    the pin.

    Example:
        store = InMemoryVectorStore(embedder)
        await store.add_documents(chunks)
        top = await store.similarity_search("key concepts", k=2)
    """

    def __init__(self, embedder: Embedder) -> None:
        self._embedder = embedder
        self._documents: list[EmbeddedChunk] = []
        self._embedding_model: str | None = None

    @property
    def embedding_model(self) -> str | None:
        """The pinned embedding model, or None before the first successful embed."""
        return self._embedding_model

    async def add_documents(self, chunks: list[Chunk]) -> None:
        """Embed chunks one at a time and store those that succeed."""
        added = 0
        for chunk in chunks:
            try:
                result = await self._embedder.aembed_text(chunk.text, model=self._embedding_model)
            except EmbeddingError as e:
                logger.warning("Dropping chunk %s: %s", chunk.id, e)
                continue

            if self._embedding_model is None:
                self._embedding_model = result.model
                logger.debug("Pinned embedding model %s", result.model)
            self._documents.append(EmbeddedChunk(chunk=chunk, embedding=result.embedding))
            added += 1

        if added < len(chunks):
            logger.warning("Embedded %d of %d chunks", added, len(chunks))

    async def similarity_search_with_scores(self, query: str, k: int = 5) -> list[EmbeddedChunk]:
        """Rank stored chunks against query.

        Returns:
            Up to k EmbeddedChunk copies with similarity set, highest first.
            Ties keep insertion order. Empty if the store is empty or the
            query could not be embedded.
        """
        if not self._documents or k <= 0:
            return []

        try:
            result = await self._embedder.aembed_text(query, model=self._embedding_model)
        except EmbeddingError as e:
            logger.warning("Similarity search for %r returned nothing: %s", query, e)
            return []

        query_vector = result.embedding
        scored = [
            doc.model_copy(update={"similarity": cosine_similarity(query_vector, doc.embedding)})
            for doc in self._documents
        ]
        # sorted() is stable, so equal scores stay in insertion order
        scored = sorted(scored, key=lambda doc: -(doc.similarity or 0.0))
        return scored[:k]

    async def similarity_search(self, query: str, k: int = 5) -> list[Chunk]:
        """Return the k chunks most similar to query, best first."""
        return [doc.chunk for doc in await self.similarity_search_with_scores(query, k)]

    def clear(self) -> None:
        self._documents = []
        self._embedding_model = None

    def count(self) -> int:
        return len(self._documents)
