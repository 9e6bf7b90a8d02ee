"""Vector storage for Quarry."""

from quarry.stores.base import VectorStore
from quarry.stores.memory import InMemoryVectorStore, cosine_similarity

__all__ = ["VectorStore", "InMemoryVectorStore", "cosine_similarity"]
