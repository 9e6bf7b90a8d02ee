# src/quarry/models/chunk.py
"""Chunk data models."""

from pydantic import BaseModel, ConfigDict


class Chunk(BaseModel):
    """A bounded piece of a source document. The unit of embedding and retrieval."""

    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    document_id: str
    index: int  # Position within the document's chunk sequence
    filename: str = ""


class EmbeddedChunk(BaseModel):
    """A Chunk paired with its embedding vector. Lives inside a vector store."""

    chunk: Chunk
    embedding: list[float]
    similarity: float | None = None  # Set only on copies produced during a search


class EmbeddingResult(BaseModel):
    """An embedding vector and the model that produced it."""

    embedding: list[float]
    model: str
