"""Data models for Quarry."""

from quarry.models.chunk import Chunk, EmbeddedChunk, EmbeddingResult
from quarry.models.question import (
    COGNITIVE_LEVELS,
    DIFFICULTIES,
    CognitiveLevel,
    Difficulty,
    Question,
)
from quarry.models.results import GenerationResult

__all__ = [
    "Chunk",
    "EmbeddedChunk",
    "EmbeddingResult",
    "Question",
    "Difficulty",
    "CognitiveLevel",
    "DIFFICULTIES",
    "COGNITIVE_LEVELS",
    "GenerationResult",
]
