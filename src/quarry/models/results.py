# src/quarry/models/results.py
"""Result data models for question generation."""

from typing import Literal

from pydantic import BaseModel

from quarry.models.question import Question


class GenerationResult(BaseModel):
    """Questions produced for one document, plus how they were produced."""

    questions: list[Question]
    mode: Literal["rag", "direct"]
    filename: str
    requested_count: int
    error: str | None = None  # Why the RAG path failed, when mode == "direct"
