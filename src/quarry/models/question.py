# src/quarry/models/question.py
"""Question data models."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Difficulty = Literal["easy", "medium", "hard"]
CognitiveLevel = Literal["Remember", "Understand", "Apply", "Analyze", "Evaluate", "Create"]

DIFFICULTIES: tuple[str, ...] = ("easy", "medium", "hard")
COGNITIVE_LEVELS: tuple[str, ...] = (
    "Remember",
    "Understand",
    "Apply",
    "Analyze",
    "Evaluate",
    "Create",
)


class Question(BaseModel):
    """An interview question with its answer and assessment metadata."""

    model_config = ConfigDict(frozen=True)

    question: str
    answer: str
    difficulty: Difficulty
    category: str
    cognitive_level: CognitiveLevel | None = None
    keywords: list[str] = Field(default_factory=list)
    source_context: str
    assessment_criteria: str | None = None
    follow_up_potential: str | None = None
    industry_relevance: str | None = None
