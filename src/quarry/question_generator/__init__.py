"""Question generation functionality for Quarry."""

from quarry.question_generator.base import LLMQuestionGenerator, QuestionGenerator
from quarry.question_generator.direct import DirectQuestionGenerator
from quarry.question_generator.exceptions import (
    GenerationError,
    InvalidJSON,
    MalformedResponse,
    NotAnArray,
    ResponseFormatError,
)
from quarry.question_generator.parsing import (
    QUESTION_DEFAULTS,
    extract_json_array,
    normalize_question,
    parse_questions,
)
from quarry.question_generator.rag import RAGQuestionGenerator

__all__ = [
    "QuestionGenerator",
    "LLMQuestionGenerator",
    "RAGQuestionGenerator",
    "DirectQuestionGenerator",
    "GenerationError",
    "ResponseFormatError",
    "MalformedResponse",
    "InvalidJSON",
    "NotAnArray",
    "QUESTION_DEFAULTS",
    "extract_json_array",
    "normalize_question",
    "parse_questions",
]
