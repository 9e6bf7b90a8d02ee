# src/quarry/question_generator/parsing.py
"""Extract, validate and normalize question arrays from model output."""

import json
import logging
from collections.abc import Mapping
from typing import Any

from quarry.models import COGNITIVE_LEVELS, DIFFICULTIES, Question
from quarry.question_generator.exceptions import InvalidJSON, MalformedResponse, NotAnArray

logger = logging.getLogger(__name__)

# Fallbacks for fields the model left out or left empty. "question" and
# "difficulty" depend on the call and are filled in normalize_question.
QUESTION_DEFAULTS: dict[str, Any] = {
    "answer": "Answer not provided",
    "category": "General",
    "cognitive_level": "Understand",
    "source_context": "Document content",
    "assessment_criteria": "General knowledge assessment",
    "follow_up_potential": "None specified",
    "industry_relevance": "General application",
}

_TEXT_FIELDS = (
    "answer",
    "category",
    "source_context",
    "assessment_criteria",
    "follow_up_potential",
    "industry_relevance",
)


def extract_json_array(text: str) -> str:
    """Slice from the first '[' to the last ']' of a model response.

    Handles prose or code fences around the array.

    Raises:
        MalformedResponse: If either bracket is missing or they are out of order.
    """
    start = text.find("[")
    end = text.rfind("]")
    if start == -1 or end == -1 or end < start:
        raise MalformedResponse("No JSON array found in response", raw_response=text)
    return text[start : end + 1]


def _keywords(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, list):
        return [str(item) for item in value if item]
    return []


def normalize_question(raw: Any, index: int, difficulty: str) -> Question:
    """Fill every missing or empty field of a raw question with its default.

    Args:
        raw: One element of the parsed array. A bare string is taken as the question text;
             any other non-object is treated as an empty object.
        index: Position in the array (0-based), used for the default question text.
        difficulty: Requested difficulty, used when the model's value is missing or unknown.
    """
    if isinstance(raw, str):
        raw = {"question": raw}
    elif not isinstance(raw, Mapping):
        raw = {}

    fields: dict[str, Any] = {
        "question": str(raw.get("question") or f"Question {index + 1}"),
        "keywords": _keywords(raw.get("keywords")),
    }
    for name in _TEXT_FIELDS:
        fields[name] = str(raw.get(name) or QUESTION_DEFAULTS[name])

    model_difficulty = raw.get("difficulty")
    fields["difficulty"] = model_difficulty if model_difficulty in DIFFICULTIES else difficulty

    level = raw.get("cognitive_level")
    if level not in COGNITIVE_LEVELS:
        level = QUESTION_DEFAULTS["cognitive_level"]
    fields["cognitive_level"] = level

    return Question(**fields)


def parse_questions(response_text: str, expected_count: int, difficulty: str) -> list[Question]:
    """Turn a raw model response into normalized Questions.

    A count different from expected_count is logged, not rejected.

    Raises:
        MalformedResponse: No bracketed array in the response.
        InvalidJSON: The array text does not parse.
        NotAnArray: The text parses to something other than a list.
    """
    json_text = extract_json_array(response_text)

    try:
        parsed = json.loads(json_text)
    except json.JSONDecodeError as e:
        logger.error("Failed to parse model response as JSON: %s", e)
        logger.debug("Raw response: %s", response_text)
        raise InvalidJSON(f"Response is not valid JSON: {e}", response_text, cause=e) from e

    questions = ensure_array(parsed, response_text)

    if len(questions) != expected_count:
        logger.warning("Expected %d questions, got %d", expected_count, len(questions))

    return [normalize_question(item, i, difficulty) for i, item in enumerate(questions)]


def ensure_array(parsed: Any, response_text: str) -> list[Any]:
    """Require a parsed response to be a JSON array.

    Raises:
        NotAnArray: If parsed is not a list.
    """
    if not isinstance(parsed, list):
        raise NotAnArray(f"Response is not an array (got {type(parsed).__name__})", response_text)
    return parsed
