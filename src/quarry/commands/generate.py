# src/quarry/commands/generate.py
"""Generate command - interview questions for one text document.

This module holds the host-side logic the CLI calls: read and validate the
document, run generation, and classify failures.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING

import yaml

from quarry.commands.base import ErrorKind, GenerateResult
from quarry.config import create_quarry
from quarry.embedder import EmbeddingError
from quarry.providers import ProviderChainError
from quarry.question_generator import GenerationError
from quarry.resilience import is_rate_limit_error

if TYPE_CHECKING:
    from quarry.quarry import Quarry

logger = logging.getLogger(__name__)

MIN_DOCUMENT_CHARS = 100
API_KEY_MARKERS = ("api key", "api_key", "apikey", "authentication")


class InvalidDocumentError(ValueError):
    """The document cannot be used for question generation."""


def _error_chain(error: BaseException) -> Iterator[BaseException]:
    """Yield an error and every error nested inside it, depth first."""
    seen: set[int] = set()
    stack = [error]
    while stack:
        current = stack.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        yield current
        if current.__cause__ is not None:
            stack.append(current.__cause__)
        if isinstance(current, GenerationError) and current.cause is not None:
            stack.append(current.cause)
        if isinstance(current, (ProviderChainError, EmbeddingError)):
            stack.extend(nested for _, nested in current.errors)


def _is_auth_error(error: BaseException) -> bool:
    status = getattr(error, "status_code", None) or getattr(error, "status", None)
    if status in (401, 403):
        return True
    message = str(error).lower()
    return any(marker in message for marker in API_KEY_MARKERS)


def classify_error(error: BaseException) -> ErrorKind:
    """Map a failure to the action the user should take.

    Credential problems win over rate limits, which win over generic failures,
    wherever they sit in the error chain.
    """
    if isinstance(error, (InvalidDocumentError, UnicodeDecodeError)):
        return ErrorKind.INVALID_DOCUMENT

    chain = list(_error_chain(error))
    if any(_is_auth_error(e) for e in chain):
        return ErrorKind.MISSING_API_KEY
    if any(is_rate_limit_error(e) for e in chain):
        return ErrorKind.RATE_LIMITED
    return ErrorKind.GENERATION_FAILED


def read_document(path: str | Path) -> str:
    """Read a UTF-8 text document and check it has enough content.

    Raises:
        InvalidDocumentError: The file is missing, not text, or too short.
    """
    path = Path(path)
    if not path.is_file():
        raise InvalidDocumentError(f"Document not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise InvalidDocumentError(f"Document is not UTF-8 text: {path}") from e
    validate_document(text)
    return text


def validate_document(text: str) -> None:
    """Raise InvalidDocumentError if text is too short to generate questions from."""
    if len(text.strip()) < MIN_DOCUMENT_CHARS:
        raise InvalidDocumentError("Insufficient text content in the document")


def _failed(source: str, error: Exception) -> GenerateResult:
    kind = classify_error(error)
    logger.error("Generation for %s failed (%s): %s", source, kind.value, error)
    return GenerateResult(success=False, source=source, error=str(error), error_kind=kind)


def generate(
    path: str | Path,
    count: int | None = None,
    difficulty: str | None = None,
    language: str | None = None,
    config_path: str | Path | None = None,
    quarry: Quarry | None = None,
) -> GenerateResult:
    """Generate interview questions for the text file at path.

    Args:
        path: UTF-8 text file to generate questions from.
        count: Number of questions (None for the configured default).
        difficulty: "easy", "medium" or "hard" (None for the configured default).
        language: Output language code (None for the configured default).
        config_path: Override config file path.
        quarry: Pre-built Quarry instance; built from config when None.

    Returns:
        GenerateResult; on failure success is False and error_kind says why.
    """
    source = str(path)
    try:
        text = read_document(path)
    except InvalidDocumentError as e:
        return _failed(source, e)

    if quarry is None:
        try:
            quarry = create_quarry(config_path)
        except (OSError, yaml.YAMLError, ValueError) as e:
            logger.error("Could not load configuration: %s", e)
            return GenerateResult(
                success=False,
                source=source,
                error=f"Could not load configuration: {e}",
                error_kind=ErrorKind.INVALID_CONFIG,
            )

    try:
        generation = quarry.generate_questions(
            text,
            count=count,
            difficulty=difficulty,
            filename=Path(path).name,
            language=language,
        )
    except GenerationError as e:
        return _failed(source, e)
    except ValueError as e:
        # Bad request parameters (count, difficulty)
        return GenerateResult(
            success=False,
            source=source,
            error=str(e),
            error_kind=ErrorKind.GENERATION_FAILED,
        )

    return GenerateResult(success=True, source=source, generation=generation)
