# src/quarry/question_generator/base.py
"""QuestionGenerator abstract base class."""

import asyncio
import logging
from abc import ABC, abstractmethod

from quarry.models import DIFFICULTIES, Question
from quarry.providers.base import GenerationOptions, LLMClient
from quarry.question_generator.exceptions import GenerationError
from quarry.question_generator.parsing import parse_questions
from quarry.question_generator.prompts import language_directive
from quarry.resilience import RetryPolicy

logger = logging.getLogger(__name__)


class QuestionGenerator(ABC):
    """Abstract base class for document question generation."""

    @abstractmethod
    async def agenerate(
        self,
        document_text: str,
        count: int = 10,
        difficulty: str = "medium",
        filename: str = "document",
        language: str = "en",
    ) -> list[Question]:
        """Generate interview questions for a document (async)."""
        ...

    def generate(
        self,
        document_text: str,
        count: int = 10,
        difficulty: str = "medium",
        filename: str = "document",
        language: str = "en",
    ) -> list[Question]:
        """Generate interview questions for a document.

        Runs agenerate() in a new event loop; do not call from async code.
        """
        return asyncio.run(self.agenerate(document_text, count, difficulty, filename, language))


class LLMQuestionGenerator(QuestionGenerator):
    """Shared prompt -> model -> parse logic for LLM-backed generators."""

    def __init__(
        self,
        llm_client: LLMClient,
        prompt_template: str,
        options: GenerationOptions | None = None,
        retry_policy: RetryPolicy | None = None,
        max_context_chars: int = 8000,
    ) -> None:
        self._client = llm_client
        self.prompt_template = prompt_template
        self.options = options or GenerationOptions()
        self.retry_policy = retry_policy or RetryPolicy()
        self.max_context_chars = max_context_chars

    @staticmethod
    def _validate_request(count: int, difficulty: str) -> None:
        if count < 1:
            raise ValueError(f"count must be at least 1, got {count}")
        if difficulty not in DIFFICULTIES:
            raise ValueError(f"difficulty must be one of {DIFFICULTIES}, got {difficulty!r}")

    def build_prompt(
        self,
        context: str,
        document_text: str,
        count: int,
        difficulty: str,
        filename: str,
        language: str,
    ) -> str:
        """Fill the prompt template for one generation call."""
        return self.prompt_template.format(
            context=context,
            count=count,
            difficulty=difficulty,
            filename=filename,
            document_length=len(document_text),
            language_directive=language_directive(language),
        )

    async def _complete_and_parse(self, prompt: str, count: int, difficulty: str) -> list[Question]:
        """Invoke the model with retry and parse its response.

        Raises:
            GenerationError: The call failed after retries, the response could
                not be read as a question array, or the array was empty.
        """
        messages = [{"role": "user", "content": prompt}]
        try:
            response_text = await self.retry_policy.acall(
                lambda: self._client.acomplete(messages, self.options)
            )
        except Exception as e:
            raise GenerationError(f"Model call failed: {e}", cause=e) from e

        questions = parse_questions(response_text, count, difficulty)
        if not questions:
            raise GenerationError("No questions were generated")
        return questions
