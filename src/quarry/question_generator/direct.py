# src/quarry/question_generator/direct.py
"""Question generation straight from document text, without retrieval."""

import logging

from quarry.models import Question
from quarry.providers.base import GenerationOptions, LLMClient
from quarry.question_generator.base import LLMQuestionGenerator
from quarry.question_generator.prompts import DIRECT_PROMPT
from quarry.resilience import RetryPolicy

logger = logging.getLogger(__name__)


class DirectQuestionGenerator(LLMQuestionGenerator):
    """Prompts the model with the head of the raw document.

    This is the degraded path used when retrieval-augmented generation fails.
    It shares response parsing and normalization with RAGQuestionGenerator.
    """

    def __init__(
        self,
        llm_client: LLMClient,
        options: GenerationOptions | None = None,
        retry_policy: RetryPolicy | None = None,
        max_context_chars: int = 8000,
        prompt_template: str | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            llm_client: Any LLMClient implementation.
            options: Sampling options for the model call.
            retry_policy: Retry applied to the model call.
            max_context_chars: Characters of the document included in the prompt.
            prompt_template: Custom prompt with {context}, {count}, {difficulty},
                {filename}, {document_length} and {language_directive}.
        """
        super().__init__(
            llm_client,
            prompt_template or DIRECT_PROMPT,
            options=options,
            retry_policy=retry_policy,
            max_context_chars=max_context_chars,
        )

    async def agenerate(
        self,
        document_text: str,
        count: int = 10,
        difficulty: str = "medium",
        filename: str = "document",
        language: str = "en",
    ) -> list[Question]:
        """Generate questions from the first max_context_chars of the document.

        Raises:
            GenerationError: The model call or response parsing failed.
        """
        self._validate_request(count, difficulty)

        prompt = self.build_prompt(
            document_text[: self.max_context_chars],
            document_text,
            count,
            difficulty,
            filename,
            language,
        )
        questions = await self._complete_and_parse(prompt, count, difficulty)
        logger.info("Generated %d questions for %s without retrieval", len(questions), filename)
        return questions
