# src/quarry/quarry.py
"""Central entry point for Quarry."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from quarry.chunker import SlidingWindowChunker
from quarry.models import GenerationResult
from quarry.question_generator import (
    DirectQuestionGenerator,
    GenerationError,
    RAGQuestionGenerator,
)
from quarry.retriever import Retriever
from quarry.settings import Settings

if TYPE_CHECKING:
    from quarry.configuration import ProviderConfig
    from quarry.embedder import Embedder
    from quarry.providers import LLMClient

logger = logging.getLogger(__name__)


class Quarry:
    """Bundles the model clients and settings for question generation.

    Generation first runs the retrieval-augmented pipeline. If that fails and
    settings.use_direct_fallback is on, it retries once by prompting with the
    head of the raw document.

    There are two ways to create a Quarry instance:

    1. With a provider configuration:

        from quarry import LiteLLMProvider, Quarry

        quarry = Quarry(provider=LiteLLMProvider(llm="gemini/gemini-2.5-pro"))
        result = quarry.generate_questions(text, count=10, difficulty="medium")

    2. With explicit clients (tests, custom providers):

        quarry = Quarry.from_clients(llm_client=my_llm, embedder=my_embedder)
    """

    def __init__(
        self,
        *,
        provider: ProviderConfig | None = None,
        llm_client: LLMClient | None = None,
        embedder: Embedder | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Create a Quarry instance.

        Args:
            provider: Provider configuration that builds the LLM client and embedder.
                      Mutually exclusive with explicit clients.
            llm_client: Explicit LLM client. Use together with embedder.
            embedder: Explicit embedder.
            settings: Behavioral settings (defaults, chunking, retries, prompts).

        Raises:
            ValueError: If neither a provider nor both explicit clients are given,
                        or if both are given.
        """
        self.settings = settings if settings is not None else Settings()

        if provider is not None:
            if llm_client is not None or embedder is not None:
                raise ValueError("Cannot mix 'provider' with explicit clients")
            self.llm_client = provider.build_llm_client(self.settings)
            self.embedder = provider.build_embedder(self.settings)
        elif llm_client is not None and embedder is not None:
            self.llm_client = llm_client
            self.embedder = embedder
        else:
            raise ValueError("Must provide either 'provider' or both 'llm_client' and 'embedder'")

    @classmethod
    def from_clients(
        cls,
        *,
        llm_client: LLMClient,
        embedder: Embedder,
        settings: Settings | None = None,
    ) -> Quarry:
        """Create Quarry from already-built clients."""
        return cls(llm_client=llm_client, embedder=embedder, settings=settings)

    def rag_generator(self) -> RAGQuestionGenerator:
        """Build a retrieval-augmented generator from the settings."""
        s = self.settings
        return RAGQuestionGenerator(
            llm_client=self.llm_client,
            embedder=self.embedder,
            chunker=SlidingWindowChunker(chunk_size=s.chunk_size, overlap=s.chunk_overlap),
            retriever=Retriever(per_probe_k=s.probe_k),
            options=s.generation_options(),
            retry_policy=s.retry_policy(),
            max_context_chars=s.max_context_chars,
            prompt_template=s.rag_prompt,
        )

    def direct_generator(self) -> DirectQuestionGenerator:
        """Build the no-retrieval generator from the settings."""
        s = self.settings
        return DirectQuestionGenerator(
            llm_client=self.llm_client,
            options=s.generation_options(),
            retry_policy=s.retry_policy(),
            max_context_chars=s.max_context_chars,
            prompt_template=s.direct_prompt,
        )

    async def agenerate_questions(
        self,
        document_text: str,
        count: int | None = None,
        difficulty: str | None = None,
        filename: str = "document",
        language: str | None = None,
    ) -> GenerationResult:
        """Generate interview questions for a document (async).

        Args:
            document_text: Plain text of the document.
            count: Questions to request. Default: settings.question_count.
            difficulty: "easy", "medium" or "hard". Default: settings.difficulty.
            filename: Shown to the model and recorded on the result.
            language: Output language code. Default: settings.language.

        Returns:
            GenerationResult with mode "rag", or "direct" if the fallback was used.

        Raises:
            GenerationError: Both paths failed (or RAG failed and the fallback is off).
        """
        count = count if count is not None else self.settings.question_count
        difficulty = difficulty or self.settings.difficulty
        language = language or self.settings.language

        try:
            questions = await self.rag_generator().agenerate(
                document_text, count, difficulty, filename, language
            )
            return GenerationResult(
                questions=questions, mode="rag", filename=filename, requested_count=count
            )
        except GenerationError as e:
            if not self.settings.use_direct_fallback:
                raise
            logger.warning("RAG generation failed, falling back to direct generation: %s", e)
            rag_error = str(e)

        questions = await self.direct_generator().agenerate(
            document_text, count, difficulty, filename, language
        )
        return GenerationResult(
            questions=questions,
            mode="direct",
            filename=filename,
            requested_count=count,
            error=rag_error,
        )

    def generate_questions(
        self,
        document_text: str,
        count: int | None = None,
        difficulty: str | None = None,
        filename: str = "document",
        language: str | None = None,
    ) -> GenerationResult:
        """Generate interview questions for a document.

        Runs agenerate_questions() in a new event loop; do not call from async code.
        """
        return asyncio.run(
            self.agenerate_questions(document_text, count, difficulty, filename, language)
        )
