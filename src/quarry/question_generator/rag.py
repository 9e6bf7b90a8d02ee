# src/quarry/question_generator/rag.py
"""Retrieval-augmented question generation."""

import logging
from collections.abc import Callable
from uuid import uuid4

from quarry.chunker import Chunker, SlidingWindowChunker
from quarry.embedder import Embedder
from quarry.models import Question
from quarry.providers.base import GenerationOptions, LLMClient
from quarry.question_generator.base import LLMQuestionGenerator
from quarry.question_generator.prompts import RAG_PROMPT
from quarry.resilience import RetryPolicy
from quarry.retriever import Retriever
from quarry.stores import InMemoryVectorStore, VectorStore

logger = logging.getLogger(__name__)

StoreFactory = Callable[[Embedder], VectorStore]


class RAGQuestionGenerator(LLMQuestionGenerator):
    """Generates interview questions from retrieved document passages.

    Pipeline per call:
    1. Index: chunk the document, embed each chunk, fill a fresh vector store
    2. Retrieve: run the probe queries and merge their matches into one context
       (falls back to the head of the raw document if nothing matched)
    3. Prompt the model (with retry) and parse its JSON array
    4. Normalize every element to the full Question schema

    Every call builds its own store, so nothing is shared between calls.

    Example:
        from quarry.embedder import FallbackEmbedder
        from quarry.providers.litellm import LiteLLMClient, LiteLLMEmbeddingClient

        generator = RAGQuestionGenerator(
            llm_client=LiteLLMClient(),
            embedder=FallbackEmbedder([LiteLLMEmbeddingClient()]),
        )
        questions = await generator.agenerate(text, count=10, difficulty="hard")
    """

    def __init__(
        self,
        llm_client: LLMClient,
        embedder: Embedder,
        chunker: Chunker | None = None,
        retriever: Retriever | None = None,
        options: GenerationOptions | None = None,
        retry_policy: RetryPolicy | None = None,
        max_context_chars: int = 8000,
        prompt_template: str | None = None,
        store_factory: StoreFactory = InMemoryVectorStore,
    ) -> None:
        """Initialize the generator.

        Args:
            llm_client: Any LLMClient implementation.
            embedder: Embedder used for both chunks and probe queries.
            chunker: Document splitter. Default: SlidingWindowChunker(1000, 200).
            retriever: Probe retriever. Default: Retriever() with the five standard probes.
            options: Sampling options for the model call.
            retry_policy: Retry applied to the model call.
            max_context_chars: Characters of raw text used when retrieval finds nothing.
            prompt_template: Custom prompt with {context}, {count}, {difficulty},
                {filename}, {document_length} and {language_directive}.
            store_factory: Builds the per-call vector store from the embedder.
        """
        super().__init__(
            llm_client,
            prompt_template or RAG_PROMPT,
            options=options,
            retry_policy=retry_policy,
            max_context_chars=max_context_chars,
        )
        self.embedder = embedder
        self.chunker = chunker or SlidingWindowChunker()
        self.retriever = retriever or Retriever()
        self._store_factory = store_factory

    async def index_document(
        self,
        store: VectorStore,
        document_id: str,
        filename: str,
        content: str,
    ) -> int:
        """Replace the store's contents with the chunks of one document.

        Returns:
            Number of chunks stored (chunks that failed to embed are not counted).
        """
        store.clear()
        chunks = self.chunker.chunk(content, document_id=document_id, filename=filename)
        await store.add_documents(chunks)
        logger.info(
            "Indexed %d/%d chunks for document %s", store.count(), len(chunks), document_id
        )
        return store.count()

    async def build_context(self, store: VectorStore, document_text: str) -> str:
        """Retrieve context for the prompt, or the head of the document if retrieval is empty."""
        context = await self.retriever.aretrieve(store)
        if not context:
            logger.warning("Retrieval returned no context; using raw document text")
            return document_text[: self.max_context_chars]
        return context

    async def agenerate(
        self,
        document_text: str,
        count: int = 10,
        difficulty: str = "medium",
        filename: str = "document",
        language: str = "en",
    ) -> list[Question]:
        """Generate questions for a document using retrieved context.

        The number of questions returned may differ from count.

        Raises:
            ValueError: count < 1 or an unknown difficulty.
            GenerationError: The model call or response parsing failed.
        """
        self._validate_request(count, difficulty)

        store = self._store_factory(self.embedder)
        await self.index_document(store, f"temp_{uuid4().hex[:12]}", filename, document_text)

        context = await self.build_context(store, document_text)
        store.clear()

        prompt = self.build_prompt(context, document_text, count, difficulty, filename, language)
        questions = await self._complete_and_parse(prompt, count, difficulty)
        logger.info("Generated %d questions for %s with retrieval", len(questions), filename)
        return questions
