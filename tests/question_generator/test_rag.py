# tests/question_generator/test_rag.py
"""Tests for retrieval-augmented question generation."""

import pytest

from quarry.question_generator import (
    GenerationError,
    MalformedResponse,
    QuestionGenerator,
    RAGQuestionGenerator,
)
from quarry.resilience import RetryPolicy
from quarry.retriever import PROBE_SEPARATOR
from quarry.stores import InMemoryVectorStore


@pytest.fixture
def make_generator(fake_embedder):
    def build(llm, embedder=None, **kwargs):
        return RAGQuestionGenerator(
            llm_client=llm,
            embedder=embedder or fake_embedder,
            retry_policy=RetryPolicy(max_retries=2, base_delay_ms=10),
            **kwargs,
        )

    return build


class TestRAGQuestionGenerator:
    def test_is_question_generator(self, make_generator, make_llm):
        assert isinstance(make_generator(make_llm(["[]"])), QuestionGenerator)

    @pytest.mark.asyncio
    async def test_generates_questions(self, make_generator, make_llm, llm_response, sample_text):
        llm = make_llm([llm_response(3, "hard")])

        questions = await make_generator(llm).agenerate(
            sample_text, count=3, difficulty="hard", filename="guide.txt"
        )

        assert len(questions) == 3
        assert all(q.difficulty == "hard" for q in questions)

    @pytest.mark.asyncio
    async def test_prompt_contains_retrieved_context(
        self, make_generator, make_llm, llm_response, sample_text
    ):
        llm = make_llm([llm_response(2)])

        await make_generator(llm).agenerate(sample_text, count=2, filename="guide.txt")

        prompt = llm.prompts[0]
        assert PROBE_SEPARATOR in prompt
        assert "guide.txt" in prompt
        assert f"{len(sample_text)} characters" in prompt
        assert "exactly 2 interview questions" in prompt

    @pytest.mark.asyncio
    async def test_language_directive(self, make_generator, make_llm, llm_response, sample_text):
        llm = make_llm([llm_response(1)])

        await make_generator(llm).agenerate(sample_text, count=1, language="tr")

        assert "in Turkish" in llm.prompts[0]

    @pytest.mark.asyncio
    async def test_empty_retrieval_uses_document_head(
        self, make_generator, make_llm, make_embedder, llm_response
    ):
        # Every chunk and query fails to embed, so retrieval is empty
        embedder = make_embedder(fail_on=("",))
        document = "A" * 8000 + "TAIL_MARKER" + "B" * 1000
        llm = make_llm([llm_response(1)])

        await make_generator(llm, embedder=embedder).agenerate(document, count=1)

        prompt = llm.prompts[0]
        assert "A" * 8000 in prompt
        assert "TAIL_MARKER" not in prompt
        assert PROBE_SEPARATOR not in prompt

    @pytest.mark.asyncio
    async def test_store_cleared_after_retrieval(
        self, make_generator, make_llm, fake_embedder, llm_response, sample_text
    ):
        stores = []

        def store_factory(embedder):
            store = InMemoryVectorStore(embedder)
            stores.append(store)
            return store

        generator = make_generator(make_llm([llm_response(1)]), store_factory=store_factory)
        await generator.agenerate(sample_text, count=1)

        assert len(stores) == 1
        assert stores[0].count() == 0

    @pytest.mark.asyncio
    async def test_index_document(self, make_generator, make_llm, fake_embedder):
        generator = make_generator(make_llm(["[]"]))
        store = InMemoryVectorStore(fake_embedder)

        stored = await generator.index_document(store, "doc-1", "a.txt", "x" * 2500)

        assert stored == 4
        assert store.count() == 4

    @pytest.mark.asyncio
    async def test_model_failure_wrapped(self, make_generator, make_llm, sample_text):
        cause = RuntimeError("model offline")
        llm = make_llm([cause])

        with pytest.raises(GenerationError) as exc_info:
            await make_generator(llm).agenerate(sample_text, count=1)

        assert exc_info.value.cause is cause
        assert exc_info.value.__cause__ is cause
        assert len(llm.prompts) == 2  # retried max_retries times

    @pytest.mark.asyncio
    async def test_retry_recovers(self, make_generator, make_llm, llm_response, sample_text):
        llm = make_llm([RuntimeError("flaky"), llm_response(1)])

        questions = await make_generator(llm).agenerate(sample_text, count=1)

        assert len(questions) == 1

    @pytest.mark.asyncio
    async def test_empty_array_is_an_error(self, make_generator, make_llm, sample_text):
        with pytest.raises(GenerationError, match="No questions were generated"):
            await make_generator(make_llm(["[]"])).agenerate(sample_text, count=2)

    @pytest.mark.asyncio
    async def test_unparseable_response(self, make_generator, make_llm, sample_text):
        with pytest.raises(MalformedResponse):
            await make_generator(make_llm(["no json here"])).agenerate(sample_text, count=1)

    @pytest.mark.asyncio
    async def test_invalid_request(self, make_generator, make_llm, sample_text):
        generator = make_generator(make_llm(["[]"]))
        with pytest.raises(ValueError):
            await generator.agenerate(sample_text, count=0)
        with pytest.raises(ValueError):
            await generator.agenerate(sample_text, difficulty="impossible")

    def test_sync_generate(self, make_generator, make_llm, llm_response, sample_text):
        questions = make_generator(make_llm([llm_response(2)])).generate(sample_text, count=2)
        assert len(questions) == 2
