"""Shared pytest fixtures."""

import json
import os

import pytest

# Use litellm's bundled model cost map; its background network fetch
# deadlocks the import when the network is unreachable.
os.environ.setdefault("LITELLM_LOCAL_MODEL_COST_MAP", "True")

from quarry.embedder import Embedder, EmbeddingError
from quarry.models import EmbeddingResult
from quarry.providers import EmbeddingClient, LLMClient

# Axes of the fake embedding space. A text's vector counts how often each
# keyword occurs, so texts about the same topic land close together.
KEYWORDS = ("concept", "technical", "practical", "definition", "process", "python")


def keyword_vector(text: str) -> list[float]:
    lowered = text.lower()
    return [float(lowered.count(word)) + 0.01 for word in KEYWORDS]


def question_payload(count: int, difficulty: str = "medium") -> list[dict]:
    return [
        {
            "question": f"What is point {i + 1}?",
            "answer": f"Point {i + 1} is explained in the document.",
            "difficulty": difficulty,
            "category": "Conceptual",
            "cognitive_level": "Understand",
            "keywords": ["point"],
            "source_context": "Introduction",
            "assessment_criteria": "Recall",
            "follow_up_potential": "Edge cases",
            "industry_relevance": "Everyday use",
        }
        for i in range(count)
    ]


class FakeEmbeddingClient(EmbeddingClient):
    """Embedding client with keyword vectors and scripted failures."""

    def __init__(self, model: str = "fake-embed", fail_times: int = 0, error=None) -> None:
        self.model = model
        self.fail_times = fail_times
        self.error = error or RuntimeError(f"{model} unavailable")
        self.calls: list[list[str]] = []

    def embed(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        if self.fail_times:
            self.fail_times -= 1
            raise self.error
        return [keyword_vector(text) for text in texts]


class FakeEmbedder(Embedder):
    """Embedder over one fake model that can be told to fail for given texts."""

    def __init__(self, model: str = "fake-embed", fail_on: tuple[str, ...] = ()) -> None:
        self.model = model
        self.fail_on = fail_on
        self.calls: list[tuple[str, str | None]] = []

    @property
    def models(self) -> list[str]:
        return [self.model]

    def embed_text(self, text: str, model: str | None = None) -> EmbeddingResult:
        self.calls.append((text, model))
        if any(marker in text for marker in self.fail_on):
            raise EmbeddingError("scripted failure", [(self.model, RuntimeError("boom"))])
        return EmbeddingResult(embedding=keyword_vector(text), model=self.model)


class FakeLLMClient(LLMClient):
    """LLM client that replays scripted responses (strings or exceptions)."""

    def __init__(self, responses=None, model: str = "fake-llm") -> None:
        self.model = model
        self.responses = list(responses or [])
        self.prompts: list[str] = []

    def complete(self, messages, options=None) -> str:
        self.prompts.append(messages[-1]["content"])
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, BaseException):
            raise response
        return response


@pytest.fixture(autouse=True)
def no_retry_sleep(monkeypatch):
    """Make retry backoff instant."""
    recorded: list[float] = []

    async def fake_asleep(seconds: float) -> None:
        recorded.append(seconds)

    def fake_sleep(seconds: float) -> None:
        recorded.append(seconds)

    monkeypatch.setattr("quarry.resilience._asleep", fake_asleep)
    monkeypatch.setattr("quarry.resilience._sleep", fake_sleep)
    return recorded


@pytest.fixture
def fake_embedder():
    return FakeEmbedder()


@pytest.fixture
def llm_response():
    """Build a JSON question array response wrapped in prose."""

    def build(count: int = 3, difficulty: str = "medium") -> str:
        return "Here you go:\n" + json.dumps(question_payload(count, difficulty)) + "\nDone."

    return build


@pytest.fixture
def sample_text():
    """A multi-paragraph document touching every probe topic."""
    paragraphs = [
        "The key concept of this guide is how Python manages memory. " * 6,
        "Technical details: the interpreter uses reference counting and a cycle collector. " * 5,
        "A practical example is closing files with a context manager in Python code. " * 5,
        "Definition: a generator is a function that yields values lazily. " * 6,
        "The process of packaging starts with a pyproject file and a build backend. " * 5,
    ]
    return "\n\n".join(paragraphs)


@pytest.fixture
def make_llm():
    """Factory for FakeLLMClient."""
    return FakeLLMClient


@pytest.fixture
def make_embedding_client():
    """Factory for FakeEmbeddingClient."""
    return FakeEmbeddingClient


@pytest.fixture
def make_embedder():
    """Factory for FakeEmbedder."""
    return FakeEmbedder
