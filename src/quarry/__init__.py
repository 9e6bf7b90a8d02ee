"""Quarry - interview questions from documents.

Chunks a document, embeds the chunks into a per-call vector store, pulls
context with a fixed set of probe queries, and asks an LLM for a JSON array
of interview questions. If retrieval-augmented generation fails, Quarry can
fall back to prompting with the start of the raw document.

Quick Start (LiteLLM):
    from quarry import LiteLLMProvider, Quarry

    quarry = Quarry(provider=LiteLLMProvider(llm="gemini/gemini-2.5-pro"))
    result = quarry.generate_questions(text, count=10, difficulty="medium")

    for q in result.questions:
        print(q.question, "->", q.answer)

From a config file (quarry.yaml, .env, QUARRY_* variables):
    from quarry import create_quarry

    quarry = create_quarry()
"""

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("quarry-rag")
except PackageNotFoundError:
    # Source-tree fallback (e.g. running tests without installing the wheel).
    import tomllib
    from pathlib import Path

    def _read_version_from_pyproject() -> str | None:
        for parent in Path(__file__).resolve().parents:
            pyproject = parent / "pyproject.toml"
            if pyproject.exists():
                data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
                found = data.get("project", {}).get("version")
                return str(found) if found is not None else None
        return None

    __version__ = _read_version_from_pyproject() or "unknown"

from quarry.chunker import Chunker, SlidingWindowChunker
from quarry.config import create_quarry
from quarry.configuration import LiteLLMProvider, ProviderConfig
from quarry.embedder import Embedder, EmbeddingError, FallbackEmbedder
from quarry.models import Chunk, EmbeddedChunk, GenerationResult, Question
from quarry.providers import EmbeddingClient, LLMClient, LLMClientChain, ProviderChainError
from quarry.quarry import Quarry
from quarry.question_generator import (
    DirectQuestionGenerator,
    GenerationError,
    QuestionGenerator,
    RAGQuestionGenerator,
)
from quarry.resilience import RetryPolicy, with_retry
from quarry.retriever import Retriever, retrieve_context
from quarry.settings import Settings
from quarry.stores import InMemoryVectorStore, VectorStore

__all__ = [
    "__version__",
    # Central entry point
    "Quarry",
    "Settings",
    "create_quarry",
    # Configuration
    "ProviderConfig",
    "LiteLLMProvider",
    # Models
    "Chunk",
    "EmbeddedChunk",
    "Question",
    "GenerationResult",
    # Components
    "Chunker",
    "SlidingWindowChunker",
    "Embedder",
    "FallbackEmbedder",
    "VectorStore",
    "InMemoryVectorStore",
    "Retriever",
    "retrieve_context",
    "QuestionGenerator",
    "RAGQuestionGenerator",
    "DirectQuestionGenerator",
    # Providers
    "LLMClient",
    "EmbeddingClient",
    "LLMClientChain",
    # Resilience
    "RetryPolicy",
    "with_retry",
    # Errors
    "GenerationError",
    "EmbeddingError",
    "ProviderChainError",
]
