# src/quarry/configuration/providers/litellm.py
"""LiteLLM provider configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from quarry.providers.litellm.models import ChatModels, EmbeddingModels

if TYPE_CHECKING:
    from quarry.embedder import Embedder
    from quarry.providers import LLMClient
    from quarry.settings import Settings


@dataclass(frozen=True)
class LiteLLMProvider:
    """Provider configuration using LiteLLM for LLM and embedding calls.

    Each capability has a preferred model and an optional fallback that is
    tried when the preferred one fails.

    Args:
        llm: LiteLLM model identifier for question generation.
        embedding: LiteLLM model identifier for embeddings.
        fallback_llm: Model tried when `llm` fails. None disables the fallback.
        fallback_embedding: Model tried when `embedding` fails. None disables the fallback.

    Example:
        provider = LiteLLMProvider(
            llm="gemini/gemini-2.5-pro",
            fallback_llm="gemini/gemini-2.5-flash",
            embedding="gemini/gemini-embedding-001",
            fallback_embedding="gemini/text-embedding-004",
        )
    """

    llm: str = ChatModels.GEMINI_25_PRO
    embedding: str = EmbeddingModels.GEMINI_EMBEDDING_001
    fallback_llm: str | None = ChatModels.GEMINI_25_FLASH
    fallback_embedding: str | None = EmbeddingModels.GEMINI_004

    def build_llm_client(self, settings: Settings) -> LLMClient:
        """Build a LiteLLMClient, chained with the fallback model if one is set."""
        from quarry.providers import LiteLLMClient, LLMClientChain

        primary = LiteLLMClient(model=self.llm)
        if not self.fallback_llm or self.fallback_llm == self.llm:
            return primary
        return LLMClientChain([primary, LiteLLMClient(model=self.fallback_llm)])

    def build_embedder(self, settings: Settings) -> Embedder:
        """Build a FallbackEmbedder over the preferred and fallback embedding models.

        Args:
            settings: Settings containing the retry configuration.
        """
        from quarry.embedder import FallbackEmbedder
        from quarry.providers import LiteLLMEmbeddingClient

        clients = [LiteLLMEmbeddingClient(model=self.embedding)]
        if self.fallback_embedding and self.fallback_embedding != self.embedding:
            clients.append(LiteLLMEmbeddingClient(model=self.fallback_embedding))
        return FallbackEmbedder(clients, retry_policy=settings.retry_policy())
