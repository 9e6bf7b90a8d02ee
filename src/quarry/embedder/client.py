# src/quarry/embedder/client.py
"""Client-based embedder with ordered model fallback."""

import logging

from quarry.embedder.base import Embedder
from quarry.embedder.exceptions import EmbeddingError
from quarry.models import EmbeddingResult
from quarry.providers.base import EmbeddingClient
from quarry.resilience import RetryPolicy

logger = logging.getLogger(__name__)


class FallbackEmbedder(Embedder):
    """Embedder that tries EmbeddingClients in order until one answers.

    Each client call is wrapped in the retry policy. The first client is the
    preferred ("advanced") model, later ones are fallbacks ("standard").

    Example:
        from quarry.embedder import FallbackEmbedder
        from quarry.providers.litellm import EmbeddingModels, LiteLLMEmbeddingClient

        embedder = FallbackEmbedder([
            LiteLLMEmbeddingClient(model=EmbeddingModels.GEMINI_EMBEDDING_001),
            LiteLLMEmbeddingClient(model=EmbeddingModels.GEMINI_004),
        ])
        result = await embedder.aembed_text("What is a vector store?")
        result.model  # whichever client answered
    """

    def __init__(
        self,
        clients: list[EmbeddingClient],
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        """Initialize the embedder.

        Args:
            clients: Embedding clients in preference order. Model names must be unique.
            retry_policy: Retry applied to each client call. Default: RetryPolicy().
        """
        if not clients:
            raise ValueError("FallbackEmbedder requires at least one embedding client")
        names = [client.model for client in clients]
        if len(set(names)) != len(names):
            raise ValueError(f"Embedding client models must be unique, got {names}")
        self._clients = list(clients)
        self.retry_policy = retry_policy or RetryPolicy()

    @property
    def models(self) -> list[str]:
        return [client.model for client in self._clients]

    def _candidates(self, model: str | None) -> list[EmbeddingClient]:
        if model is None:
            return self._clients
        candidates = [client for client in self._clients if client.model == model]
        if not candidates:
            raise ValueError(f"Unknown embedding model {model!r}; available: {self.models}")
        return candidates

    @staticmethod
    def _first_vector(vectors: list[list[float]], model: str) -> list[float]:
        if not vectors or not vectors[0]:
            raise ValueError(f"Embedding model {model} returned no vector")
        return vectors[0]

    def embed_text(self, text: str, model: str | None = None) -> EmbeddingResult:
        """Embed text with the first client that succeeds.

        Raises:
            EmbeddingError: If every candidate client failed.
        """
        errors: list[tuple[str, BaseException]] = []
        for client in self._candidates(model):
            try:
                vectors = self.retry_policy.call(lambda c=client: c.embed([text]))
                return EmbeddingResult(
                    embedding=self._first_vector(vectors, client.model), model=client.model
                )
            except Exception as e:
                logger.warning("Embedding with %s failed: %s", client.model, e)
                errors.append((client.model, e))
        raise EmbeddingError(f"Failed to embed text with {[m for m, _ in errors]}", errors)

    async def aembed_text(self, text: str, model: str | None = None) -> EmbeddingResult:
        """Embed text with the first client that succeeds (async).

        Raises:
            EmbeddingError: If every candidate client failed.
        """
        errors: list[tuple[str, BaseException]] = []
        for client in self._candidates(model):
            try:
                vectors = await self.retry_policy.acall(lambda c=client: c.aembed([text]))
                return EmbeddingResult(
                    embedding=self._first_vector(vectors, client.model), model=client.model
                )
            except Exception as e:
                logger.warning("Embedding with %s failed: %s", client.model, e)
                errors.append((client.model, e))
        raise EmbeddingError(f"Failed to embed text with {[m for m, _ in errors]}", errors)
