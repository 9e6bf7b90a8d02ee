# src/quarry/providers/litellm/client.py
"""LiteLLM client implementations for LLM and embedding APIs."""

from typing import Any

import litellm

from quarry.providers.base import EmbeddingClient, GenerationOptions, LLMClient
from quarry.providers.litellm.models import ChatModels, EmbeddingModels


class LiteLLMClient(LLMClient):
    """LiteLLM-based LLM client for text generation.

    Supports any model available through LiteLLM (Gemini, OpenAI, Anthropic,
    Bedrock, etc.). Retries are handled by quarry.resilience, so LiteLLM's own
    retry loop is off by default.

    Example:
        from quarry.providers.litellm import LiteLLMClient, ChatModels

        client = LiteLLMClient(model=ChatModels.GEMINI_25_PRO)
        response = client.complete([{"role": "user", "content": "Hello"}])
    """

    def __init__(
        self,
        model: str = ChatModels.GEMINI_25_PRO,
        num_retries: int = 0,
    ) -> None:
        """Initialize the LiteLLM client.

        Args:
            model: LiteLLM model identifier.
                   Examples: "gemini/gemini-2.5-pro", "openai/gpt-5-mini"
            num_retries: LiteLLM-level retries. Default 0; retry with quarry.resilience.
        """
        self.model = model
        self.num_retries = num_retries

    def _completion_kwargs(
        self, messages: list[dict], options: GenerationOptions | None
    ) -> dict[str, Any]:
        completion_kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "drop_params": True,
            "num_retries": self.num_retries,
        }
        if options is not None:
            if options.temperature is not None:
                completion_kwargs["temperature"] = options.temperature
            if options.top_p is not None:
                completion_kwargs["top_p"] = options.top_p
            if options.top_k is not None:
                completion_kwargs["top_k"] = options.top_k
            if options.max_output_tokens is not None:
                completion_kwargs["max_tokens"] = options.max_output_tokens
        return completion_kwargs

    def _content(self, response: Any) -> str:
        if not response.choices:
            raise ValueError(f"LLM returned no choices for model {self.model}")
        content = response.choices[0].message.content
        if content is None:
            raise ValueError(f"LLM returned None content for model {self.model}")
        return str(content)

    def complete(
        self,
        messages: list[dict],
        options: GenerationOptions | None = None,
    ) -> str:
        """Generate a completion using LiteLLM."""
        response = litellm.completion(**self._completion_kwargs(messages, options))
        return self._content(response)

    async def acomplete(
        self,
        messages: list[dict],
        options: GenerationOptions | None = None,
    ) -> str:
        """Generate a completion using LiteLLM (async)."""
        response = await litellm.acompletion(**self._completion_kwargs(messages, options))
        return self._content(response)


class LiteLLMEmbeddingClient(EmbeddingClient):
    """LiteLLM-based embedding client.

    Example:
        from quarry.providers.litellm import LiteLLMEmbeddingClient, EmbeddingModels

        client = LiteLLMEmbeddingClient(model=EmbeddingModels.GEMINI_004)
        embeddings = client.embed(["Hello world", "How are you?"])
    """

    def __init__(
        self,
        model: str = EmbeddingModels.GEMINI_EMBEDDING_001,
        num_retries: int = 0,
    ) -> None:
        """Initialize the LiteLLM embedding client.

        Args:
            model: LiteLLM embedding model identifier.
            num_retries: LiteLLM-level retries. Default 0; retry with quarry.resilience.
        """
        self.model = model
        self.num_retries = num_retries

    @staticmethod
    def _vectors(response: Any) -> list[list[float]]:
        # Sort by index to maintain order
        sorted_data = sorted(response.data, key=lambda x: x["index"])
        return [item["embedding"] for item in sorted_data]

    def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings using LiteLLM."""
        if not texts:
            return []

        response = litellm.embedding(
            model=self.model,
            input=texts,
            num_retries=self.num_retries,
        )
        return self._vectors(response)

    async def aembed(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings using LiteLLM (async)."""
        if not texts:
            return []

        response = await litellm.aembedding(
            model=self.model,
            input=texts,
            num_retries=self.num_retries,
        )
        return self._vectors(response)
