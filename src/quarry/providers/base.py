# src/quarry/providers/base.py
"""Abstract base classes for LLM and embedding providers."""

from abc import ABC, abstractmethod

from pydantic import BaseModel


class GenerationOptions(BaseModel):
    """Sampling options for a generative model call.

    None means "use the provider default". Providers that do not support an
    option (e.g. top_k on OpenAI) are expected to drop it.
    """

    temperature: float | None = 0.7
    top_p: float | None = 0.9
    top_k: int | None = 40
    max_output_tokens: int | None = 8192


class LLMClient(ABC):
    """Abstract base class for LLM completion providers.

    The interface is minimal: given a prompt, return text.

    Example:
        class MyLLMClient(LLMClient):
            model = "my-model"

            def complete(self, messages, options=None):
                return my_api.chat(messages)
    """

    model: str = ""

    @abstractmethod
    def complete(
        self,
        messages: list[dict],
        options: GenerationOptions | None = None,
    ) -> str:
        """Generate a completion for the given messages.

        Args:
            messages: List of message dicts with 'role' and 'content' keys.
                      Example: [{"role": "user", "content": "Hello"}]
            options: Sampling options. None uses provider defaults.

        Returns:
            The generated text response.
        """
        ...

    async def acomplete(
        self,
        messages: list[dict],
        options: GenerationOptions | None = None,
    ) -> str:
        """Generate a completion for the given messages (async).

        Default implementation calls sync complete().
        Override in subclasses for true async behavior.
        """
        return self.complete(messages, options)


class EmbeddingClient(ABC):
    """Abstract base class for embedding providers.

    Example:
        class MyEmbeddingClient(EmbeddingClient):
            model = "my-embedding-model"

            def embed(self, texts):
                return my_api.embed_batch(texts)
    """

    model: str = ""

    @abstractmethod
    def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for multiple texts.

        Returns:
            List of embedding vectors, one per input text.
            Order is preserved (result[i] corresponds to texts[i]).
        """
        ...

    async def aembed(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for multiple texts (async).

        Default implementation calls sync embed().
        """
        return self.embed(texts)
