# src/quarry/providers/chain.py
"""Ordered fallback across several LLM clients."""

import logging

from quarry.providers.base import GenerationOptions, LLMClient

logger = logging.getLogger(__name__)


class ProviderChainError(Exception):
    """Raised when every client in a chain failed.

    Attributes:
        errors: (model, exception) pairs in the order the clients were tried.
    """

    def __init__(self, message: str, errors: list[tuple[str, BaseException]]) -> None:
        super().__init__(message)
        self.errors = errors


class LLMClientChain(LLMClient):
    """LLM client that tries each wrapped client in order until one answers.

    Example:
        from quarry.providers.litellm import ChatModels, LiteLLMClient

        client = LLMClientChain([
            LiteLLMClient(model=ChatModels.GEMINI_25_PRO),
            LiteLLMClient(model=ChatModels.GEMINI_25_FLASH),
        ])
    """

    def __init__(self, clients: list[LLMClient]) -> None:
        if not clients:
            raise ValueError("LLMClientChain requires at least one client")
        self.clients = list(clients)
        self.model = clients[0].model

    def _exhausted(self, errors: list[tuple[str, BaseException]]) -> ProviderChainError:
        summary = "; ".join(f"{model or '<unnamed>'}: {error}" for model, error in errors)
        return ProviderChainError(f"All {len(errors)} LLM clients failed ({summary})", errors)

    def complete(
        self,
        messages: list[dict],
        options: GenerationOptions | None = None,
    ) -> str:
        errors: list[tuple[str, BaseException]] = []
        for client in self.clients:
            try:
                return client.complete(messages, options)
            except Exception as e:
                logger.warning("LLM %s failed, trying next client: %s", client.model, e)
                errors.append((client.model, e))
        raise self._exhausted(errors)

    async def acomplete(
        self,
        messages: list[dict],
        options: GenerationOptions | None = None,
    ) -> str:
        errors: list[tuple[str, BaseException]] = []
        for client in self.clients:
            try:
                return await client.acomplete(messages, options)
            except Exception as e:
                logger.warning("LLM %s failed, trying next client: %s", client.model, e)
                errors.append((client.model, e))
        raise self._exhausted(errors)
