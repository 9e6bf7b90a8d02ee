"""Provider implementations for Quarry.

This module contains LLM and embedding provider abstractions:
- LLMClient: Abstract base class for LLM completion providers
- EmbeddingClient: Abstract base class for embedding providers
- LLMClientChain: Ordered fallback across LLM clients
- LiteLLM implementations

Usage:
    from quarry.providers import LLMClient, EmbeddingClient
    from quarry.providers.litellm import LiteLLMClient, ChatModels
"""

from quarry.providers.base import EmbeddingClient, GenerationOptions, LLMClient
from quarry.providers.chain import LLMClientChain, ProviderChainError
from quarry.providers.litellm import (
    ChatModels,
    EmbeddingModels,
    LiteLLMClient,
    LiteLLMEmbeddingClient,
)

__all__ = [
    # ABCs
    "LLMClient",
    "EmbeddingClient",
    "GenerationOptions",
    # Fallback
    "LLMClientChain",
    "ProviderChainError",
    # Model constants
    "ChatModels",
    "EmbeddingModels",
    # LiteLLM clients
    "LiteLLMClient",
    "LiteLLMEmbeddingClient",
]
