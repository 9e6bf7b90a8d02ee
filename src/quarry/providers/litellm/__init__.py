"""LiteLLM provider clients for Quarry.

Usage:
    from quarry.providers.litellm import LiteLLMClient, ChatModels

    client = LiteLLMClient(model=ChatModels.GEMINI_25_PRO)
"""

from quarry.providers.litellm.client import LiteLLMClient, LiteLLMEmbeddingClient
from quarry.providers.litellm.models import ChatModels, EmbeddingModels

__all__ = [
    # Model constants
    "ChatModels",
    "EmbeddingModels",
    # Clients
    "LiteLLMClient",
    "LiteLLMEmbeddingClient",
]
