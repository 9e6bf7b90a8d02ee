# src/quarry/providers/litellm/models.py
"""Curated model constants for the LiteLLM provider.

Convenience constants for IDE autocomplete. Any valid LiteLLM model string works.

Example:
    from quarry.providers.litellm import ChatModels, LiteLLMClient

    client = LiteLLMClient(model=ChatModels.GEMINI_25_PRO)
"""


class ChatModels:
    """Chat/completion models for question generation (via LiteLLMClient)."""

    # Google Gemini
    GEMINI_25_PRO = "gemini/gemini-2.5-pro"
    GEMINI_25_FLASH = "gemini/gemini-2.5-flash"
    GEMINI_15_FLASH = "gemini/gemini-1.5-flash"

    # OpenAI
    GPT_5_MINI = "openai/gpt-5-mini"
    GPT_4O_MINI = "openai/gpt-4o-mini"

    # Anthropic
    CLAUDE_SONNET_45 = "anthropic/claude-sonnet-4-5-20250929"
    CLAUDE_HAIKU_45 = "anthropic/claude-haiku-4-5-20251001"


class EmbeddingModels:
    """Embedding models for LiteLLMEmbeddingClient."""

    # Google Gemini
    GEMINI_EMBEDDING_001 = "gemini/gemini-embedding-001"
    GEMINI_004 = "gemini/text-embedding-004"

    # OpenAI
    TEXT_3_SMALL = "openai/text-embedding-3-small"
    TEXT_3_LARGE = "openai/text-embedding-3-large"
