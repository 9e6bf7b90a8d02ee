"""Configuration objects for Quarry.

Instead of factory methods, you pass a configuration object that knows how to
build its components.

Provider configurations:
- LiteLLMProvider: Uses LiteLLM for LLM and embedding calls

Example:
    from quarry import LiteLLMProvider, Quarry

    quarry = Quarry(provider=LiteLLMProvider(llm="gemini/gemini-2.5-pro"))
"""

from quarry.configuration.base import ProviderConfig
from quarry.configuration.providers import LiteLLMProvider

__all__ = ["ProviderConfig", "LiteLLMProvider"]
