"""Provider configurations."""

from quarry.configuration.providers.litellm import LiteLLMProvider

__all__ = ["LiteLLMProvider"]
