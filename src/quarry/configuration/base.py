# src/quarry/configuration/base.py
"""Protocol definition for provider configuration objects.

Any frozen dataclass with the right methods satisfies the interface without
inheritance, which suits provider configs whose implementations vary by vendor.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from quarry.embedder import Embedder
    from quarry.providers import LLMClient
    from quarry.settings import Settings


@runtime_checkable
class ProviderConfig(Protocol):
    """Protocol for provider configurations.

    Provider configurations build the model-facing components:
    - LLMClient: Generates question text
    - Embedder: Embeds chunks and probe queries

    Example implementation:
        @dataclass(frozen=True)
        class MyProvider:
            def build_llm_client(self, settings: Settings) -> LLMClient: ...
            def build_embedder(self, settings: Settings) -> Embedder: ...
    """

    def build_llm_client(self, settings: Settings) -> LLMClient:
        """Build the LLM client for question generation."""
        ...

    def build_embedder(self, settings: Settings) -> Embedder:
        """Build the embedder for chunks and queries.

        Args:
            settings: Settings containing the retry configuration.
        """
        ...
