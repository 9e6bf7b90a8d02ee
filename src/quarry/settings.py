"""Behavioral settings for Quarry.

Settings are passed programmatically - the library does not read environment
variables. Applications that want env-based config read them at the application
layer (see quarry.config) and pass values explicitly.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from quarry.providers.base import GenerationOptions
from quarry.resilience import RetryPolicy


class Settings(BaseModel):
    """Behavioral settings for Quarry.

    Example:
        settings = Settings(question_count=20, difficulty="hard", language="nl")
    """

    # Request defaults
    question_count: int = Field(default=10, ge=1)
    difficulty: Literal["easy", "medium", "hard"] = "medium"
    language: str = "en"

    # Chunking
    chunk_size: int = Field(default=1000, ge=1)
    chunk_overlap: int = Field(default=200, ge=0)

    # Retrieval
    probe_k: int = Field(default=2, ge=1)  # Chunks kept per probe query
    max_context_chars: int = Field(default=8000, ge=1)

    # Generation
    temperature: float | None = 0.7
    top_p: float | None = 0.9
    top_k: int | None = 40
    max_output_tokens: int | None = 8192
    rag_prompt: str | None = None
    direct_prompt: str | None = None
    use_direct_fallback: bool = True  # Retry once without retrieval if RAG fails

    # Retry configuration
    max_retries: int = Field(default=3, ge=1)
    retry_base_delay_ms: float = Field(default=1000, ge=0)
    max_retry_delay_ms: float = Field(default=60_000, ge=0)

    def retry_policy(self) -> RetryPolicy:
        """Build the RetryPolicy used for every model call."""
        return RetryPolicy(
            max_retries=self.max_retries,
            base_delay_ms=self.retry_base_delay_ms,
            max_delay_ms=self.max_retry_delay_ms,
        )

    def generation_options(self) -> GenerationOptions:
        """Build sampling options for the generative model."""
        return GenerationOptions(
            temperature=self.temperature,
            top_p=self.top_p,
            top_k=self.top_k,
            max_output_tokens=self.max_output_tokens,
        )
