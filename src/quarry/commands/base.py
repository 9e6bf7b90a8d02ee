# src/quarry/commands/base.py
"""Base types for the commands layer.

Commands return result objects instead of raising, so every front end
(CLI, web handler) can route failures to the right remediation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from quarry.models import GenerationResult


class ErrorKind(Enum):
    """Failure classes that call for different user actions."""

    MISSING_API_KEY = "missing_api_key"
    INVALID_DOCUMENT = "invalid_document"
    INVALID_CONFIG = "invalid_config"
    RATE_LIMITED = "rate_limited"
    GENERATION_FAILED = "generation_failed"


REMEDIATION: dict[ErrorKind, str] = {
    ErrorKind.MISSING_API_KEY: "Check that a valid API key is configured for the model provider.",
    ErrorKind.INVALID_DOCUMENT: "Upload the document again as readable text.",
    ErrorKind.INVALID_CONFIG: (
        "Check the config file (--config or quarry.yaml) for typos and valid values."
    ),
    ErrorKind.RATE_LIMITED: "The model provider is rate limiting requests. Wait and try again.",
    ErrorKind.GENERATION_FAILED: "Question generation failed. Please try again.",
}


@dataclass
class CommandResult:
    """Base result type for commands."""

    success: bool
    error: str | None = None
    error_kind: ErrorKind | None = None

    @property
    def remediation(self) -> str | None:
        """What the user should do about the error, if any."""
        return REMEDIATION[self.error_kind] if self.error_kind else None


@dataclass
class GenerateResult(CommandResult):
    """Result of the generate command."""

    source: str = ""
    generation: GenerationResult | None = None
