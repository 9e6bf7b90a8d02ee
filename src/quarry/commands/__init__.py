"""Commands layer shared by the CLI and other front ends."""

from quarry.commands import generate as generate_cmd
from quarry.commands.base import REMEDIATION, CommandResult, ErrorKind, GenerateResult
from quarry.commands.generate import InvalidDocumentError, classify_error

__all__ = [
    "generate_cmd",
    "CommandResult",
    "GenerateResult",
    "ErrorKind",
    "REMEDIATION",
    "InvalidDocumentError",
    "classify_error",
]
