# src/quarry/question_generator/exceptions.py
"""Exceptions for question generation."""


class GenerationError(Exception):
    """Raised when questions could not be generated for a document.

    Attributes:
        cause: The underlying error, if any. Also available as __cause__ when chained.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ResponseFormatError(GenerationError):
    """The model answered, but not with the expected JSON question array.

    Attributes:
        raw_response: The model's full response text.
    """

    def __init__(
        self, message: str, raw_response: str, cause: BaseException | None = None
    ) -> None:
        super().__init__(message, cause)
        self.raw_response = raw_response


class MalformedResponse(ResponseFormatError):
    """No '[' ... ']' span was found in the response."""


class InvalidJSON(ResponseFormatError):  # noqa: N818
    """The bracketed span is not valid JSON."""


class NotAnArray(ResponseFormatError):
    """The bracketed span parsed, but not to a JSON array."""
