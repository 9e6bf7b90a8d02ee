# src/quarry/embedder/exceptions.py
"""Exceptions for embedding."""


class EmbeddingError(Exception):
    """Raised when a text could not be embedded by any available model.

    Attributes:
        errors: (model, exception) pairs for each model that was tried.
    """

    def __init__(self, message: str, errors: list[tuple[str, BaseException]]) -> None:
        super().__init__(message)
        self.errors = errors
