# src/quarry/chunker/base.py
"""Chunker abstract base class."""

from abc import ABC, abstractmethod

from quarry.models import Chunk


class Chunker(ABC):
    """Abstract base class for splitting document text into chunks."""

    @abstractmethod
    def split(self, text: str | None) -> list[str]:
        """Split text into segments. Never returns an empty list."""
        ...

    def chunk(self, text: str | None, document_id: str, filename: str = "") -> list[Chunk]:
        """Split text and wrap each segment in a Chunk owned by document_id."""
        return [
            Chunk(
                id=f"{document_id}_chunk_{index}",
                text=segment.strip(),
                document_id=document_id,
                index=index,
                filename=filename,
            )
            for index, segment in enumerate(self.split(text))
        ]
