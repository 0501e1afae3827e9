"""Embedding Port Interface."""

from abc import ABC, abstractmethod


class EmbeddingPort(ABC):
    """Abstract interface for embedding services."""

    @abstractmethod
    def embed_query(self, text: str) -> list[float]:
        """Embed a search query."""
        ...

    @abstractmethod
    def embed_document(self, text: str) -> list[float]:
        """Embed a knowledge chunk."""
        ...
