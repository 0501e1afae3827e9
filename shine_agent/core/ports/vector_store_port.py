"""Knowledge Store Port Interface."""

from abc import ABC, abstractmethod

from ..domain import Chunk, SearchResult

DEFAULT_UPSERT_BATCH_SIZE = 10
DEFAULT_SIMILARITY_THRESHOLD = 0.7


class KnowledgeStorePort(ABC):
    """Abstract interface for chunk storage with similarity search.

    Implementations raise ``KnowledgeStoreError`` subclasses on failure rather
    than returning empty results.
    """

    @abstractmethod
    def clear(self) -> None:
        """Delete every stored chunk."""
        ...

    @abstractmethod
    def upsert(self, chunks: list[Chunk], batch_size: int = DEFAULT_UPSERT_BATCH_SIZE) -> int:
        """Write chunks keyed by ``chunk_id`` in batches. Returns the number written."""
        ...

    @abstractmethod
    def search(
        self,
        query_vector: list[float],
        threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
        limit: int = 5,
    ) -> list[SearchResult]:
        """Return up to ``limit`` chunks with similarity >= ``threshold``, best first."""
        ...

    @abstractmethod
    def count(self) -> int:
        """Number of stored chunks."""
        ...
