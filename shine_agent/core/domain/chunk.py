"""Chunk and search result models for the knowledge store."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Chunk:
    """A unit of retrievable knowledge.

    Chunk ids are derived from the source file name and the chunk's position
    inside it (``{filename}_{section}[_{sub}]``), so processing the same
    document twice produces the same ids and upserts overwrite instead of
    duplicating.

    Attributes:
        chunk_id: Stable identifier of the chunk.
        content: Trimmed, non-empty chunk text.
        metadata: ``source`` (file name), ``section`` (title) and ``type``
            (split granularity and provenance), plus optional extras.
        embedding: Vector for similarity search, or None when embedding
            generation failed for this chunk.
    """

    chunk_id: str
    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    embedding: list[float] | None = None

    @property
    def source(self) -> str:
        return str(self.metadata.get("source", ""))

    @property
    def chunk_type(self) -> str:
        return str(self.metadata.get("type", ""))


@dataclass
class SearchResult:
    """A chunk matched by similarity search.

    Produced at query time only, never persisted.

    Attributes:
        content: The matched chunk text.
        metadata: The matched chunk metadata.
        similarity: Backend similarity score (cosine), higher is more relevant.
    """

    content: str
    metadata: dict[str, Any]
    similarity: float

    @property
    def source(self) -> str:
        return str(self.metadata.get("source", "Unknown"))
