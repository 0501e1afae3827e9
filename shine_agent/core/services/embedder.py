"""Embedding orchestration for chunks and queries."""

from __future__ import annotations

import logging
from dataclasses import replace

from ..domain import Chunk
from ..domain.exceptions import EmbeddingAPIError, EmbeddingError
from ..ports.embedding_port import EmbeddingPort

logger = logging.getLogger(__name__)


class Embedder:
    """Turns text into vectors through an embedding service.

    Batch embedding is tolerant of partial failure: a chunk whose embedding
    fails is kept without a vector so the rest of the corpus still gets
    ingested. Such chunks simply never match a similarity search.
    """

    def __init__(self, embedding: EmbeddingPort) -> None:
        self.embedding = embedding

    def embed(self, text: str) -> list[float]:
        """Embed a query.

        Raises:
            EmbeddingError: If the service fails or returns an empty vector.
        """
        try:
            vector = self.embedding.embed_query(text)
        except EmbeddingError:
            raise
        except Exception as e:
            raise EmbeddingError("Failed to embed query", cause=e) from e

        if not vector:
            raise EmbeddingAPIError("Embedding service returned an empty vector")
        return list(vector)

    def embed_batch(self, chunks: list[Chunk]) -> list[Chunk]:
        """Return copies of ``chunks`` with embeddings attached where possible."""
        embedded: list[Chunk] = []
        failures = 0

        for position, chunk in enumerate(chunks, start=1):
            logger.debug("Embedding chunk %d/%d: %s", position, len(chunks), chunk.chunk_id)
            try:
                vector = self.embedding.embed_document(chunk.content)
                if not vector:
                    raise EmbeddingAPIError(
                        "Embedding service returned an empty vector",
                        context={"chunk_id": chunk.chunk_id},
                    )
                embedded.append(replace(chunk, embedding=list(vector)))
            except Exception as e:
                failures += 1
                logger.warning("Keeping chunk %s without embedding: %s", chunk.chunk_id, e)
                embedded.append(replace(chunk, embedding=None))

        if failures:
            logger.warning("%d of %d chunks could not be embedded", failures, len(chunks))
        else:
            logger.info("Generated embeddings for %d chunks", len(chunks))

        return embedded
