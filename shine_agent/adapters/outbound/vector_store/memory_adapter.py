"""In-process knowledge store for local development and tests."""

from __future__ import annotations

import threading
from dataclasses import replace

import numpy as np

from ....core.domain import Chunk, SearchResult
from ....core.domain.exceptions import StoreQueryError
from ....core.ports.vector_store_port import (
    DEFAULT_SIMILARITY_THRESHOLD,
    DEFAULT_UPSERT_BATCH_SIZE,
    KnowledgeStorePort,
)


class InMemoryKnowledgeStore(KnowledgeStorePort):
    """Dictionary-backed store with brute-force cosine search.

    Chunks keep their first insertion position across upserts, which is also
    the tie-break order for equal scores. Nothing survives the process.
    """

    def __init__(self) -> None:
        self._chunks: dict[str, Chunk] = {}
        self._lock = threading.Lock()

    def clear(self) -> None:
        with self._lock:
            self._chunks.clear()

    def upsert(self, chunks: list[Chunk], batch_size: int = DEFAULT_UPSERT_BATCH_SIZE) -> int:
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")

        with self._lock:
            for start in range(0, len(chunks), batch_size):
                for chunk in chunks[start : start + batch_size]:
                    self._chunks[chunk.chunk_id] = replace(chunk, metadata=dict(chunk.metadata))
        return len(chunks)

    def search(
        self,
        query_vector: list[float],
        threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
        limit: int = 5,
    ) -> list[SearchResult]:
        if limit < 1:
            raise ValueError("limit must be positive")

        query = np.asarray(query_vector, dtype=float)
        query_norm = np.linalg.norm(query)
        if query.ndim != 1 or query_norm == 0:
            raise StoreQueryError("Query vector must be a non-zero 1-D vector")

        with self._lock:
            candidates = [chunk for chunk in self._chunks.values() if chunk.embedding]

        scored: list[tuple[float, Chunk]] = []
        for chunk in candidates:
            vector = np.asarray(chunk.embedding, dtype=float)
            if vector.shape != query.shape:
                raise StoreQueryError(
                    "Embedding dimension mismatch",
                    context={"chunk_id": chunk.chunk_id, "expected": query.shape[0], "got": vector.shape[0]},
                )
            norm = np.linalg.norm(vector)
            if norm == 0:
                continue
            similarity = float(np.dot(query, vector) / (query_norm * norm))
            if similarity >= threshold:
                scored.append((similarity, chunk))

        # sort is stable, so equal scores keep insertion order
        scored.sort(key=lambda item: item[0], reverse=True)
        return [
            SearchResult(content=chunk.content, metadata=dict(chunk.metadata), similarity=score)
            for score, chunk in scored[:limit]
        ]

    def count(self) -> int:
        with self._lock:
            return len(self._chunks)

    def get(self, chunk_id: str) -> Chunk | None:
        with self._lock:
            return self._chunks.get(chunk_id)
