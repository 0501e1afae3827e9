"""Qdrant-backed knowledge store.

All chunks live in a single collection with one named vector (``content``)
under cosine distance. Point ids are UUIDv5 values derived from the chunk id,
so upserting the same chunk twice overwrites the point. Chunks whose
embedding failed are stored without a vector and are never returned by
similarity search.
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Any

from ....core.domain import Chunk, SearchResult
from ....core.domain.exceptions import (
    StoreConnectionError,
    StoreQueryError,
    StoreWriteError,
)
from ....core.ports.vector_store_port import (
    DEFAULT_SIMILARITY_THRESHOLD,
    DEFAULT_UPSERT_BATCH_SIZE,
    KnowledgeStorePort,
)

if TYPE_CHECKING:
    from qdrant_client import QdrantClient

logger = logging.getLogger(__name__)

VECTOR_NAME = "content"
POINT_ID_NAMESPACE = uuid.UUID("6f1c9a52-3b8e-4d7a-9c41-2e5b7d0a8f13")


def point_id_for(chunk_id: str) -> str:
    """Deterministic Qdrant point id for a chunk id."""
    return str(uuid.uuid5(POINT_ID_NAMESPACE, chunk_id))


class QdrantKnowledgeStore(KnowledgeStorePort):
    """Knowledge store on Qdrant (Cloud or self-hosted)."""

    def __init__(
        self,
        url: str,
        api_key: str,
        collection_name: str = "knowledge_chunks",
        dimension: int = 768,
        timeout_seconds: float = 30.0,
    ) -> None:
        """Initialize the store.

        Args:
            url: Qdrant cluster URL.
            api_key: Qdrant API key.
            collection_name: Collection holding the chunks.
            dimension: Embedding vector size.
            timeout_seconds: Per-request timeout.
        """
        self.url = url
        self.api_key = api_key
        self.collection_name = collection_name
        self.dimension = dimension
        self.timeout_seconds = timeout_seconds
        self._client: QdrantClient | None = None
        self._next_position = 0

    def _get_client(self) -> "QdrantClient":
        """Get or create the Qdrant client and make sure the collection exists.

        Tie-break positions continue after the points already in the
        collection, so a fresh process appends after an earlier run.
        """
        if self._client is None:
            try:
                from qdrant_client import QdrantClient

                client = QdrantClient(
                    url=self.url,
                    api_key=self.api_key or None,
                    timeout=int(self.timeout_seconds),
                )
                self._ensure_collection(client)
                self._next_position = client.count(
                    collection_name=self.collection_name, exact=True
                ).count
            except Exception as e:
                raise StoreConnectionError(
                    f"Failed to connect to Qdrant at {self.url}",
                    cause=e,
                    context={"url": self.url, "collection": self.collection_name},
                ) from e

            self._client = client
            logger.info("Connected to Qdrant at: %s", self.url)

        return self._client

    def _ensure_collection(self, client: "QdrantClient") -> None:
        from qdrant_client.http import models

        if client.collection_exists(collection_name=self.collection_name):
            return

        logger.info("Creating collection %s", self.collection_name)
        client.create_collection(
            collection_name=self.collection_name,
            vectors_config={
                VECTOR_NAME: models.VectorParams(
                    size=self.dimension,
                    distance=models.Distance.COSINE,
                )
            },
        )

    def clear(self) -> None:
        """Delete and recreate the collection."""
        client = self._get_client()
        try:
            client.delete_collection(collection_name=self.collection_name)
            self._ensure_collection(client)
            self._next_position = 0
        except Exception as e:
            raise StoreWriteError(
                f"Failed to clear collection {self.collection_name}",
                cause=e,
                context={"collection": self.collection_name},
            ) from e
        logger.info("Cleared existing knowledge chunks in %s", self.collection_name)

    @staticmethod
    def _to_point(chunk: Chunk, position: int) -> Any:
        from qdrant_client.http import models

        return models.PointStruct(
            id=point_id_for(chunk.chunk_id),
            vector={VECTOR_NAME: chunk.embedding} if chunk.embedding else {},
            payload={
                "chunk_id": chunk.chunk_id,
                "content": chunk.content,
                "metadata": dict(chunk.metadata),
                "position": position,
            },
        )

    def upsert(self, chunks: list[Chunk], batch_size: int = DEFAULT_UPSERT_BATCH_SIZE) -> int:
        """Upsert chunks in batches of ``batch_size``.

        Raises:
            StoreWriteError: On the first batch that fails.
        """
        if not chunks:
            return 0
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")

        client = self._get_client()
        total_batches = (len(chunks) + batch_size - 1) // batch_size

        for batch_number, start in enumerate(range(0, len(chunks), batch_size), start=1):
            batch = chunks[start : start + batch_size]
            try:
                client.upsert(
                    collection_name=self.collection_name,
                    points=[
                        self._to_point(chunk, self._next_position + offset)
                        for offset, chunk in enumerate(batch)
                    ],
                    wait=True,
                )
            except Exception as e:
                raise StoreWriteError(
                    f"Error storing batch {batch_number}/{total_batches}",
                    cause=e,
                    context={"collection": self.collection_name, "batch": batch_number},
                ) from e
            self._next_position += len(batch)
            logger.debug("Stored batch %d/%d", batch_number, total_batches)

        logger.info("Stored %d chunks in %s", len(chunks), self.collection_name)
        return len(chunks)

    def search(
        self,
        query_vector: list[float],
        threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
        limit: int = 5,
    ) -> list[SearchResult]:
        """Search by cosine similarity with a score threshold."""
        if limit < 1:
            raise ValueError("limit must be positive")

        client = self._get_client()
        try:
            response = client.query_points(
                collection_name=self.collection_name,
                query=query_vector,
                using=VECTOR_NAME,
                limit=limit,
                score_threshold=threshold,
                with_payload=True,
            )
        except Exception as e:
            raise StoreQueryError(
                "Error searching knowledge",
                cause=e,
                context={"collection": self.collection_name, "limit": limit},
            ) from e

        ranked = []
        for hit in response.points:
            payload = dict(hit.payload or {})
            result = SearchResult(
                content=str(payload.get("content", "")),
                metadata=dict(payload.get("metadata") or {}),
                similarity=float(hit.score),
            )
            ranked.append((result, int(payload.get("position", 0))))

        # equal scores fall back to insertion order
        ranked.sort(key=lambda item: (-item[0].similarity, item[1]))
        return [result for result, _ in ranked]

    def count(self) -> int:
        client = self._get_client()
        try:
            return client.count(collection_name=self.collection_name, exact=True).count
        except Exception as e:
            raise StoreQueryError(
                f"Failed to count chunks in {self.collection_name}",
                cause=e,
                context={"collection": self.collection_name},
            ) from e
