"""Retrieval-augmentation context for chat turns."""

from __future__ import annotations

import logging

from ..domain import SearchResult
from ..ports.vector_store_port import DEFAULT_SIMILARITY_THRESHOLD, KnowledgeStorePort
from .embedder import Embedder

logger = logging.getLogger(__name__)

DEFAULT_CONTEXT_TOP_K = 3


class ContextAssembler:
    """Builds the knowledge context string injected into the system prompt.

    Retrieval is best-effort: an embedding or store failure yields an empty
    context and the chat turn proceeds without augmentation.
    """

    def __init__(
        self,
        embedder: Embedder,
        store: KnowledgeStorePort,
        threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
    ) -> None:
        self.embedder = embedder
        self.store = store
        self.threshold = threshold

    @staticmethod
    def format_results(results: list[SearchResult]) -> str:
        """Render results as ``[From source]: content`` blocks, best match first."""
        return "\n\n".join(f"[From {result.source}]: {result.content}" for result in results)

    def get_context(self, query: str, k: int = DEFAULT_CONTEXT_TOP_K) -> str:
        """Retrieve up to ``k`` relevant chunks for ``query`` as one string.

        Returns:
            The rendered context, or an empty string when nothing relevant was
            found or retrieval failed.
        """
        if not query or not query.strip():
            return ""

        try:
            vector = self.embedder.embed(query)
            results = self.store.search(vector, threshold=self.threshold, limit=k)
        except Exception as e:
            logger.warning("Knowledge retrieval failed, continuing without context: %s", e)
            return ""

        if not results:
            logger.debug("No knowledge above threshold %.2f for query", self.threshold)
            return ""

        logger.debug("Assembled context from %d chunks", len(results))
        return self.format_results(results)
