"""Gemini embeddings through the google-genai SDK."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from ....core.domain.exceptions import (
    EmbeddingAPIError,
    EmbeddingRateLimitError,
    MissingAPIKeyError,
)
from ....core.domain.utils import normalize_text
from ....core.ports.embedding_port import EmbeddingPort
from ..rate_limiter import RateLimiter

if TYPE_CHECKING:
    from google import genai

logger = logging.getLogger(__name__)

MAX_EMBEDDING_RETRIES = 3
EMBEDDING_DIMENSION = 768


class GeminiEmbeddingAdapter(EmbeddingPort):
    """Embedding port backed by Gemini ``embed_content``.

    Queries and documents use different task types so the model can optimize
    each side of the retrieval pair.
    """

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-embedding-001",
        dimension: int = EMBEDDING_DIMENSION,
        timeout_ms: int = 30_000,
        rate_limiter: RateLimiter | None = None,
    ) -> None:
        self.api_key = api_key
        self.model_name = model_name
        self.dimension = dimension
        self.timeout_ms = timeout_ms
        self.rate_limiter = rate_limiter or RateLimiter(None)
        self._client: genai.Client | None = None

    def _get_client(self) -> "genai.Client":
        """Lazy load the genai client."""
        if self._client is None:
            if not self.api_key:
                raise MissingAPIKeyError(
                    "Google API key not set. Set GOOGLE_API_KEY in your .env file."
                )

            from google import genai
            from google.genai import types

            self._client = genai.Client(
                api_key=self.api_key,
                http_options=types.HttpOptions(timeout=self.timeout_ms),
            )
        return self._client

    def embed_query(self, text: str) -> list[float]:
        return self._embed(text, task_type="RETRIEVAL_QUERY")

    def embed_document(self, text: str) -> list[float]:
        return self._embed(text, task_type="RETRIEVAL_DOCUMENT")

    def _embed(self, text: str, task_type: str) -> list[float]:
        from google.genai import errors, types

        client = self._get_client()
        config = types.EmbedContentConfig(
            task_type=task_type,
            output_dimensionality=self.dimension,
        )

        for attempt in range(MAX_EMBEDDING_RETRIES):
            self.rate_limiter.acquire()
            try:
                result = client.models.embed_content(
                    model=self.model_name,
                    contents=normalize_text(text),
                    config=config,
                )
            except errors.APIError as e:
                if e.code == 429 and attempt < MAX_EMBEDDING_RETRIES - 1:
                    wait_time = 2**attempt
                    logger.warning("Embedding rate limit hit, retrying in %ds...", wait_time)
                    time.sleep(wait_time)
                    continue
                if e.code == 429:
                    raise EmbeddingRateLimitError(
                        "Embedding rate limit exceeded", cause=e, context={"model": self.model_name}
                    ) from e
                raise EmbeddingAPIError(
                    f"Embedding request failed with status {e.code}",
                    cause=e,
                    context={"model": self.model_name},
                ) from e
            except Exception as e:
                raise EmbeddingAPIError(
                    "Embedding request failed", cause=e, context={"model": self.model_name}
                ) from e

            if not result or not result.embeddings or not result.embeddings[0].values:
                raise EmbeddingAPIError(
                    "Embedding response contained no vector", context={"model": self.model_name}
                )
            return list(result.embeddings[0].values)

        raise EmbeddingRateLimitError("Embedding rate limit exceeded")
