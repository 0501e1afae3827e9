"""Composition root wiring adapters to the application services."""

from __future__ import annotations

import logging
from functools import lru_cache

from ..adapters.outbound.embedding.gemini_embedding import GeminiEmbeddingAdapter
from ..adapters.outbound.extractors.document_extractors import default_extractors
from ..adapters.outbound.llm.gemini_llm import GeminiChatAdapter
from ..adapters.outbound.persona.file_persona_source import FilePersonaSource
from ..adapters.outbound.rate_limiter import RateLimiter
from ..adapters.outbound.vector_store import InMemoryKnowledgeStore, QdrantKnowledgeStore
from ..config import settings
from ..core.ports import KnowledgeStorePort
from ..core.services import (
    ChatService,
    ContextAssembler,
    Embedder,
    KnowledgeService,
    PromptComposer,
    ResponseCache,
)

logger = logging.getLogger(__name__)


@lru_cache
def get_knowledge_store() -> KnowledgeStorePort:
    if settings.vector_backend == "memory":
        logger.info("Initializing InMemoryKnowledgeStore (composition root)...")
        return InMemoryKnowledgeStore()

    logger.info("Initializing QdrantKnowledgeStore (composition root)...")
    return QdrantKnowledgeStore(
        url=settings.qdrant_url,
        api_key=settings.qdrant_api_key,
        collection_name=settings.qdrant_collection,
        dimension=settings.embedding_dimension,
        timeout_seconds=settings.request_timeout_seconds,
    )


@lru_cache
def get_embedder() -> Embedder:
    logger.info("Initializing Embedder...")
    adapter = GeminiEmbeddingAdapter(
        api_key=settings.google_api_key,
        model_name=settings.embedding_model,
        dimension=settings.embedding_dimension,
        timeout_ms=settings.request_timeout_ms,
        rate_limiter=RateLimiter(settings.embedding_requests_per_minute),
    )
    return Embedder(adapter)


@lru_cache
def get_llm() -> GeminiChatAdapter:
    logger.info("Initializing GeminiChatAdapter...")
    return GeminiChatAdapter(
        api_key=settings.google_api_key,
        model=settings.llm_model,
        timeout_ms=settings.request_timeout_ms,
        rate_limiter=RateLimiter(settings.llm_requests_per_minute),
    )


@lru_cache
def get_knowledge_service() -> KnowledgeService:
    logger.info("Initializing KnowledgeService...")
    return KnowledgeService(
        get_embedder(),
        get_knowledge_store(),
        default_extractors(),
        threshold=settings.similarity_threshold,
        batch_size=settings.upsert_batch_size,
    )


@lru_cache
def get_response_cache() -> ResponseCache:
    return ResponseCache(ttl_seconds=settings.cache_ttl_seconds)


@lru_cache
def get_prompt_composer() -> PromptComposer:
    return PromptComposer(
        FilePersonaSource(settings.persona_dir),
        settings.persona_documents,
        persona_name=settings.persona_name,
    )


@lru_cache
def get_chat_service() -> ChatService:
    logger.info("Initializing ChatService...")
    assembler = ContextAssembler(
        get_embedder(),
        get_knowledge_store(),
        threshold=settings.similarity_threshold,
    )
    return ChatService(
        get_prompt_composer(),
        get_llm(),
        get_response_cache(),
        assembler,
        context_top_k=settings.context_top_k,
        max_tokens=settings.response_max_tokens,
        temperature=settings.response_temperature,
        guide_max_tokens=settings.guide_max_tokens,
        guide_temperature=settings.guide_temperature,
    )
