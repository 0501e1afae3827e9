"""Ports: the interfaces the core services depend on."""

from .embedding_port import EmbeddingPort
from .extractor_port import DocumentExtractorPort
from .llm_port import ChatCompletionPort
from .persona_port import PersonaSourcePort
from .vector_store_port import KnowledgeStorePort

__all__ = [
    "ChatCompletionPort",
    "DocumentExtractorPort",
    "EmbeddingPort",
    "KnowledgeStorePort",
    "PersonaSourcePort",
]
