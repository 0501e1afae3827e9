"""Knowledge store backends."""

from .memory_adapter import InMemoryKnowledgeStore
from .qdrant_adapter import QdrantKnowledgeStore

__all__ = ["InMemoryKnowledgeStore", "QdrantKnowledgeStore"]
