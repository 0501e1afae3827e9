"""Domain models for the Shine agent.

- chunk: Chunk and SearchResult for the knowledge store
- chat: ChatMessage, ChatResponse and Role for chat turns
- knowledge: ProcessingReport and KnowledgeStatus for processing runs

All models are re-exported here:

    from shine_agent.core.domain import Chunk, SearchResult, ChatResponse
"""

from .chat import ChatMessage, ChatResponse, Role
from .chunk import Chunk, SearchResult
from .knowledge import KnowledgeStatus, ProcessingReport

__all__ = [
    # Knowledge store models
    "Chunk",
    "SearchResult",
    # Chat models
    "ChatMessage",
    "ChatResponse",
    "Role",
    # Processing models
    "ProcessingReport",
    "KnowledgeStatus",
]
