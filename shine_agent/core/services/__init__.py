"""Core services: chunking, embedding, retrieval, prompting, caching and chat."""

from .chat_service import ChatService
from .chunker import chunk_document
from .context_assembler import ContextAssembler
from .embedder import Embedder
from .guide_classifier import needs_guide
from .knowledge_service import KnowledgeService
from .prompt_composer import PromptComposer
from .response_cache import ResponseCache

__all__ = [
    "ChatService",
    "ContextAssembler",
    "Embedder",
    "KnowledgeService",
    "PromptComposer",
    "ResponseCache",
    "chunk_document",
    "needs_guide",
]
