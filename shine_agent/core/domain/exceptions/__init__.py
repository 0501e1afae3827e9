"""Exception hierarchy for the Shine agent.

Each exception carries an error code, the location where it was raised,
optional cause chaining and a JSON-serializable ``to_dict``. Import from this
package directly:

    from shine_agent.core.domain.exceptions import ShineAgentError, StoreQueryError
"""

# Base classes
from .base import ExceptionContext, ShineAgentError

# Configuration exceptions
from .configuration import ConfigurationError, MissingAPIKeyError

# Embedding exceptions
from .embedding import (
    EmbeddingAPIError,
    EmbeddingError,
    EmbeddingRateLimitError,
)

# Ingestion exceptions
from .ingestion import (
    DocumentExtractionError,
    EmptyKnowledgeBaseError,
    IngestionError,
    KnowledgeDirectoryNotFoundError,
)

# LLM exceptions
from .llm import (
    LLMConnectionError,
    LLMError,
    LLMGenerationError,
    LLMRateLimitError,
)

# Persona exceptions
from .persona import PersonaDocumentError, PersonaError

# Validation exceptions
from .validation import EmptyQueryError, ValidationError

# Knowledge store exceptions
from .vector_store import (
    KnowledgeStoreError,
    StoreConnectionError,
    StoreQueryError,
    StoreWriteError,
)

__all__ = [
    # Base
    "ExceptionContext",
    "ShineAgentError",
    # Configuration
    "ConfigurationError",
    "MissingAPIKeyError",
    # Embedding
    "EmbeddingError",
    "EmbeddingAPIError",
    "EmbeddingRateLimitError",
    # Ingestion
    "IngestionError",
    "DocumentExtractionError",
    "KnowledgeDirectoryNotFoundError",
    "EmptyKnowledgeBaseError",
    # LLM
    "LLMError",
    "LLMConnectionError",
    "LLMRateLimitError",
    "LLMGenerationError",
    # Persona
    "PersonaError",
    "PersonaDocumentError",
    # Validation
    "ValidationError",
    "EmptyQueryError",
    # Knowledge store
    "KnowledgeStoreError",
    "StoreConnectionError",
    "StoreQueryError",
    "StoreWriteError",
]
