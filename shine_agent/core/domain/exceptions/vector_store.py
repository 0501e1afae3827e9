"""Knowledge store exceptions."""

from .base import ShineAgentError


class KnowledgeStoreError(ShineAgentError):
    """Base error for knowledge store operations.

    Distinguishes "store unavailable" from "no matches": searches that fail
    raise this instead of returning an empty list.
    """

    error_code = "SHN_VEC_001"


class StoreConnectionError(KnowledgeStoreError):
    """Could not connect to the vector store.

    Common causes:
    - Invalid URL or API key
    - Network connectivity issues
    - Store service is down
    """

    error_code = "SHN_VEC_002"


class StoreQueryError(KnowledgeStoreError):
    """Similarity search failed.

    Common causes:
    - Collection does not exist
    - Embedding dimension mismatch
    """

    error_code = "SHN_VEC_003"


class StoreWriteError(KnowledgeStoreError):
    """Clearing or upserting chunks failed."""

    error_code = "SHN_VEC_004"
