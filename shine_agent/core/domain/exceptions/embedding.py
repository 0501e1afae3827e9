"""Embedding exceptions."""

from .base import ShineAgentError


class EmbeddingError(ShineAgentError):
    """Failed to generate an embedding."""

    error_code = "SHN_EMB_001"


class EmbeddingAPIError(EmbeddingError):
    """The embedding service returned an error or an unusable vector."""

    error_code = "SHN_EMB_002"


class EmbeddingRateLimitError(EmbeddingError):
    """The embedding service rejected the call because of quota."""

    error_code = "SHN_EMB_003"
