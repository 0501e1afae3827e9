"""Chat-completion exceptions."""

from .base import ShineAgentError


class LLMError(ShineAgentError):
    """Base error for chat-completion calls."""

    error_code = "SHN_LLM_001"


class LLMConnectionError(LLMError):
    """Failed to reach the model provider.

    Common causes:
    - Invalid API key
    - Network issues or request timeout
    """

    error_code = "SHN_LLM_002"


class LLMRateLimitError(LLMError):
    """Provider quota exceeded. Wait a moment and try again."""

    error_code = "SHN_LLM_003"


class LLMGenerationError(LLMError):
    """The provider answered but produced no usable text.

    Common causes:
    - Content filtered by safety settings
    - Token limit exceeded
    """

    error_code = "SHN_LLM_004"
