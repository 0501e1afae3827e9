"""Validation exceptions."""

from .base import ShineAgentError


class ValidationError(ShineAgentError):
    """Input validation failed."""

    error_code = "SHN_VAL_001"


class EmptyQueryError(ValidationError):
    """Query or message cannot be empty or whitespace only."""

    error_code = "SHN_VAL_002"
