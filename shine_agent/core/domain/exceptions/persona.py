"""Persona loading exceptions."""

from .base import ShineAgentError


class PersonaError(ShineAgentError):
    """Base error for persona configuration."""

    error_code = "SHN_PER_001"


class PersonaDocumentError(PersonaError):
    """A persona document could not be read."""

    error_code = "SHN_PER_002"
