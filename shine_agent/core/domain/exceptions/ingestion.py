"""Knowledge ingestion exceptions."""

from .base import ShineAgentError


class IngestionError(ShineAgentError):
    """Error while turning documents into stored knowledge."""

    error_code = "SHN_ING_001"


class DocumentExtractionError(IngestionError):
    """Failed to read or extract text from a source document."""

    error_code = "SHN_ING_002"


class KnowledgeDirectoryNotFoundError(IngestionError):
    """The knowledge directory does not exist."""

    error_code = "SHN_ING_003"


class EmptyKnowledgeBaseError(IngestionError):
    """No chunks could be produced from the knowledge directory."""

    error_code = "SHN_ING_004"
