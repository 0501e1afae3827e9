"""Pydantic models for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    """Request model for a chat turn."""

    message: str = Field(
        ...,
        max_length=4000,
        description="The user's message",
        json_schema_extra={"example": "How do I build a business strategy for a SaaS startup?"},
    )


class ReplyBody(BaseModel):
    """Assistant reply, exposed under both ``text`` and ``content``."""

    text: str = Field(..., description="The assistant reply")
    content: str = Field(..., description="Same as text, kept for older clients")


class ChatReply(BaseModel):
    """Response model for a chat turn."""

    response: ReplyBody
    guide: str = Field(default="", description="Step-by-step guide, empty when not requested")


class ProcessRequest(BaseModel):
    """Request model for processing the knowledge directory."""

    directory: str | None = Field(
        None, description="Directory to process (defaults to the configured knowledge dir)"
    )


class ProcessResponse(BaseModel):
    """Response model for a processing run."""

    message: str
    chunks_processed: int = Field(..., ge=0)
    sources: list[str] = Field(default_factory=list)
    embedded: int = Field(..., ge=0, description="Chunks stored with a vector")
    skipped_files: list[str] = Field(default_factory=list)


class KnowledgeStatusResponse(BaseModel):
    """Response model for the knowledge directory status."""

    available_files: list[str]
    total_chunks: int
    status: str


class SearchRequest(BaseModel):
    """Request model for a knowledge search."""

    query: str = Field(..., max_length=1000, description="Search query")
    limit: int = Field(5, ge=1, le=50, description="Maximum number of results")


class SearchHit(BaseModel):
    """One knowledge search result."""

    content: str
    metadata: dict = Field(default_factory=dict)
    similarity: float


class SearchResponse(BaseModel):
    """Response model for a knowledge search."""

    query: str
    results: list[SearchHit] = Field(default_factory=list)
    count: int


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
    knowledge_store: str = Field(..., description="Knowledge store status")


class ErrorDetail(BaseModel):
    """Structured error detail information."""

    type: str = Field(..., description="Exception type name")
    code: str = Field(..., description="Error code (e.g., SHN_VEC_002)")
    message: str = Field(..., description="Human-readable error message")


class ErrorLocation(BaseModel):
    """Source location where error occurred."""

    model_config = ConfigDict(populate_by_name=True)

    class_name: str = Field(..., alias="class", description="Class name or <module>")
    method: str = Field(..., description="Method/function name")
    file: str = Field(..., description="Source file name")
    line: int = Field(..., description="Line number")
    timestamp: str | None = Field(None, description="When the error occurred")


class ErrorResponse(BaseModel):
    """Response model for structured errors.

    Example:
        {
            "error": {"type": "StoreConnectionError", "code": "SHN_VEC_002", "message": "..."},
            "location": {"class": "QdrantKnowledgeStore", "method": "_get_client", ...},
            "context": {"url": "https://..."}
        }
    """

    error: ErrorDetail
    location: ErrorLocation | None = None
    context: dict | None = None
    cause: dict | None = None
    stack_trace: list[str] | None = Field(None, description="Stack trace (debug mode only)")
