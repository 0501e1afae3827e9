"""Knowledge base endpoints: processing, status and search."""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends

from .....config.settings import Settings
from .....core.domain.exceptions import ValidationError
from .....core.services import KnowledgeService
from ..deps import get_knowledge_service, get_settings
from ..models import (
    ErrorResponse,
    KnowledgeStatusResponse,
    ProcessRequest,
    ProcessResponse,
    SearchHit,
    SearchRequest,
    SearchResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/knowledge", tags=["knowledge"])


def _resolve_directory(requested: str | None, settings: Settings) -> Path:
    """Resolve a requested directory, which must stay inside the knowledge dir."""
    base = Path(settings.knowledge_dir).resolve()
    if not requested:
        return base

    directory = (base / requested).resolve()
    if directory != base and base not in directory.parents:
        raise ValidationError(
            "Directory must be inside the knowledge directory",
            context={"directory": requested},
        )
    return directory


@router.post(
    "/process",
    response_model=ProcessResponse,
    responses={
        400: {"model": ErrorResponse, "description": "No knowledge could be extracted"},
        404: {"model": ErrorResponse, "description": "Knowledge directory not found"},
        503: {"model": ErrorResponse, "description": "Knowledge store unavailable"},
    },
)
def process_knowledge(
    request: ProcessRequest | None = None,
    service: KnowledgeService = Depends(get_knowledge_service),
    settings: Settings = Depends(get_settings),
) -> ProcessResponse:
    """Rebuild the knowledge store from the knowledge directory."""
    directory = _resolve_directory(request.directory if request else None, settings)
    report = service.process_knowledge_base(directory)

    return ProcessResponse(
        message="Knowledge base processed successfully",
        chunks_processed=report.chunks_processed,
        sources=report.sources,
        embedded=report.embedded,
        skipped_files=report.skipped_files,
    )


@router.get("/process", response_model=KnowledgeStatusResponse)
def knowledge_status(
    service: KnowledgeService = Depends(get_knowledge_service),
    settings: Settings = Depends(get_settings),
) -> KnowledgeStatusResponse:
    """Files and chunk count a processing run would produce, without embedding."""
    status = service.describe_knowledge_base(_resolve_directory(None, settings))
    return KnowledgeStatusResponse(
        available_files=status.available_files,
        total_chunks=status.total_chunks,
        status=status.status,
    )


@router.post(
    "/search",
    response_model=SearchResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Empty query"},
        503: {"model": ErrorResponse, "description": "Knowledge store unavailable"},
    },
)
def search_knowledge(
    request: SearchRequest,
    service: KnowledgeService = Depends(get_knowledge_service),
) -> SearchResponse:
    results = service.search_knowledge(request.query, limit=request.limit)
    return SearchResponse(
        query=request.query,
        results=[
            SearchHit(content=r.content, metadata=r.metadata, similarity=r.similarity)
            for r in results
        ],
        count=len(results),
    )
