"""Health check endpoints."""

import logging

from fastapi import APIRouter, Depends

from ..... import __version__
from .....core.ports import KnowledgeStorePort
from ..deps import get_knowledge_store
from ..models import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Liveness probe; does not touch external services."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        knowledge_store="not_checked",
    )


@router.get("/ready", response_model=HealthResponse)
def readiness_check(store: KnowledgeStorePort = Depends(get_knowledge_store)) -> HealthResponse:
    """Readiness probe.

    Checks that the knowledge store is reachable and reports its size.
    """
    try:
        total = store.count()
        store_status = f"connected ({total} chunks)"
    except Exception as e:
        logger.warning("Knowledge store not ready: %s", e)
        store_status = f"error: {e}"

    return HealthResponse(
        status="ready",
        version=__version__,
        knowledge_store=store_status,
    )
