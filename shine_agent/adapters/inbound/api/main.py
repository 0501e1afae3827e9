"""FastAPI application for the Shine agent API."""

import logging
import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .... import __version__
from ....config.logging import setup_logging
from ....config.settings import settings
from ....core.domain.exceptions import ShineAgentError
from ...common.exception_handler import (
    format_exception_json,
    get_http_status_code,
    log_exception,
)
from .routers import chat, health, knowledge

setup_logging(level=settings.log_level, log_file=settings.log_file, json_format=settings.log_json)
logger = logging.getLogger(__name__)

# Full stack traces in error responses
DEBUG_MODE = os.getenv("DEBUG", "false").lower() == "true"

app = FastAPI(
    title="Shine Agent API",
    description=(
        "Persona-driven assistant. Answers in Tee Shine's voice, grounded in a "
        "retrieval-augmented knowledge base."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://localhost:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(chat.router)
app.include_router(knowledge.router)


# =============================================================================
# Global Exception Handlers
# =============================================================================


@app.exception_handler(ShineAgentError)
async def shine_agent_error_handler(request: Request, exc: ShineAgentError) -> JSONResponse:
    """Return any ShineAgentError as structured JSON with a mapped status code."""
    status_code = get_http_status_code(exc)
    log_exception(
        exc,
        level=logging.WARNING if status_code < 500 else logging.ERROR,
        extra_context={"path": str(request.url.path), "method": request.method},
    )

    return JSONResponse(
        status_code=status_code,
        content=exc.to_dict(include_trace=DEBUG_MODE),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all unhandled exceptions with structured JSON response."""
    log_exception(exc, extra_context={"path": str(request.url.path), "method": request.method})

    return JSONResponse(
        status_code=get_http_status_code(exc),
        content=format_exception_json(exc, include_trace=DEBUG_MODE),
    )


# =============================================================================
# Lifecycle Events
# =============================================================================


@app.on_event("startup")
async def startup_event():
    logger.info("Shine Agent API starting up...")
    logger.info("Knowledge backend: %s", settings.vector_backend)
    logger.info("Debug mode: %s", "ENABLED" if DEBUG_MODE else "DISABLED")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Shine Agent API shutting down...")


__all__ = ["app"]
