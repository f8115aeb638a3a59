"""FastAPI application for the Clinical Text Analyzer."""

import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import analysis_router
from app.core.config import settings
from app.services.text_analyzer import get_clinical_text_analyzer

logger = logging.getLogger(__name__)

VERSION = "0.1.0"
SERVICE_NAME = "clinical-text-analyzer"


def prewarm_analyzer() -> dict[str, Any]:
    """Build the analyzer singleton and its rule tables at startup.

    Returns:
        Dictionary with rule-table stats and prewarm timing.
    """
    start_time = time.perf_counter()
    analyzer = get_clinical_text_analyzer()
    stats = analyzer.get_stats()
    total_time_ms = (time.perf_counter() - start_time) * 1000

    return {
        "services_loaded": len(stats),
        "total_prewarm_time_ms": round(total_time_ms, 2),
        "services": stats,
    }


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Builds the entity automaton and compiles every rule table before
    accepting requests.
    """
    prewarm_stats = prewarm_analyzer()
    logger.info(
        f"Analyzer pre-warmed: {prewarm_stats['services_loaded']} services "
        f"in {prewarm_stats['total_prewarm_time_ms']}ms"
    )

    # Store prewarm stats for readiness endpoint
    app.state.prewarm_stats = prewarm_stats

    yield


app = FastAPI(
    title=settings.app_name,
    description="Rule-based clinical text analysis: medical entities, sentiment, key phrases, candidate diagnoses and severity.",
    version=VERSION,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(analysis_router, prefix=settings.api_v1_prefix)


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, Any]:
    """Health check endpoint (liveness probe).

    Use /ready for readiness checks.
    """
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": VERSION,
        "timestamp": datetime.now(UTC).isoformat(),
    }


@app.get("/ready", tags=["Health"])
async def readiness_check() -> dict[str, Any]:
    """Readiness check endpoint.

    Confirms the analyzer rule tables are loaded.
    """
    prewarm_stats = getattr(app.state, "prewarm_stats", {})

    return {
        "status": "ready",
        "service": SERVICE_NAME,
        "version": VERSION,
        "timestamp": datetime.now(UTC).isoformat(),
        "analyzer": get_clinical_text_analyzer().get_stats(),
        "prewarm_time_ms": prewarm_stats.get("total_prewarm_time_ms", 0),
    }


@app.get("/", tags=["Health"])
async def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "service": f"{settings.app_name} API",
        "version": VERSION,
        "docs": "/docs",
        "health": "/health",
        "ready": "/ready",
        "analysis": f"{settings.api_v1_prefix}/analysis",
    }
