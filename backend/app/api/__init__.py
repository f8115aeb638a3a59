"""API routers for the Clinical Text Analyzer."""

from app.api.analysis import router as analysis_router

__all__ = [
    "analysis_router",
]
