"""Pydantic schemas for the Clinical Text Analyzer."""

from app.schemas.base import EntityCategory, SeverityLevel
from app.schemas.analysis import (
    AnalysisSchema,
    AnalyzeRequest,
    AnalyzeResponse,
    BatchAnalyzeItem,
    BatchAnalyzeRequest,
    BatchAnalyzeResponse,
    EntitySchema,
    SentimentSchema,
)

__all__ = [
    # Enums
    "EntityCategory",
    "SeverityLevel",
    # Analysis
    "AnalysisSchema",
    "AnalyzeRequest",
    "AnalyzeResponse",
    "BatchAnalyzeItem",
    "BatchAnalyzeRequest",
    "BatchAnalyzeResponse",
    "EntitySchema",
    "SentimentSchema",
]
