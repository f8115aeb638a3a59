"""Clinical Text Analysis API Endpoints.

Exposes the rule-based analyzer:
- Analyze: entities, sentiment, key phrases, diagnoses and severity for one note
- Batch: summary results for many notes
- Rules: statistics about the fixed rule tables
"""

import logging
import time
from typing import Any
from uuid import uuid4

from fastapi import APIRouter, HTTPException, Request

from app.core.audit import AuditAction, log_analysis, log_audit
from app.schemas.analysis import (
    AnalysisSchema,
    AnalyzeRequest,
    AnalyzeResponse,
    BatchAnalyzeItem,
    BatchAnalyzeRequest,
    BatchAnalyzeResponse,
)
from app.services.care_recommendations import is_severe_case, recommend_actions, severity_level
from app.services.text_analyzer import get_clinical_text_analyzer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analysis", tags=["Analysis"])


def _client_ip(request: Request) -> str | None:
    return request.client.host if request.client else None


# ============================================================================
# Analyze Endpoint
# ============================================================================


@router.post(
    "",
    response_model=AnalyzeResponse,
    summary="Analyze a clinical note",
    description="Extract entities, sentiment, key phrases, candidate diagnoses and severity.",
)
async def analyze_note(body: AnalyzeRequest, request: Request) -> AnalyzeResponse:
    """Analyze one clinical note.

    Args:
        body: The note text.
        request: Incoming request (client address for the audit log).

    Returns:
        AnalyzeResponse with the analysis and derived care recommendations.
    """
    start_time = time.perf_counter()
    request_id = str(uuid4())

    text = body.text or ""

    try:
        result = get_clinical_text_analyzer().analyze(text)
    except Exception as e:
        logger.exception(f"Analysis failed for request {request_id}")
        log_audit(AuditAction.ERROR, request_id=request_id, ip_address=_client_ip(request), success=False)
        raise HTTPException(status_code=500, detail=f"Analysis failed: {str(e)}")

    log_analysis(
        request_id=request_id,
        text_length=len(text),
        severity=result.severity,
        ip_address=_client_ip(request),
    )

    processing_time = (time.perf_counter() - start_time) * 1000
    return AnalyzeResponse(
        request_id=request_id,
        text_length=len(text),
        analysis=AnalysisSchema.from_result(result),
        severity_level=severity_level(result.severity),
        is_severe_case=is_severe_case(result.severity),
        recommended_actions=recommend_actions(result),
        processing_time_ms=round(processing_time, 2),
    )


# ============================================================================
# Batch Analysis Endpoint
# ============================================================================


@router.post(
    "/batch",
    response_model=BatchAnalyzeResponse,
    summary="Analyze multiple notes",
    description="Analyze multiple clinical notes in a single request.",
)
async def batch_analyze(body: BatchAnalyzeRequest, request: Request) -> BatchAnalyzeResponse:
    """Analyze multiple clinical notes.

    A failure on one note is recorded on its item and does not fail the batch.
    """
    start_time = time.perf_counter()
    request_id = str(uuid4())
    analyzer = get_clinical_text_analyzer()

    results: list[BatchAnalyzeItem] = []
    successful = 0
    failed = 0
    severe_cases = 0

    for i, raw_text in enumerate(body.texts):
        text = raw_text or ""
        preview = text[:100] + "..." if len(text) > 100 else text
        try:
            result = analyzer.analyze(text)
        except Exception as e:
            logger.exception(f"Batch item {i} failed for request {request_id}")
            results.append(BatchAnalyzeItem(index=i, text_preview=preview, error=str(e)))
            failed += 1
            continue

        if is_severe_case(result.severity):
            severe_cases += 1
        results.append(
            BatchAnalyzeItem(
                index=i,
                text_preview=preview,
                entities_extracted=len(result.entities),
                suggested_diagnoses=result.suggested_diagnoses,
                severity=result.severity,
                severity_level=severity_level(result.severity),
            )
        )
        successful += 1

    log_audit(
        AuditAction.BATCH_ANALYZE,
        request_id=request_id,
        ip_address=_client_ip(request),
        details={"total_texts": len(body.texts), "failed": failed},
        success=failed == 0,
    )

    total_time = (time.perf_counter() - start_time) * 1000
    return BatchAnalyzeResponse(
        request_id=request_id,
        total_texts=len(body.texts),
        successful=successful,
        failed=failed,
        severe_cases=severe_cases,
        results=results,
        total_time_ms=round(total_time, 2),
    )


# ============================================================================
# Rule Table Endpoint
# ============================================================================


@router.get(
    "/rules",
    summary="Rule table statistics",
    description="Sizes of the entity dictionary, keyword tiers and diagnosis rules.",
)
async def rule_stats() -> dict[str, Any]:
    """Get rule-table statistics for every sub-analyzer."""
    return get_clinical_text_analyzer().get_stats()
