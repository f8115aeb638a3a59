"""Audit logging for clinical note analysis.

Every analysis request is recorded on a dedicated "audit" logger. Events
carry sizes and outcomes only; note text is never written to the audit log.
"""

import logging
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field

# Separate audit logger for security-critical events
audit_logger = logging.getLogger("audit")


class AuditAction(str, Enum):
    """Types of auditable actions."""

    ANALYZE = "analyze"
    BATCH_ANALYZE = "batch_analyze"
    ERROR = "error"


class AuditEvent(BaseModel):
    """Audit event record."""

    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    action: AuditAction = Field(..., description="Type of action performed")
    request_id: str | None = Field(None, description="Request identifier")
    ip_address: str | None = Field(None, description="Client IP address")
    details: dict | None = Field(None, description="Additional context")
    success: bool = Field(True, description="Whether action succeeded")


def log_audit(
    action: AuditAction,
    request_id: str | None = None,
    ip_address: str | None = None,
    details: dict | None = None,
    success: bool = True,
) -> AuditEvent:
    """Log an audit event.

    Args:
        action: Type of action being audited
        request_id: Request identifier
        ip_address: Client IP address
        details: Additional context (sizes, counts; never note text)
        success: Whether the action succeeded

    Returns:
        The created AuditEvent
    """
    event = AuditEvent(
        action=action,
        request_id=request_id,
        ip_address=ip_address,
        details=details,
        success=success,
    )

    log_level = logging.INFO if success else logging.WARNING
    audit_logger.log(
        log_level,
        f"AUDIT: {action.value}"
        f"{f' request={request_id}' if request_id else ''}"
        f" success={success}",
        extra={"audit_event": event.model_dump()},
    )

    return event


def log_analysis(
    request_id: str,
    text_length: int,
    severity: int,
    ip_address: str | None = None,
) -> AuditEvent:
    """Log a single-note analysis.

    Args:
        request_id: Request identifier
        text_length: Length of the analyzed note
        severity: Resulting severity (1-10)
        ip_address: Client IP address

    Returns:
        The created AuditEvent
    """
    return log_audit(
        action=AuditAction.ANALYZE,
        request_id=request_id,
        ip_address=ip_address,
        details={"text_length": text_length, "severity": severity},
    )
