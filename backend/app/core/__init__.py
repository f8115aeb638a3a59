"""Core application configuration and utilities."""

from app.core.audit import AuditAction, AuditEvent, log_analysis, log_audit
from app.core.config import Settings, settings

__all__ = [
    # Config
    "Settings",
    "settings",
    # Audit
    "AuditAction",
    "AuditEvent",
    "log_analysis",
    "log_audit",
]
