"""Base schemas and enums for the Clinical Text Analyzer."""

from enum import Enum


class EntityCategory(str, Enum):
    """Category assigned to a recognized medical entity."""

    SYMPTOM = "symptom"
    VITAL = "vital"
    CONDITION = "condition"
    MEDICATION = "medication"
    PROCEDURE = "procedure"
    PSYCHOLOGICAL = "psychological"
    LIFESTYLE = "lifestyle"


class SeverityLevel(str, Enum):
    """Display band for a 1-10 severity estimate."""

    HIGH = "high"  # 8-10, severe case review
    MEDIUM = "medium"  # 5-7
    LOW = "low"  # 1-4
