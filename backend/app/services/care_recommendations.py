"""Severity bands and follow-up actions derived from an analysis result.

These helpers read an AnalysisResult and never modify it.
"""

from app.schemas.base import EntityCategory, SeverityLevel
from app.services.nlp import AnalysisResult

HIGH_SEVERITY_THRESHOLD = 8
MEDIUM_SEVERITY_THRESHOLD = 5
PROMPT_CARE_THRESHOLD = 6


def severity_level(severity: int) -> SeverityLevel:
    """Map a 1-10 severity to its display band."""
    if severity >= HIGH_SEVERITY_THRESHOLD:
        return SeverityLevel.HIGH
    if severity >= MEDIUM_SEVERITY_THRESHOLD:
        return SeverityLevel.MEDIUM
    return SeverityLevel.LOW


def is_severe_case(severity: int) -> bool:
    """Whether the record belongs in severe case review (8-10)."""
    return severity >= HIGH_SEVERITY_THRESHOLD


def recommend_actions(result: AnalysisResult) -> list[str]:
    """Suggest follow-up actions for an analyzed note.

    Severity picks the base actions; detected symptoms and medications add
    specific ones. The follow-up reminder is always last.
    """
    actions: list[str] = []

    if result.severity >= HIGH_SEVERITY_THRESHOLD:
        actions.append("Seek immediate medical attention")
        actions.append("Monitor vital signs closely")
    elif result.severity >= PROMPT_CARE_THRESHOLD:
        actions.append("Schedule appointment with healthcare provider within 24-48 hours")
        actions.append("Monitor symptoms for changes")
    else:
        actions.append("Rest and stay hydrated")
        actions.append("Monitor symptoms and seek care if worsening")

    symptoms = [e for e in result.entities if e.category == EntityCategory.SYMPTOM]
    medications = [e for e in result.entities if e.category == EntityCategory.MEDICATION]

    if any("fever" in s.text.lower() for s in symptoms):
        actions.append("Take temperature regularly and maintain fever log")

    if any("pain" in s.text.lower() for s in symptoms):
        actions.append("Apply appropriate pain management techniques")

    if medications:
        actions.append("Review current medications with healthcare provider")

    actions.append("Follow up as needed or if symptoms persist")
    return actions
