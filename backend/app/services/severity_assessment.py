"""Severity assessment for clinical notes (1-10 scale).

Severity starts at 5 and is adjusted by a fixed sequence of steps:

1. Critical terms raise it to at least 8.
2. High-severity terms raise it to at least 6.
3. Low-severity terms cap it at 4.
4. Contextual combinations ("pain" + "severe", etc.) raise it again.
5. The first blood pressure reading (e.g. "160/95") raises it to 7 or 9.
6. Clamp to [1, 10].

The order matters. Step 3 runs after steps 1-2, so a reassuring term anywhere
in the note pulls a critical note back down to 4; only steps 4 and 5 can lift
it afterwards. Downstream severity badges depend on this exact behavior.
"""

import logging
import re
import threading

logger = logging.getLogger(__name__)


CRITICAL_TERMS: tuple[str, ...] = (
    "critical",
    "life-threatening",
    "emergency",
    "severe",
    "acute",
    "unconscious",
    "unresponsive",
    "cardiac arrest",
    "stroke",
    "heart attack",
    "severe bleeding",
    "difficulty breathing",
    "chest pain",
    "sudden onset",
)

HIGH_SEVERITY_TERMS: tuple[str, ...] = (
    "urgent",
    "concerning",
    "significant",
    "moderate to severe",
    "worsening",
    "persistent",
    "uncontrolled",
    "elevated",
    "abnormal",
    "irregular",
)

LOW_SEVERITY_TERMS: tuple[str, ...] = (
    "mild",
    "slight",
    "minimal",
    "stable",
    "controlled",
    "improving",
    "resolved",
    "normal",
    "routine",
    "follow-up",
    "preventive",
)

# (required terms, floor) applied after the low-severity cap
CONTEXT_COMBINATIONS: tuple[tuple[tuple[str, ...], int], ...] = (
    (("pain", "severe"), 7),
    (("blood pressure", "high"), 6),
    (("fever", "high"), 6),
)

# First "120/80"-style reading in the note
BLOOD_PRESSURE_PATTERN = re.compile(r"([0-9]{3})/([0-9]{2,3})")

DEFAULT_SEVERITY = 5
MIN_SEVERITY = 1
MAX_SEVERITY = 10
CRITICAL_FLOOR = 8
HIGH_FLOOR = 6
LOW_CAP = 4

# Blood pressure thresholds: (systolic above, diastolic above, floor)
HYPERTENSIVE_CRISIS = (180, 110, 9)
STAGE_2_HYPERTENSION = (160, 100, 7)


def extract_blood_pressure(text: str) -> tuple[int, int] | None:
    """Parse the first systolic/diastolic reading in the text.

    Returns:
        (systolic, diastolic) or None if no reading is present.
    """
    match = BLOOD_PRESSURE_PATTERN.search(text)
    if match is None:
        return None
    return int(match.group(1)), int(match.group(2))


_severity_service: "SeverityAssessmentService | None" = None
_severity_lock = threading.Lock()


def get_severity_assessment_service() -> "SeverityAssessmentService":
    """Get the singleton severity assessment service instance."""
    global _severity_service
    if _severity_service is None:
        with _severity_lock:
            if _severity_service is None:
                _severity_service = SeverityAssessmentService()
    return _severity_service


def reset_severity_assessment_service() -> None:
    """Reset the singleton instance (for testing)."""
    global _severity_service
    with _severity_lock:
        _severity_service = None


class SeverityAssessmentService:
    """Estimates note urgency on a 1-10 scale."""

    def assess(self, text: str) -> int:
        """Assess the severity of a clinical note.

        Args:
            text: Clinical note text.

        Returns:
            Integer severity in [1, 10].
        """
        text_lower = text.lower()
        severity = DEFAULT_SEVERITY

        for term in CRITICAL_TERMS:
            if term in text_lower:
                severity = max(severity, CRITICAL_FLOOR)

        for term in HIGH_SEVERITY_TERMS:
            if term in text_lower:
                severity = max(severity, HIGH_FLOOR)

        for term in LOW_SEVERITY_TERMS:
            if term in text_lower:
                severity = min(severity, LOW_CAP)

        for required, floor in CONTEXT_COMBINATIONS:
            if all(term in text_lower for term in required):
                severity = max(severity, floor)

        severity = self._apply_blood_pressure(text, severity)

        return max(MIN_SEVERITY, min(MAX_SEVERITY, severity))

    def _apply_blood_pressure(self, text: str, severity: int) -> int:
        """Raise severity for a hypertensive first reading."""
        reading = extract_blood_pressure(text)
        if reading is None:
            return severity

        systolic, diastolic = reading
        for systolic_limit, diastolic_limit, floor in (HYPERTENSIVE_CRISIS, STAGE_2_HYPERTENSION):
            if systolic > systolic_limit or diastolic > diastolic_limit:
                logger.debug(f"Blood pressure {systolic}/{diastolic} raises severity to {floor}")
                return max(severity, floor)
        return severity

    def get_stats(self) -> dict:
        """Get statistics about the severity term tiers."""
        return {
            "critical_terms": len(CRITICAL_TERMS),
            "high_severity_terms": len(HIGH_SEVERITY_TERMS),
            "low_severity_terms": len(LOW_SEVERITY_TERMS),
            "context_combinations": len(CONTEXT_COMBINATIONS),
        }
