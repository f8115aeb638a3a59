"""Rule-based diagnosis suggestions.

Each candidate diagnosis carries a list of regex indicators. Indicators are
tested case-insensitively against the raw note text; a diagnosis is suggested
when at least ``min_matches`` of its indicators match. Suggestions follow the
order of DIAGNOSIS_RULES, not the strength of the match.

An indicator is either a single pattern or a tuple of patterns that must all
be found somewhere in the note. Co-occurrence is expressed as a tuple rather
than ``a.*b|b.*a`` so every indicator runs in time linear in the note length.

Note: This is a decision support aid, not a diagnosis. Suggestions must be
confirmed by a clinician.
"""

import logging
import re
import threading
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

Indicator = str | tuple[str, ...]


@dataclass(frozen=True)
class DiagnosisRule:
    """Indicators for one candidate diagnosis."""

    label: str
    indicators: tuple[Indicator, ...]
    min_matches: int = 1
    compiled: tuple[tuple[re.Pattern[str], ...], ...] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "compiled",
            tuple(
                tuple(
                    re.compile(part, re.IGNORECASE)
                    for part in ((indicator,) if isinstance(indicator, str) else indicator)
                )
                for indicator in self.indicators
            ),
        )

    def matched_indicators(self, text: str) -> list[Indicator]:
        """Return the indicators that match ``text``."""
        return [
            indicator
            for indicator, patterns in zip(self.indicators, self.compiled)
            if all(pattern.search(text) for pattern in patterns)
        ]

    def fires(self, text: str) -> bool:
        return len(self.matched_indicators(text)) >= self.min_matches


# ============================================================================
# Diagnosis Rule Table
# ============================================================================

BP_LANGUAGE = r"blood\s+pressure|\bbp\b|hypertensi"

# Words within the same sentence, at most this many characters apart
NEAR = r"[^.!?\n]{0,40}"

DIAGNOSIS_RULES: tuple[DiagnosisRule, ...] = (
    DiagnosisRule(
        label="Hypertension",
        indicators=(
            r"(?:elevated|high)\s+blood\s+pressure",
            # Systolic 140-199 over diastolic 90-199
            r"\b1[4-9]\d\s*/\s*(?:9\d|1[0-9]\d)\b",
            (r"headache|dizziness", BP_LANGUAGE),
        ),
    ),
    DiagnosisRule(
        label="Migraine",
        indicators=(
            r"migraine|severe\s+headache",
            (r"headache", r"nausea|vomiting"),
            r"visual\s+aura|\baura\b|light\s+sensitivity|sensitivity\s+to\s+light|photophobia",
            rf"(?:throbbing|pulsating){NEAR}(?:pain|headache)",
        ),
    ),
    DiagnosisRule(
        label="Type 2 Diabetes",
        indicators=(
            r"diabetes|(?:elevated|high)\s+(?:blood\s+)?(?:glucose|sugar)",
            r"polyuria|frequent\s+urination",
            r"polydipsia|excessive\s+thirst|increased\s+thirst",
            (r"fatigue", r"weight\s+loss"),
        ),
    ),
    DiagnosisRule(
        label="Coronary Artery Disease",
        indicators=(
            r"chest\s+pain|angina|coronary",
            (r"dyspnea|shortness\s+of\s+breath", r"exertion|exercise|activity"),
            # "blood pressure" is a vital sign, not pressure-type chest pain
            rf"(?:crushing|(?<!blood )pressure){NEAR}chest|chest\s+(?:pressure|tightness)",
            (r"left\s+arm\s+pain", r"chest"),
        ),
    ),
    DiagnosisRule(
        label="Upper Respiratory Infection",
        indicators=(
            (r"cough", r"fever"),
            (r"sore\s+throat", r"congestion"),
            (r"runny\s+nose", r"fatigue"),
            r"cold\s+symptoms|common\s+cold",
        ),
    ),
    DiagnosisRule(
        label="Anxiety Disorder",
        indicators=(
            r"anxiety|anxious|panic|worried",
            (r"(?:rapid|racing)\s+heart", r"nervous"),
            (r"(?:difficulty|trouble)\s+sleeping", r"stress"),
            r"restless|overwhelmed",
        ),
    ),
    DiagnosisRule(
        label="Depression",
        indicators=(
            r"depression|depressed\s+mood|\bsad\b|sadness",
            r"loss\s+of\s+interest|anhedonia",
            (r"sleep\s+disturbance|insomnia", r"mood"),
            (r"fatigue", r"hopeless"),
        ),
    ),
    DiagnosisRule(
        label="GERD",
        indicators=(
            r"heartburn|acid\s+reflux",
            (rf"chest\s+burning|burning{NEAR}chest", r"after\s+(?:eating|meals?)"),
            (r"regurgitation", r"sour"),
        ),
    ),
)


# ============================================================================
# Diagnosis Suggestion Service
# ============================================================================

_diagnosis_service: "DiagnosisSuggestionService | None" = None
_diagnosis_lock = threading.Lock()


def get_diagnosis_suggestion_service() -> "DiagnosisSuggestionService":
    """Get the singleton diagnosis suggestion service instance."""
    global _diagnosis_service
    if _diagnosis_service is None:
        with _diagnosis_lock:
            if _diagnosis_service is None:
                _diagnosis_service = DiagnosisSuggestionService()
    return _diagnosis_service


def reset_diagnosis_suggestion_service() -> None:
    """Reset the singleton instance (for testing)."""
    global _diagnosis_service
    with _diagnosis_lock:
        _diagnosis_service = None


class DiagnosisSuggestionService:
    """Suggests candidate diagnoses from a fixed rule table."""

    def __init__(self, rules: tuple[DiagnosisRule, ...] = DIAGNOSIS_RULES) -> None:
        self._rules = rules

    @property
    def rules(self) -> tuple[DiagnosisRule, ...]:
        return self._rules

    def suggest(self, text: str) -> list[str]:
        """Suggest diagnoses whose rules fire on the raw text.

        Args:
            text: Clinical note text, not lower-cased.

        Returns:
            Diagnosis labels in rule-table order.
        """
        if not text:
            return []

        suggestions = [rule.label for rule in self._rules if rule.fires(text)]
        logger.debug(f"Diagnosis rules fired: {suggestions}")
        return suggestions

    def explain(self, text: str) -> dict[str, list[Indicator]]:
        """Map each fired diagnosis to the indicators that matched."""
        explanation: dict[str, list[Indicator]] = {}
        for rule in self._rules:
            matched = rule.matched_indicators(text)
            if len(matched) >= rule.min_matches:
                explanation[rule.label] = matched
        return explanation

    def get_rule_by_label(self, label: str) -> DiagnosisRule | None:
        """Get a specific rule by its diagnosis label."""
        for rule in self._rules:
            if rule.label.lower() == label.lower():
                return rule
        return None

    def get_stats(self) -> dict:
        """Get statistics about the rule table."""
        return {
            "total_rules": len(self._rules),
            "total_indicators": sum(len(rule.indicators) for rule in self._rules),
        }
