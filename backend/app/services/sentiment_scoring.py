"""Keyword-weighted sentiment scoring for clinical notes.

Counts occurrences of three fixed keyword tiers (severe, moderate, positive)
and blends them into a bounded score and magnitude. Counting is by
occurrence, not by distinct keyword: "pain is severe, severe" counts
"severe" twice.
"""

import logging
import threading

from app.services.nlp import Sentiment

logger = logging.getLogger(__name__)


SEVERE_TERMS: tuple[str, ...] = (
    "severe",
    "critical",
    "urgent",
    "emergency",
    "life-threatening",
    "acute",
    "deteriorating",
    "worsening",
    "progressive",
    "rapid onset",
    "sudden",
    "intractable",
    "refractory",
    "uncontrolled",
    "persistent",
    "chronic",
)

MODERATE_TERMS: tuple[str, ...] = (
    "concerning",
    "notable",
    "significant",
    "moderate",
    "elevated",
    "abnormal",
    "irregular",
    "intermittent",
    "recurrent",
    "episodic",
)

POSITIVE_TERMS: tuple[str, ...] = (
    "improving",
    "stable",
    "normal",
    "good",
    "better",
    "controlled",
    "managed",
    "responsive",
    "resolved",
    "healing",
    "recovery",
    "decreased",
    "reduced",
    "minimal",
    "mild",
    "slight",
    "tolerable",
)

SEVERE_WEIGHT = 3
MODERATE_WEIGHT = 2
POSITIVE_WEIGHT = 2

# Indicator count at which magnitude saturates
MAGNITUDE_SATURATION = 5


def count_occurrences(text_lower: str, terms: tuple[str, ...]) -> int:
    """Total non-overlapping occurrences of all terms in lower-cased text."""
    return sum(text_lower.count(term) for term in terms)


_sentiment_service: "SentimentScoringService | None" = None
_sentiment_lock = threading.Lock()


def get_sentiment_scoring_service() -> "SentimentScoringService":
    """Get the singleton sentiment scoring service instance."""
    global _sentiment_service
    if _sentiment_service is None:
        with _sentiment_lock:
            if _sentiment_service is None:
                _sentiment_service = SentimentScoringService()
    return _sentiment_service


def reset_sentiment_scoring_service() -> None:
    """Reset the singleton instance (for testing)."""
    global _sentiment_service
    with _sentiment_lock:
        _sentiment_service = None


class SentimentScoringService:
    """Scores how concerning or reassuring a clinical note reads."""

    def score(self, text: str) -> Sentiment:
        """Score the sentiment of clinical text.

        Args:
            text: Clinical note text.

        Returns:
            Sentiment with score in [-1, 1] and magnitude in [0, 1].
        """
        text_lower = text.lower()

        severe_count = count_occurrences(text_lower, SEVERE_TERMS)
        moderate_count = count_occurrences(text_lower, MODERATE_TERMS)
        positive_count = count_occurrences(text_lower, POSITIVE_TERMS)

        severity_score = severe_count * SEVERE_WEIGHT + moderate_count * MODERATE_WEIGHT
        positivity_score = positive_count * POSITIVE_WEIGHT
        total_indicators = severe_count + moderate_count + positive_count

        if total_indicators == 0:
            return Sentiment(score=0.0, magnitude=0.0)

        raw = (positivity_score - severity_score) / (total_indicators * 3)
        score = max(-1.0, min(1.0, raw))
        magnitude = min(1.0, total_indicators / MAGNITUDE_SATURATION)

        logger.debug(
            f"Sentiment indicators: severe={severe_count} moderate={moderate_count} "
            f"positive={positive_count}"
        )
        return Sentiment(score=score, magnitude=magnitude)

    def get_stats(self) -> dict:
        """Get statistics about the keyword tiers."""
        return {
            "severe_terms": len(SEVERE_TERMS),
            "moderate_terms": len(MODERATE_TERMS),
            "positive_terms": len(POSITIVE_TERMS),
        }
