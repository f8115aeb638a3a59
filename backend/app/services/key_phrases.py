"""Key phrase extraction from clinical notes.

Splits text into sentences, scores each by medical relevance and length, and
keeps the top three.
"""

import logging
import re
import threading

logger = logging.getLogger(__name__)


MEDICAL_KEYWORDS: tuple[str, ...] = (
    "patient",
    "symptoms",
    "diagnosis",
    "treatment",
    "medication",
    "condition",
    "blood pressure",
    "heart rate",
    "pain",
    "fever",
    "breathing",
    "chest",
    "examination",
    "assessment",
    "findings",
    "history",
    "presents",
    "reports",
)

SENTENCE_SPLIT_PATTERN = re.compile(r"[.!?]+")

MIN_SENTENCE_LENGTH = 10  # fragments this short or shorter are dropped
SHORT_SENTENCE_LENGTH = 100
VERY_SHORT_SENTENCE_LENGTH = 50
LONG_SENTENCE_LENGTH = 200
LONG_SENTENCE_PENALTY = 2
MAX_KEY_PHRASES = 3


_key_phrase_service: "KeyPhraseExtractionService | None" = None
_key_phrase_lock = threading.Lock()


def get_key_phrase_service() -> "KeyPhraseExtractionService":
    """Get the singleton key phrase service instance."""
    global _key_phrase_service
    if _key_phrase_service is None:
        with _key_phrase_lock:
            if _key_phrase_service is None:
                _key_phrase_service = KeyPhraseExtractionService()
    return _key_phrase_service


def reset_key_phrase_service() -> None:
    """Reset the singleton instance (for testing)."""
    global _key_phrase_service
    with _key_phrase_lock:
        _key_phrase_service = None


class KeyPhraseExtractionService:
    """Selects the most relevant sentences of a note."""

    def split_sentences(self, text: str) -> list[str]:
        """Split on sentence terminators and drop short fragments.

        Returns trimmed sentences longer than MIN_SENTENCE_LENGTH.
        """
        sentences = []
        for fragment in SENTENCE_SPLIT_PATTERN.split(text):
            trimmed = fragment.strip()
            if len(trimmed) > MIN_SENTENCE_LENGTH:
                sentences.append(trimmed)
        return sentences

    def score_sentence(self, sentence: str) -> int:
        """Score a trimmed sentence by keyword hits and length."""
        sentence_lower = sentence.lower()
        score = sum(sentence_lower.count(keyword) for keyword in MEDICAL_KEYWORDS)

        length = len(sentence)
        if length < SHORT_SENTENCE_LENGTH:
            score += 1
        if length < VERY_SHORT_SENTENCE_LENGTH:
            score += 1
        if length > LONG_SENTENCE_LENGTH:
            score -= LONG_SENTENCE_PENALTY

        return score

    def extract(self, text: str) -> list[str]:
        """Extract up to three key phrases, most relevant first.

        Ties keep their order of appearance in the note.
        """
        if not text:
            return []

        sentences = self.split_sentences(text)
        ranked = sorted(sentences, key=self.score_sentence, reverse=True)
        return ranked[:MAX_KEY_PHRASES]

    def get_stats(self) -> dict:
        """Get statistics about the keyword table."""
        return {
            "medical_keywords": len(MEDICAL_KEYWORDS),
            "max_key_phrases": MAX_KEY_PHRASES,
        }
