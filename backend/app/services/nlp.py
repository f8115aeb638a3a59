"""NLP result types and analyzer interface for clinical text processing.

Provides the immutable records produced by the rule-based analyzer and the
interface every analyzer implementation follows.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from app.schemas.base import EntityCategory


@dataclass(frozen=True)
class Entity:
    """A medical term recognized in clinical text.

    ``text`` is the verbatim occurrence from the input, original casing kept.
    """

    text: str
    category: EntityCategory
    confidence: float

    @property
    def key(self) -> tuple[str, EntityCategory]:
        """Uniqueness key used for deduplication."""
        return (self.text.lower(), self.category)

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "category": self.category.value,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class Sentiment:
    """Tone of the clinical language.

    score: -1 (concerning) to 1 (reassuring).
    magnitude: 0 to 1, how much sentiment-bearing vocabulary was present.
    """

    score: float = 0.0
    magnitude: float = 0.0

    def to_dict(self) -> dict[str, float]:
        return {"score": self.score, "magnitude": self.magnitude}


@dataclass(frozen=True)
class AnalysisResult:
    """Aggregate output of one analyzer call."""

    entities: list[Entity] = field(default_factory=list)
    sentiment: Sentiment = field(default_factory=Sentiment)
    key_phrases: list[str] = field(default_factory=list)
    suggested_diagnoses: list[str] = field(default_factory=list)
    severity: int = 5

    @classmethod
    def neutral(cls) -> "AnalysisResult":
        """Fixed result returned for empty or whitespace-only text."""
        return cls()

    def to_dict(self) -> dict[str, Any]:
        """Render the record with the camelCase keys the dashboard reads."""
        return {
            "entities": [e.to_dict() for e in self.entities],
            "sentiment": self.sentiment.to_dict(),
            "keyPhrases": list(self.key_phrases),
            "suggestedDiagnoses": list(self.suggested_diagnoses),
            "severity": self.severity,
        }


class TextAnalyzerInterface(ABC):
    """Interface for clinical text analyzers.

    Example usage:
        class MyAnalyzer(TextAnalyzerInterface):
            def analyze(self, text):
                ...

        result = MyAnalyzer().analyze(note_text)
    """

    @abstractmethod
    def analyze(self, text: str | None) -> AnalysisResult:
        """Analyze free-text clinical notes.

        Args:
            text: The clinical note text. ``None`` is treated as empty.

        Returns:
            AnalysisResult with entities, sentiment, key phrases,
            suggested diagnoses and severity.
        """
        pass  # pragma: no cover


class BaseTextAnalyzer(TextAnalyzerInterface):
    """Base analyzer with shared input handling."""

    def normalize_input(self, text: str | None) -> str:
        """Coerce missing input to the empty string."""
        if text is None:
            return ""
        return text

    def is_blank(self, text: str) -> bool:
        """Check if text is empty or whitespace only."""
        return not text.strip()

    def analyze(self, text: str | None) -> AnalysisResult:
        """Default implementation that returns the neutral result.

        Subclasses should override this method.
        """
        return AnalysisResult.neutral()
