"""Rule-based clinical text analyzer.

Composes the five sub-analyzers into one pure function from note text to an
AnalysisResult. Each sub-analyzer reads only the input string and its own
static rule table, so calls are independent and safe across threads.
"""

import logging
import threading

from app.services.diagnosis_suggester import (
    DiagnosisSuggestionService,
    get_diagnosis_suggestion_service,
)
from app.services.entity_extraction import EntityExtractionService, get_entity_extraction_service
from app.services.key_phrases import KeyPhraseExtractionService, get_key_phrase_service
from app.services.nlp import AnalysisResult, BaseTextAnalyzer
from app.services.sentiment_scoring import SentimentScoringService, get_sentiment_scoring_service
from app.services.severity_assessment import (
    SeverityAssessmentService,
    get_severity_assessment_service,
)

logger = logging.getLogger(__name__)


class ClinicalTextAnalyzer(BaseTextAnalyzer):
    """Orchestrates entity, sentiment, key phrase, diagnosis and severity analysis.

    Usage:
        analyzer = ClinicalTextAnalyzer()
        result = analyzer.analyze("Patient reports severe chest pain.")
        result.severity  # 8

        # Or with explicit sub-analyzers:
        analyzer = ClinicalTextAnalyzer(entity_service=EntityExtractionService(groups))
    """

    def __init__(
        self,
        entity_service: EntityExtractionService | None = None,
        sentiment_service: SentimentScoringService | None = None,
        key_phrase_service: KeyPhraseExtractionService | None = None,
        diagnosis_service: DiagnosisSuggestionService | None = None,
        severity_service: SeverityAssessmentService | None = None,
    ) -> None:
        """Initialize the analyzer.

        Args:
            entity_service: Entity extractor. Defaults to the shared singleton.
            sentiment_service: Sentiment scorer. Defaults to the shared singleton.
            key_phrase_service: Key phrase extractor. Defaults to the shared singleton.
            diagnosis_service: Diagnosis suggester. Defaults to the shared singleton.
            severity_service: Severity assessor. Defaults to the shared singleton.
        """
        self._entities = entity_service or get_entity_extraction_service()
        self._sentiment = sentiment_service or get_sentiment_scoring_service()
        self._key_phrases = key_phrase_service or get_key_phrase_service()
        self._diagnoses = diagnosis_service or get_diagnosis_suggestion_service()
        self._severity = severity_service or get_severity_assessment_service()

    def analyze(self, text: str | None) -> AnalysisResult:
        """Analyze a clinical note.

        Empty or whitespace-only text yields the neutral result
        (no entities, zero sentiment, severity 5).

        Args:
            text: Free-text clinical note. ``None`` is treated as empty.

        Returns:
            AnalysisResult derived solely from the text and the rule tables.
        """
        text = self.normalize_input(text)
        if self.is_blank(text):
            return AnalysisResult.neutral()

        result = AnalysisResult(
            entities=self._entities.extract(text),
            sentiment=self._sentiment.score(text),
            key_phrases=self._key_phrases.extract(text),
            suggested_diagnoses=self._diagnoses.suggest(text),
            severity=self._severity.assess(text),
        )
        logger.debug(
            f"Analyzed {len(text)} chars: {len(result.entities)} entities, "
            f"{len(result.suggested_diagnoses)} diagnoses, severity {result.severity}"
        )
        return result

    def get_stats(self) -> dict:
        """Get rule-table statistics for every sub-analyzer."""
        return {
            "entities": self._entities.get_stats(),
            "sentiment": self._sentiment.get_stats(),
            "key_phrases": self._key_phrases.get_stats(),
            "diagnoses": self._diagnoses.get_stats(),
            "severity": self._severity.get_stats(),
        }


# Singleton instance and lock for thread safety
_analyzer: ClinicalTextAnalyzer | None = None
_analyzer_lock = threading.Lock()


def get_clinical_text_analyzer() -> ClinicalTextAnalyzer:
    """Get the singleton clinical text analyzer."""
    global _analyzer
    if _analyzer is None:
        with _analyzer_lock:
            if _analyzer is None:
                _analyzer = ClinicalTextAnalyzer()
    return _analyzer


def reset_clinical_text_analyzer() -> None:
    """Reset the singleton instance (for testing)."""
    global _analyzer
    with _analyzer_lock:
        _analyzer = None


def analyze_clinical_text(text: str | None) -> AnalysisResult:
    """Analyze a clinical note with the shared analyzer."""
    return get_clinical_text_analyzer().analyze(text)
