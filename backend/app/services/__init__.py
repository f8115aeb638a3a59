"""Services for the Clinical Text Analyzer.

Services implement the rule-based analysis pipeline:
- EntityExtractionService: dictionary entity recognition
- SentimentScoringService: weighted keyword sentiment
- KeyPhraseExtractionService: relevant sentence selection
- DiagnosisSuggestionService: regex rule table for candidate diagnoses
- SeverityAssessmentService: 1-10 severity estimate
- ClinicalTextAnalyzer: orchestrates the above
"""

from app.services.care_recommendations import is_severe_case, recommend_actions, severity_level
from app.services.diagnosis_suggester import (
    DIAGNOSIS_RULES,
    DiagnosisRule,
    DiagnosisSuggestionService,
    get_diagnosis_suggestion_service,
    reset_diagnosis_suggestion_service,
)
from app.services.entity_extraction import (
    ENTITY_GROUPS,
    EntityExtractionService,
    EntityGroup,
    get_entity_extraction_service,
    reset_entity_extraction_service,
)
from app.services.key_phrases import (
    KeyPhraseExtractionService,
    get_key_phrase_service,
    reset_key_phrase_service,
)
from app.services.nlp import (
    AnalysisResult,
    BaseTextAnalyzer,
    Entity,
    Sentiment,
    TextAnalyzerInterface,
)
from app.services.sentiment_scoring import (
    SentimentScoringService,
    get_sentiment_scoring_service,
    reset_sentiment_scoring_service,
)
from app.services.severity_assessment import (
    SeverityAssessmentService,
    get_severity_assessment_service,
    reset_severity_assessment_service,
)
from app.services.text_analyzer import (
    ClinicalTextAnalyzer,
    analyze_clinical_text,
    get_clinical_text_analyzer,
    reset_clinical_text_analyzer,
)

__all__ = [
    # Result types
    "AnalysisResult",
    "BaseTextAnalyzer",
    "Entity",
    "Sentiment",
    "TextAnalyzerInterface",
    # Entity extraction
    "ENTITY_GROUPS",
    "EntityExtractionService",
    "EntityGroup",
    "get_entity_extraction_service",
    "reset_entity_extraction_service",
    # Sentiment
    "SentimentScoringService",
    "get_sentiment_scoring_service",
    "reset_sentiment_scoring_service",
    # Key phrases
    "KeyPhraseExtractionService",
    "get_key_phrase_service",
    "reset_key_phrase_service",
    # Diagnoses
    "DIAGNOSIS_RULES",
    "DiagnosisRule",
    "DiagnosisSuggestionService",
    "get_diagnosis_suggestion_service",
    "reset_diagnosis_suggestion_service",
    # Severity
    "SeverityAssessmentService",
    "get_severity_assessment_service",
    "reset_severity_assessment_service",
    # Orchestrator
    "ClinicalTextAnalyzer",
    "analyze_clinical_text",
    "get_clinical_text_analyzer",
    "reset_clinical_text_analyzer",
    # Care recommendations
    "is_severe_case",
    "recommend_actions",
    "severity_level",
]
