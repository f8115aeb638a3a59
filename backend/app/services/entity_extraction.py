"""Dictionary-based medical entity extraction.

Scans clinical text against a fixed table of synonym groups, each tagged with
an entity category. Matching runs in two passes:

1. Containment: an Aho-Corasick automaton over the lower-cased text finds
   which dictionary patterns occur at all (plain substring semantics).
2. Occurrence collection: each contained pattern is re-scanned against the
   original text with a case-insensitive regex so every occurrence keeps the
   casing the author used.

Confidence is scored per occurrence, entities are deduplicated on
(lower-cased text, category) keeping the highest confidence, and the output is
sorted by confidence (descending, first-seen order for ties).
"""

import logging
import re
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

import ahocorasick

from app.schemas.base import EntityCategory
from app.services.nlp import Entity

if TYPE_CHECKING:
    from ahocorasick import Automaton

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntityGroup:
    """Synonym set for one medical concept."""

    category: EntityCategory
    patterns: tuple[str, ...]


# ============================================================================
# Entity Dictionary
# ============================================================================

ENTITY_GROUPS: tuple[EntityGroup, ...] = (
    # Symptoms
    EntityGroup(EntityCategory.SYMPTOM, ("headache", "head pain", "cephalgia")),
    EntityGroup(EntityCategory.SYMPTOM, ("chest pain", "chest discomfort", "chest tightness")),
    EntityGroup(EntityCategory.SYMPTOM, ("shortness of breath", "dyspnea", "breathlessness")),
    EntityGroup(EntityCategory.SYMPTOM, ("pain",)),
    EntityGroup(EntityCategory.SYMPTOM, ("fever", "febrile", "pyrexia")),
    EntityGroup(EntityCategory.SYMPTOM, ("cough",)),
    EntityGroup(EntityCategory.SYMPTOM, ("dizziness", "lightheadedness", "vertigo")),
    EntityGroup(EntityCategory.SYMPTOM, ("fatigue", "tiredness", "lethargy", "malaise")),
    EntityGroup(EntityCategory.SYMPTOM, ("nausea", "vomiting")),
    EntityGroup(EntityCategory.SYMPTOM, ("sore throat", "pharyngitis")),
    EntityGroup(EntityCategory.SYMPTOM, ("congestion", "runny nose")),
    EntityGroup(EntityCategory.SYMPTOM, ("heartburn",)),
    EntityGroup(EntityCategory.SYMPTOM, ("palpitations",)),
    EntityGroup(EntityCategory.SYMPTOM, ("weight loss",)),
    # Vitals
    EntityGroup(EntityCategory.VITAL, ("blood pressure",)),
    EntityGroup(EntityCategory.VITAL, ("heart rate", "pulse")),
    EntityGroup(EntityCategory.VITAL, ("temperature",)),
    EntityGroup(EntityCategory.VITAL, ("respiratory rate", "breathing")),
    EntityGroup(EntityCategory.VITAL, ("oxygen saturation", "spo2")),
    EntityGroup(EntityCategory.VITAL, ("blood glucose", "blood sugar")),
    # Conditions
    EntityGroup(EntityCategory.CONDITION, ("diabetes", "diabetic")),
    EntityGroup(EntityCategory.CONDITION, ("hypertension",)),
    EntityGroup(EntityCategory.CONDITION, ("asthma",)),
    EntityGroup(EntityCategory.CONDITION, ("stroke",)),
    EntityGroup(EntityCategory.CONDITION, ("migraine",)),
    EntityGroup(EntityCategory.CONDITION, ("pneumonia",)),
    EntityGroup(EntityCategory.CONDITION, ("copd", "emphysema")),
    EntityGroup(EntityCategory.CONDITION, ("coronary artery disease", "angina")),
    EntityGroup(EntityCategory.CONDITION, ("heart failure",)),
    EntityGroup(EntityCategory.CONDITION, ("acid reflux", "gerd")),
    EntityGroup(EntityCategory.CONDITION, ("hyperlipidemia", "high cholesterol")),
    EntityGroup(EntityCategory.CONDITION, ("arthritis",)),
    # Medications
    EntityGroup(EntityCategory.MEDICATION, ("lisinopril",)),
    EntityGroup(EntityCategory.MEDICATION, ("amlodipine",)),
    EntityGroup(EntityCategory.MEDICATION, ("atorvastatin",)),
    EntityGroup(EntityCategory.MEDICATION, ("metformin",)),
    EntityGroup(EntityCategory.MEDICATION, ("insulin",)),
    EntityGroup(EntityCategory.MEDICATION, ("topiramate",)),
    EntityGroup(EntityCategory.MEDICATION, ("sumatriptan",)),
    EntityGroup(EntityCategory.MEDICATION, ("aspirin",)),
    EntityGroup(EntityCategory.MEDICATION, ("ibuprofen",)),
    EntityGroup(EntityCategory.MEDICATION, ("acetaminophen", "paracetamol")),
    EntityGroup(EntityCategory.MEDICATION, ("amoxicillin",)),
    EntityGroup(EntityCategory.MEDICATION, ("albuterol",)),
    EntityGroup(EntityCategory.MEDICATION, ("omeprazole",)),
    EntityGroup(EntityCategory.MEDICATION, ("sertraline",)),
    # Procedures
    EntityGroup(EntityCategory.PROCEDURE, ("ecg", "ekg", "electrocardiogram")),
    EntityGroup(EntityCategory.PROCEDURE, ("echocardiogram",)),
    EntityGroup(EntityCategory.PROCEDURE, ("x-ray", "radiograph")),
    EntityGroup(EntityCategory.PROCEDURE, ("mri",)),
    EntityGroup(EntityCategory.PROCEDURE, ("ct scan",)),
    EntityGroup(EntityCategory.PROCEDURE, ("ultrasound",)),
    EntityGroup(EntityCategory.PROCEDURE, ("blood test", "blood work")),
    EntityGroup(EntityCategory.PROCEDURE, ("biopsy",)),
    EntityGroup(EntityCategory.PROCEDURE, ("surgery",)),
    # Psychological
    EntityGroup(EntityCategory.PSYCHOLOGICAL, ("anxiety", "anxious")),
    EntityGroup(EntityCategory.PSYCHOLOGICAL, ("depression", "depressed")),
    EntityGroup(EntityCategory.PSYCHOLOGICAL, ("stress",)),
    EntityGroup(EntityCategory.PSYCHOLOGICAL, ("panic",)),
    EntityGroup(EntityCategory.PSYCHOLOGICAL, ("insomnia",)),
    # Lifestyle
    EntityGroup(EntityCategory.LIFESTYLE, ("smoking", "tobacco")),
    EntityGroup(EntityCategory.LIFESTYLE, ("alcohol",)),
    EntityGroup(EntityCategory.LIFESTYLE, ("diet",)),
    EntityGroup(EntityCategory.LIFESTYLE, ("exercise",)),
    EntityGroup(EntityCategory.LIFESTYLE, ("sleep",)),
)

# Words that raise confidence for every entity in the note
CONTEXT_WORDS: tuple[str, ...] = (
    "patient",
    "symptoms",
    "diagnosis",
    "treatment",
    "medical",
    "clinical",
)

# Confidence scoring parameters
BASE_CONFIDENCE = 0.7
SPECIFIC_CATEGORY_BONUS = 0.2
CONTEXT_BONUS = 0.1
SPECIFIC_CATEGORIES = frozenset({EntityCategory.CONDITION, EntityCategory.MEDICATION})


# ============================================================================
# Entity Extraction Service
# ============================================================================

_entity_service: "EntityExtractionService | None" = None
_entity_lock = threading.Lock()


def get_entity_extraction_service() -> "EntityExtractionService":
    """Get the singleton entity extraction service instance."""
    global _entity_service
    if _entity_service is None:
        with _entity_lock:
            if _entity_service is None:
                _entity_service = EntityExtractionService()
    return _entity_service


def reset_entity_extraction_service() -> None:
    """Reset the singleton instance (for testing)."""
    global _entity_service
    with _entity_lock:
        _entity_service = None


class EntityExtractionService:
    """Extracts confidence-scored medical entities from clinical text.

    Usage:
        service = EntityExtractionService()
        entities = service.extract("Patient reports headache and fever.")
    """

    def __init__(self, groups: tuple[EntityGroup, ...] = ENTITY_GROUPS) -> None:
        self._groups = groups
        self._automaton: "Automaton" = self._build_automaton(groups)
        self._occurrence_patterns: dict[str, re.Pattern[str]] = {
            pattern: re.compile(re.escape(pattern), re.IGNORECASE)
            for group in groups
            for pattern in group.patterns
        }

    @staticmethod
    def _build_automaton(groups: tuple[EntityGroup, ...]) -> "Automaton":
        """Build an Aho-Corasick automaton over all lower-cased patterns."""
        automaton = ahocorasick.Automaton()
        for group in groups:
            for pattern in group.patterns:
                key = pattern.lower()
                if key not in automaton:
                    automaton.add_word(key, key)
        automaton.make_automaton()
        logger.info(f"Entity automaton built with {len(automaton)} patterns")
        return automaton

    def contained_patterns(self, text: str) -> set[str]:
        """Return every dictionary pattern that occurs in ``text``.

        Substring semantics, case-insensitive; overlapping and nested
        patterns are all reported.
        """
        if not text:
            return set()
        return {pattern for _, pattern in self._automaton.iter(text.lower())}

    def has_clinical_context(self, text: str) -> bool:
        """Check once per note for context words that raise confidence."""
        text_lower = text.lower()
        return any(word in text_lower for word in CONTEXT_WORDS)

    def score_confidence(self, category: EntityCategory, has_context: bool) -> float:
        """Compute the confidence of one occurrence."""
        confidence = BASE_CONFIDENCE
        if category in SPECIFIC_CATEGORIES:
            confidence += SPECIFIC_CATEGORY_BONUS
        if has_context:
            confidence += CONTEXT_BONUS
        return min(1.0, confidence)

    def find_occurrences(self, text: str, pattern: str) -> list[str]:
        """Collect every verbatim occurrence of ``pattern`` in the original text."""
        return [match.group(0) for match in self._occurrence_patterns[pattern].finditer(text)]

    def extract(self, text: str) -> list[Entity]:
        """Extract deduplicated entities sorted by confidence.

        Args:
            text: Clinical note text.

        Returns:
            Entities, highest confidence first. Empty for empty text.
        """
        if not text:
            return []

        contained = self.contained_patterns(text)
        if not contained:
            return []

        has_context = self.has_clinical_context(text)
        found: dict[tuple[str, EntityCategory], Entity] = {}

        for group in self._groups:
            for pattern in group.patterns:
                if pattern.lower() not in contained:
                    continue
                confidence = self.score_confidence(group.category, has_context)
                for occurrence in self.find_occurrences(text, pattern):
                    entity = Entity(text=occurrence, category=group.category, confidence=confidence)
                    existing = found.get(entity.key)
                    if existing is None:
                        found[entity.key] = entity
                    elif entity.confidence > existing.confidence:
                        # Keep first-seen text, take the higher confidence
                        found[entity.key] = Entity(
                            text=existing.text,
                            category=existing.category,
                            confidence=entity.confidence,
                        )

        entities = sorted(found.values(), key=lambda e: e.confidence, reverse=True)
        logger.debug(f"Extracted {len(entities)} entities from {len(text)} chars")
        return entities

    def get_stats(self) -> dict:
        """Get statistics about the entity dictionary."""
        by_category: dict[str, int] = {}
        for group in self._groups:
            category = group.category.value
            by_category[category] = by_category.get(category, 0) + 1

        return {
            "total_groups": len(self._groups),
            "total_patterns": len(self._occurrence_patterns),
            "by_category": by_category,
        }
