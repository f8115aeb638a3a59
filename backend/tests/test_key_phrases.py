"""Tests for key phrase extraction."""

import pytest

from app.services.key_phrases import (
    KeyPhraseExtractionService,
    get_key_phrase_service,
    reset_key_phrase_service,
)


@pytest.fixture
def service() -> KeyPhraseExtractionService:
    """Create a key phrase service instance."""
    return KeyPhraseExtractionService()


class TestServiceInit:
    """Test service initialization."""

    def setup_method(self):
        """Reset singleton before each test."""
        reset_key_phrase_service()

    def test_singleton_pattern(self):
        """Test singleton pattern works."""
        assert get_key_phrase_service() is get_key_phrase_service()


class TestSentenceSplitting:
    """Tests for sentence splitting."""

    def test_short_fragments_dropped(self, service: KeyPhraseExtractionService):
        """Test fragments of 10 characters or fewer are dropped."""
        assert service.split_sentences("Ok. Fine. Patient reports chest pain.") == [
            "Patient reports chest pain"
        ]

    def test_length_boundary(self, service: KeyPhraseExtractionService):
        """Test exactly 10 characters is dropped, 11 is kept."""
        assert service.split_sentences("abcdefghij.") == []
        assert service.split_sentences("abcdefghijk.") == ["abcdefghijk"]

    def test_repeated_terminators(self, service: KeyPhraseExtractionService):
        """Test runs of terminators split once."""
        sentences = service.split_sentences("Patient has fever!!! Is the patient breathing normally?")
        assert sentences == ["Patient has fever", "Is the patient breathing normally"]

    def test_trimmed_length_used(self, service: KeyPhraseExtractionService):
        """Test surrounding whitespace does not count toward length."""
        assert service.split_sentences("      short      .") == []


class TestSentenceScoring:
    """Tests for sentence scoring."""

    def test_keywords_and_short_bonus(self, service: KeyPhraseExtractionService):
        """Test keyword hits plus both length bonuses."""
        assert service.score_sentence("Patient reports chest pain and fever") == 7

    def test_medium_sentence_bonus(self, service: KeyPhraseExtractionService):
        """Test a sentence between 50 and 100 characters gets one bonus."""
        sentence = "a" * 60
        assert service.score_sentence(sentence) == 1

    def test_long_sentence_penalty(self, service: KeyPhraseExtractionService):
        """Test sentences over 200 characters are penalized."""
        assert service.score_sentence("a" * 201) == -2

    def test_mid_length_no_bonus(self, service: KeyPhraseExtractionService):
        """Test sentences between 100 and 200 characters get nothing."""
        assert service.score_sentence("a" * 150) == 0

    def test_repeated_keywords_count(self, service: KeyPhraseExtractionService):
        """Test each keyword occurrence counts."""
        assert service.score_sentence("pain pain pain") == 5


class TestExtraction:
    """Tests for key phrase extraction."""

    def test_empty_text(self, service: KeyPhraseExtractionService):
        """Test empty input returns no phrases."""
        assert service.extract("") == []

    def test_at_most_three(self, service: KeyPhraseExtractionService):
        """Test at most three phrases are returned."""
        text = " ".join(f"Patient sentence number {i} here." for i in range(6))
        assert len(service.extract(text)) == 3

    def test_ranked_by_relevance(self, service: KeyPhraseExtractionService):
        """Test relevant sentences come first, ties keep note order."""
        text = (
            "The weather outside was quite pleasant today. "
            "Patient reports chest pain and fever. "
            "Follow the plan as discussed with family."
        )
        assert service.extract(text) == [
            "Patient reports chest pain and fever",
            "The weather outside was quite pleasant today",
            "Follow the plan as discussed with family",
        ]

    def test_casing_preserved(self, service: KeyPhraseExtractionService):
        """Test phrases keep original casing without the terminator."""
        assert service.extract("PATIENT Presents With FEVER!") == ["PATIENT Presents With FEVER"]

    def test_long_sentence_ranks_last(self, service: KeyPhraseExtractionService):
        """Test a long sentence loses to short relevant ones."""
        long_sentence = "Patient " + "x" * 250
        text = f"{long_sentence}. Patient has fever. Chest pain at rest. Pain in the left leg."
        phrases = service.extract(text)
        assert long_sentence not in phrases
        assert len(phrases) == 3
