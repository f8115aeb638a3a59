"""Tests for the analysis API endpoints."""

import pytest
from httpx import AsyncClient

from app.core.config import settings

ANALYSIS_URL = f"{settings.api_v1_prefix}/analysis"
CHEST_PAIN_NOTE = "Patient reports severe chest pain and shortness of breath on exertion."
ROUTINE_BP_NOTE = "Routine follow-up, blood pressure stable and controlled at 118/75 mmHg."


class TestAnalyzeEndpoint:
    """Tests for POST /analysis."""

    @pytest.mark.asyncio
    async def test_analyze_returns_200(self, client: AsyncClient) -> None:
        """Test analysis succeeds."""
        response = await client.post(ANALYSIS_URL, json={"text": CHEST_PAIN_NOTE})
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_analyze_chest_pain(self, client: AsyncClient) -> None:
        """Test the chest pain scenario over HTTP."""
        response = await client.post(ANALYSIS_URL, json={"text": CHEST_PAIN_NOTE})
        data = response.json()
        analysis = data["analysis"]

        assert analysis["severity"] == 8
        assert "Coronary Artery Disease" in analysis["suggestedDiagnoses"]
        assert {"text": "chest pain", "category": "symptom"}.items() <= next(
            e for e in analysis["entities"] if e["text"] == "chest pain"
        ).items()
        assert len(analysis["keyPhrases"]) <= 3
        assert data["severity_level"] == "high"
        assert data["is_severe_case"] is True
        assert data["recommended_actions"][0] == "Seek immediate medical attention"
        assert data["text_length"] == len(CHEST_PAIN_NOTE)
        assert "request_id" in data
        assert data["processing_time_ms"] >= 0

    @pytest.mark.asyncio
    async def test_analyze_routine_note(self, client: AsyncClient) -> None:
        """Test a low severity note."""
        response = await client.post(ANALYSIS_URL, json={"text": ROUTINE_BP_NOTE})
        data = response.json()

        assert data["analysis"]["severity"] == 4
        assert data["severity_level"] == "low"
        assert data["is_severe_case"] is False

    @pytest.mark.asyncio
    async def test_analyze_empty_text(self, client: AsyncClient) -> None:
        """Test empty text returns the neutral analysis."""
        response = await client.post(ANALYSIS_URL, json={"text": "   "})
        assert response.status_code == 200
        assert response.json()["analysis"] == {
            "entities": [],
            "sentiment": {"score": 0.0, "magnitude": 0.0},
            "keyPhrases": [],
            "suggestedDiagnoses": [],
            "severity": 5,
        }

    @pytest.mark.asyncio
    async def test_analyze_missing_text(self, client: AsyncClient) -> None:
        """Test missing text is treated as empty."""
        response = await client.post(ANALYSIS_URL, json={})
        assert response.status_code == 200
        assert response.json()["analysis"]["severity"] == 5

    @pytest.mark.asyncio
    async def test_analyze_null_text(self, client: AsyncClient) -> None:
        """Test null text is treated as empty."""
        response = await client.post(ANALYSIS_URL, json={"text": None})
        assert response.status_code == 200
        data = response.json()
        assert data["analysis"]["severity"] == 5
        assert data["analysis"]["entities"] == []
        assert data["text_length"] == 0
        assert data["severity_level"] == "medium"

    @pytest.mark.asyncio
    async def test_analyze_non_string_rejected(self, client: AsyncClient) -> None:
        """Test non-string text is a validation error."""
        response = await client.post(ANALYSIS_URL, json={"text": 123})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_analyze_too_long_rejected(self, client: AsyncClient) -> None:
        """Test text over the configured limit is rejected."""
        response = await client.post(
            ANALYSIS_URL, json={"text": "a" * (settings.max_text_length + 1)}
        )
        assert response.status_code == 422


class TestBatchEndpoint:
    """Tests for POST /analysis/batch."""

    @pytest.mark.asyncio
    async def test_batch_summary(self, client: AsyncClient) -> None:
        """Test batch totals and per-item results."""
        response = await client.post(
            f"{ANALYSIS_URL}/batch",
            json={"texts": [CHEST_PAIN_NOTE, "", ROUTINE_BP_NOTE]},
        )
        assert response.status_code == 200
        data = response.json()

        assert data["total_texts"] == 3
        assert data["successful"] == 3
        assert data["failed"] == 0
        assert data["severe_cases"] == 1
        assert [r["severity"] for r in data["results"]] == [8, 5, 4]
        assert [r["severity_level"] for r in data["results"]] == ["high", "medium", "low"]
        assert data["results"][0]["suggested_diagnoses"] == ["Coronary Artery Disease"]
        assert data["results"][1]["entities_extracted"] == 0

    @pytest.mark.asyncio
    async def test_batch_null_text(self, client: AsyncClient) -> None:
        """Test null entries in a batch are treated as empty notes."""
        response = await client.post(f"{ANALYSIS_URL}/batch", json={"texts": [None]})
        assert response.status_code == 200
        item = response.json()["results"][0]
        assert item["text_preview"] == ""
        assert item["severity"] == 5
        assert item["error"] is None

    @pytest.mark.asyncio
    async def test_batch_preview_truncated(self, client: AsyncClient) -> None:
        """Test long texts are previewed with an ellipsis."""
        text = "Patient " * 20
        response = await client.post(f"{ANALYSIS_URL}/batch", json={"texts": [text]})
        preview = response.json()["results"][0]["text_preview"]

        assert preview == text[:100] + "..."

    @pytest.mark.asyncio
    async def test_batch_empty_rejected(self, client: AsyncClient) -> None:
        """Test an empty batch is a validation error."""
        response = await client.post(f"{ANALYSIS_URL}/batch", json={"texts": []})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_batch_too_large_rejected(self, client: AsyncClient) -> None:
        """Test batches over the configured size are rejected."""
        texts = ["Fever"] * (settings.max_batch_size + 1)
        response = await client.post(f"{ANALYSIS_URL}/batch", json={"texts": texts})
        assert response.status_code == 422


class TestRulesEndpoint:
    """Tests for GET /analysis/rules."""

    @pytest.mark.asyncio
    async def test_rule_stats(self, client: AsyncClient) -> None:
        """Test rule statistics are returned."""
        response = await client.get(f"{ANALYSIS_URL}/rules")
        assert response.status_code == 200
        data = response.json()

        assert data["diagnoses"]["total_rules"] == 8
        assert data["entities"]["total_groups"] > 0
        assert data["severity"]["critical_terms"] == 14
