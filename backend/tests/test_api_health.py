"""Tests for health and root API endpoints."""

import pytest
from httpx import AsyncClient

from app.main import app


class TestHealthEndpoint:
    """Test health check endpoint."""

    @pytest.mark.asyncio
    async def test_health_returns_200(self, client: AsyncClient) -> None:
        """Test health endpoint returns 200 OK."""
        response = await client.get("/health")
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_health_returns_healthy_status(self, client: AsyncClient) -> None:
        """Test health endpoint returns healthy status."""
        data = (await client.get("/health")).json()
        assert data["status"] == "healthy"
        assert data["service"] == "clinical-text-analyzer"
        assert data["version"] == "0.1.0"

    @pytest.mark.asyncio
    async def test_health_returns_timestamp(self, client: AsyncClient) -> None:
        """Test health endpoint returns ISO timestamp."""
        data = (await client.get("/health")).json()
        assert "T" in data["timestamp"]


class TestReadyEndpoint:
    """Test readiness endpoint."""

    @pytest.mark.asyncio
    async def test_ready_reports_analyzer(self, client: AsyncClient) -> None:
        """Test readiness includes analyzer stats."""
        response = await client.get("/ready")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["analyzer"]["diagnoses"]["total_rules"] == 8


class TestRootEndpoint:
    """Test root endpoint."""

    @pytest.mark.asyncio
    async def test_root_returns_service_info(self, client: AsyncClient) -> None:
        """Test root endpoint returns service info."""
        data = (await client.get("/")).json()
        assert "Clinical Text Analyzer" in data["service"]
        assert data["docs"] == "/docs"
        assert data["health"] == "/health"
        assert data["analysis"] == "/api/v1/analysis"


class TestAPIMetadata:
    """Test API metadata and configuration."""

    def test_app_title(self) -> None:
        """Test app has correct title."""
        assert app.title == "Clinical Text Analyzer"

    def test_app_version(self) -> None:
        """Test app has correct version."""
        assert app.version == "0.1.0"
