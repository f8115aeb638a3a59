"""Pytest configuration and fixtures for backend tests."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from app.main import app
from app.services.text_analyzer import ClinicalTextAnalyzer


@pytest.fixture
def analyzer() -> ClinicalTextAnalyzer:
    """Create an analyzer wired to the shared sub-analyzers."""
    return ClinicalTextAnalyzer()


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client for the FastAPI app."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
