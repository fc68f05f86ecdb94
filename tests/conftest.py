from unittest.mock import AsyncMock, patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from settings.config import AppConfig
from web.main import app


@pytest.fixture(autouse=True)
def no_history_cache(monkeypatch):
    """History cache off unless a test turns it on"""
    monkeypatch.setattr(AppConfig, "HISTORY_CACHE_TTL_SECONDS", 0)
    monkeypatch.setattr(AppConfig, "REFERENCE_TIMEZONE", "UTC")


@pytest.fixture
def auth_headers():
    return {"Authorization": "Bearer test-access-token"}


@pytest_asyncio.fixture
async def async_client() -> AsyncClient:
    """Async HTTP client для тестов API"""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def backend():
    """IMC backend client as seen by the services layer"""
    with patch("app.services.imc_backend_client") as mock_client:
        mock_client.calculate = AsyncMock()
        mock_client.get_history = AsyncMock(return_value=[])
        yield mock_client
