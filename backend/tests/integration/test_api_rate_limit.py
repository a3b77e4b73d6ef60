"""
Integration Tests for the default per-minute rate limit
"""
import pytest
from httpx import AsyncClient

from plotdesk.core.config import settings
from plotdesk.core.rate_limiter import limiter


@pytest.fixture
def rate_limiting(monkeypatch):
    monkeypatch.setattr(limiter, "enabled", True)
    limiter.reset()
    yield limiter
    limiter.reset()


@pytest.mark.asyncio
async def test_default_limit_applies_to_undecorated_routes(client: AsyncClient, rate_limiting):
    for _ in range(settings.RATE_LIMIT_PER_MINUTE):
        response = await client.get("/api/v1/plots")
        assert response.status_code == 200

    response = await client.get("/api/v1/plots")

    assert response.status_code == 429
    assert response.json()["error"]["code"] == "RATE_LIMITED"
    assert response.headers["Retry-After"] == "60"


@pytest.mark.asyncio
async def test_disabled_limiter_lets_everything_through(client: AsyncClient):
    for _ in range(settings.RATE_LIMIT_PER_MINUTE + 1):
        response = await client.get("/api/v1/plots")
        assert response.status_code == 200
