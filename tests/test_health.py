import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    """Test the health check endpoint."""
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_api_health_check(client: AsyncClient):
    """Test the versioned health endpoint returns plain text."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.text == "Feedback API is healthy!"
