"""
Tests for the health endpoints.
"""
import pytest


@pytest.mark.asyncio
async def test_health(unauth_client):
    response = await unauth_client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
