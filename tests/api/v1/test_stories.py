"""
Integration tests for story endpoints.
"""
import pytest


@pytest.mark.asyncio
class TestStoryAPI:
    """Test cases for /api/stories."""

    async def test_create_and_list(self, client):
        response = await client.post("/api/stories", json={"content": "Emirates bound"})

        assert response.status_code == 201
        assert "expiresAt" in response.json()

        stories = (await client.get("/api/stories")).json()
        assert [s["content"] for s in stories] == ["Emirates bound"]

    async def test_empty_story_rejected(self, client):
        response = await client.post("/api/stories", json={})

        assert response.status_code == 422
