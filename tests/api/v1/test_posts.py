"""
Integration tests for Post API endpoints.
Tests API routes and HTTP interactions.
"""
import pytest


@pytest.mark.asyncio
class TestPostAPI:
    """Test cases for Post API endpoints."""

    async def test_create_post(self, client):
        response = await client.post("/api/posts", json={"content": "Saka on the wing"})

        assert response.status_code == 201
        data = response.json()
        assert data["content"] == "Saka on the wing"
        assert data["likesCount"] == 0
        assert data["commentsCount"] == 0
        assert data["isLiked"] is False
        assert data["user"]["username"] == "saka7"

    async def test_create_video_post(self, client):
        response = await client.post(
            "/api/posts",
            json={"videoUrl": "https://cdn.example.com/goal.mp4", "videoDuration": 12}
        )

        assert response.status_code == 201
        assert response.json()["videoDuration"] == 12

    async def test_create_empty_post_rejected(self, client):
        response = await client.post("/api/posts", json={"content": "   "})

        assert response.status_code == 422

    async def test_feed(self, client, test_post):
        await client.post("/api/posts", json={"content": "Newer"})

        response = await client.get("/api/posts")

        assert response.status_code == 200
        assert [p["content"] for p in response.json()] == ["Newer", "North London is red"]

    async def test_feed_limit_validated(self, client):
        response = await client.get("/api/posts", params={"limit": 0})

        assert response.status_code == 422

    async def test_user_posts(self, client, test_post, test_user, test_user_2):
        response = await client.get(f"/api/posts/user/{test_user.id}")
        assert [p["id"] for p in response.json()] == [test_post.id]

        response = await client.get(f"/api/posts/user/{test_user_2.id}")
        assert response.json() == []

    async def test_delete_post(self, client, test_post):
        response = await client.delete(f"/api/posts/{test_post.id}")

        assert response.status_code == 204
        assert (await client.get("/api/posts")).json() == []

    async def test_delete_someone_elses_post(self, client, act_as, test_post, test_user_2):
        act_as(test_user_2)

        response = await client.delete(f"/api/posts/{test_post.id}")

        assert response.status_code == 404


@pytest.mark.asyncio
class TestLikeAPI:
    """Test cases for likes."""

    async def test_like_and_unlike(self, client, act_as, test_post, test_user_2):
        act_as(test_user_2)

        response = await client.post(f"/api/posts/{test_post.id}/like")
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "postId": test_post.id,
            "likesCount": 1,
            "isLiked": True,
        }

        again = await client.post(f"/api/posts/{test_post.id}/like")
        assert again.json()["likesCount"] == 1

        feed = (await client.get("/api/posts")).json()
        assert feed[0]["isLiked"] is True

        response = await client.delete(f"/api/posts/{test_post.id}/like")
        assert response.json()["likesCount"] == 0
        assert response.json()["isLiked"] is False

    async def test_like_missing_post(self, client):
        response = await client.post("/api/posts/missing/like")

        assert response.status_code == 404
        assert response.json()["detail"] == "Post not found"


@pytest.mark.asyncio
class TestCommentAPI:
    """Test cases for comments."""

    async def test_add_and_list_comments(self, client, act_as, test_post, test_user_2):
        act_as(test_user_2)

        response = await client.post(
            f"/api/posts/{test_post.id}/comments",
            json={"content": "Ballon d'Or"}
        )
        assert response.status_code == 201
        assert response.json()["user"]["username"] == "odegaard8"

        comments = (await client.get(f"/api/posts/{test_post.id}/comments")).json()
        assert [c["content"] for c in comments] == ["Ballon d'Or"]

        feed = (await client.get("/api/posts")).json()
        assert feed[0]["commentsCount"] == 1

    async def test_blank_comment_rejected(self, client, test_post):
        response = await client.post(f"/api/posts/{test_post.id}/comments", json={"content": "  "})

        assert response.status_code == 422
