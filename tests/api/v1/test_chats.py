"""
Integration tests for chat room and message endpoints.
"""
import pytest


@pytest.mark.asyncio
class TestChatAPI:
    """Test cases for /api/chats."""

    async def test_open_private_chat_once(self, client, act_as, test_user, test_user_2):
        first = await client.post("/api/chats/private", json={"partnerId": test_user_2.id})
        assert first.status_code == 200
        assert first.json()["isGroup"] is False
        assert first.json()["otherUser"]["id"] == test_user_2.id

        act_as(test_user_2)
        second = await client.post("/api/chats/private", json={"partnerId": test_user.id})

        assert second.json()["id"] == first.json()["id"]
        assert second.json()["otherUser"]["id"] == test_user.id

    async def test_private_chat_with_self(self, client, test_user):
        response = await client.post("/api/chats/private", json={"partnerId": test_user.id})

        assert response.status_code == 400

    async def test_create_group(self, client, test_user_2, test_user_3):
        response = await client.post(
            "/api/chats/group",
            json={"name": "Invincibles", "memberIds": [test_user_2.id, test_user_3.id]}
        )

        assert response.status_code == 201
        data = response.json()
        assert data["isGroup"] is True
        assert data["otherUser"] is None
        assert len(data["members"]) == 3

    async def test_group_without_name(self, client, test_user_2):
        response = await client.post("/api/chats/group", json={"name": "  ", "memberIds": [test_user_2.id]})

        assert response.status_code == 422

    async def test_send_and_list_messages(self, client, test_chat, mock_websocket_manager):
        response = await client.post(
            f"/api/chats/{test_chat.id}/messages",
            json={"content": "COYG"}
        )
        assert response.status_code == 201
        assert response.json()["messageType"] == "text"
        mock_websocket_manager.broadcast_new_message.assert_awaited_once()

        messages = (await client.get(f"/api/chats/{test_chat.id}/messages")).json()
        assert [m["content"] for m in messages] == ["COYG"]

        rooms = (await client.get("/api/chats")).json()
        assert rooms[0]["lastMessage"]["content"] == "COYG"

    async def test_image_message_requires_url(self, client, test_chat):
        response = await client.post(
            f"/api/chats/{test_chat.id}/messages",
            json={"content": "", "messageType": "image"}
        )

        assert response.status_code == 422

    async def test_non_member_cannot_read(self, client, act_as, test_chat, test_user_3):
        act_as(test_user_3)

        response = await client.get(f"/api/chats/{test_chat.id}/messages")

        assert response.status_code == 403

    async def test_missing_chat(self, client):
        response = await client.get("/api/chats/missing/messages")

        assert response.status_code == 404
