"""
Tests for the Socket.IO push channel.
"""
import pytest

from goonergram.config import settings
from goonergram.core.websocket import (
    ConnectionManager,
    GLOBAL_ROOM,
    _token_from_environ,
    chat_room,
    user_room,
)


@pytest.fixture
def manager(mocker):
    manager = ConnectionManager()
    mocker.patch.object(manager.sio, "emit", new=mocker.AsyncMock())
    return manager


def test_room_names():
    assert user_room("google:1001") == "user:google:1001"
    assert chat_room("abc") == "chat:abc"


def test_token_from_cookie_header():
    environ = {"HTTP_COOKIE": f"theme=dark; {settings.session_cookie_name}=jwt-value"}

    assert _token_from_environ(environ) == "jwt-value"


def test_token_missing():
    assert _token_from_environ({}) is None
    assert _token_from_environ({"HTTP_COOKIE": "theme=dark"}) is None


@pytest.mark.asyncio
class TestBroadcasts:
    """Each push goes to the right event and room."""

    async def test_new_message(self, manager):
        await manager.broadcast_new_message("room-1", {"id": "m1"})

        manager.sio.emit.assert_awaited_once_with("new_message", {"id": "m1"}, room="chat:room-1")

    async def test_global_message(self, manager):
        await manager.broadcast_global_message({"id": "g1"})

        manager.sio.emit.assert_awaited_once_with("new_global_message", {"id": "g1"}, room=GLOBAL_ROOM)

    async def test_notification(self, manager):
        await manager.send_notification("google:1001", {"id": "n1"})

        manager.sio.emit.assert_awaited_once_with("notification", {"id": "n1"}, room="user:google:1001")

    async def test_unread_count(self, manager):
        await manager.send_unread_count("google:1001", 3)

        manager.sio.emit.assert_awaited_once_with("unread_count", {"count": 3}, room="user:google:1001")
