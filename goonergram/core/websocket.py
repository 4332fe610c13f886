"""
WebSocket manager for real-time delivery.
Pushes chat messages, global chat messages, and notifications to connected
clients over Socket.IO. REST polling endpoints remain authoritative.
"""
import logging
from http.cookies import SimpleCookie
from typing import Dict, Set, Optional, Any

import socketio

from goonergram.config import settings

logger = logging.getLogger(__name__)

GLOBAL_ROOM = "global"


def user_room(user_id: str) -> str:
    """Socket.IO room that reaches every session of one user."""
    return f"user:{user_id}"


def chat_room(chat_room_id: str) -> str:
    """Socket.IO room for members viewing a chat room."""
    return f"chat:{chat_room_id}"


def _token_from_environ(environ: Dict[str, Any]) -> Optional[str]:
    """Read the session cookie from the handshake request, if present."""
    raw_cookie = environ.get("HTTP_COOKIE")
    if not raw_cookie:
        return None

    cookie = SimpleCookie()
    cookie.load(raw_cookie)
    morsel = cookie.get(settings.session_cookie_name)
    return morsel.value if morsel else None


class ConnectionManager:
    """
    WebSocket connection manager using Socket.IO.

    Authenticated clients automatically join their personal room and the
    global chat room; chat rooms are joined explicitly after a membership check.
    """

    def __init__(self):
        """Initialize the connection manager."""
        cors_origins = settings.get_allowed_origins_list() or "*"

        self.sio = socketio.AsyncServer(
            async_mode="asgi",
            cors_allowed_origins=cors_origins,
            logger=False,
            engineio_logger=False,
            ping_timeout=settings.ws_heartbeat_interval,
            ping_interval=settings.ws_heartbeat_interval // 2,
        )

        # Track connections: {sid: user_id}
        self.connections: Dict[str, str] = {}

        # Track user sessions: {user_id: set of sids}
        self.user_sessions: Dict[str, Set[str]] = {}

        self._setup_handlers()

    def _setup_handlers(self):
        """Setup Socket.IO event handlers."""

        @self.sio.event
        async def connect(sid, environ, auth):
            """
            Handle client connection.

            Client provides the session token in the handshake auth payload
            ({'token': ...}) or via the session cookie.
            """
            token = (auth or {}).get("token") or _token_from_environ(environ)

            if not token:
                logger.warning("Connection rejected - no token: %s", sid)
                return False

            from goonergram.core.security import get_session_user_id, SecurityException
            from goonergram.core.database import AsyncSessionLocal
            from goonergram.repositories.user_repo import UserRepository

            try:
                user_id = get_session_user_id(token)
            except SecurityException as e:
                logger.warning("Connection rejected - %s: %s", e.detail, sid)
                return False

            async with AsyncSessionLocal() as db:
                if not await UserRepository(db).exists(user_id):
                    logger.warning("Connection rejected - user not found: %s", sid)
                    return False

            self.connections[sid] = user_id
            self.user_sessions.setdefault(user_id, set()).add(sid)

            await self.sio.enter_room(sid, user_room(user_id))
            await self.sio.enter_room(sid, GLOBAL_ROOM)

            logger.info("Client connected: %s (user: %s)", sid, user_id)
            return True

        @self.sio.event
        async def disconnect(sid):
            """Handle client disconnection."""
            user_id = self.connections.pop(sid, None)

            if user_id and user_id in self.user_sessions:
                self.user_sessions[user_id].discard(sid)
                if not self.user_sessions[user_id]:
                    del self.user_sessions[user_id]

            logger.info("Client disconnected: %s (user: %s)", sid, user_id)

        @self.sio.event
        async def join_chat(sid, data):
            """
            Join a chat room.

            Expected data: {'chat_id': '<chat room id>'}
            """
            user_id = self.connections.get(sid)
            chat_room_id = (data or {}).get("chat_id")

            if not user_id:
                await self.sio.emit("error", {"message": "Unauthorized"}, to=sid)
                return

            if not chat_room_id:
                await self.sio.emit("error", {"message": "chat_id is required"}, to=sid)
                return

            from goonergram.core.database import AsyncSessionLocal
            from goonergram.repositories.chat_repo import ChatRoomMemberRepository

            async with AsyncSessionLocal() as db:
                is_member = await ChatRoomMemberRepository(db).is_member(chat_room_id, user_id)

            if not is_member:
                logger.warning("User %s not a member of chat %s", user_id, chat_room_id)
                await self.sio.emit("error", {"message": "Not a member of this chat"}, to=sid)
                return

            await self.sio.enter_room(sid, chat_room(chat_room_id))
            await self.sio.emit("joined_chat", {"chat_id": chat_room_id}, to=sid)

        @self.sio.event
        async def leave_chat(sid, data):
            """
            Leave a chat room.

            Expected data: {'chat_id': '<chat room id>'}
            """
            chat_room_id = (data or {}).get("chat_id")
            if chat_room_id:
                await self.sio.leave_room(sid, chat_room(chat_room_id))
                await self.sio.emit("left_chat", {"chat_id": chat_room_id}, to=sid)

    async def broadcast_new_message(self, chat_room_id: str, message_data: Dict[str, Any]):
        """
        Broadcast a new chat message to the room.

        Args:
            chat_room_id: Chat room ID
            message_data: JSON-serializable message payload
        """
        await self.sio.emit("new_message", message_data, room=chat_room(chat_room_id))
        logger.debug("Broadcast message %s to chat %s", message_data.get("id"), chat_room_id)

    async def broadcast_global_message(self, message_data: Dict[str, Any]):
        """Broadcast a new message to everyone in the global chat."""
        await self.sio.emit("new_global_message", message_data, room=GLOBAL_ROOM)

    async def send_notification(self, user_id: str, notification_data: Dict[str, Any]):
        """Push a new notification to all sessions of the recipient."""
        await self.sio.emit("notification", notification_data, room=user_room(user_id))

    async def send_unread_count(self, user_id: str, count: int):
        """Push the recipient's current unread notification count."""
        await self.sio.emit("unread_count", {"count": count}, room=user_room(user_id))

    def get_asgi_app(self, fastapi_app):
        """
        Get the ASGI app for Socket.IO wrapping FastAPI.

        Socket.IO wraps FastAPI: requests under /socket.io go to Socket.IO,
        everything else is passed to the FastAPI app.

        Args:
            fastapi_app: FastAPI application instance

        Returns:
            Socket.IO ASGI app with FastAPI wrapped inside
        """
        return socketio.ASGIApp(self.sio, fastapi_app)


# Global connection manager instance
connection_manager = ConnectionManager()
