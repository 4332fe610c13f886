"""
Message service for business logic.
Handles chat room messages and the global chat, and pushes new messages
over Socket.IO after they are committed.
"""
from typing import List, Optional
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from goonergram.config import settings
from goonergram.core.websocket import connection_manager
from goonergram.models.message import Message, GlobalMessage, MessageType
from goonergram.repositories.message_repo import MessageRepository, GlobalMessageRepository
from goonergram.schemas.chat import MessageResponse, GlobalMessageResponse
from goonergram.services.chat_service import ChatService

logger = logging.getLogger(__name__)


class MessageService:
    """Service for message-related business logic."""

    def __init__(self, db: AsyncSession):
        """Initialize message service."""
        self.db = db
        self.message_repo = MessageRepository(db)
        self.global_repo = GlobalMessageRepository(db)
        self.chat_service = ChatService(db)
        self.ws_manager = connection_manager

    async def send_message(
        self,
        chat_room_id: str,
        sender_id: str,
        content: str,
        message_type: MessageType = MessageType.TEXT,
        image_url: Optional[str] = None,
        video_url: Optional[str] = None
    ) -> Message:
        """
        Send a message to a chat room.

        Args:
            chat_room_id: Target room
            sender_id: Sender; must be a member
            content: Message text
            message_type: text, image or video
            image_url: Image URL for image messages
            video_url: Video URL for video messages

        Returns:
            Message with sender loaded

        Raises:
            HTTPException: 404 if the room does not exist, 403 if the sender is not a member
        """
        await self.chat_service.verify_membership(chat_room_id, sender_id)

        message = await self.message_repo.create(
            chat_room_id=chat_room_id,
            sender_id=sender_id,
            content=content,
            message_type=message_type,
            image_url=image_url,
            video_url=video_url,
        )
        await self.db.commit()

        message = await self.message_repo.get_with_sender(message.id)

        try:
            payload = MessageResponse.model_validate(message).model_dump(mode="json", by_alias=True)
            await self.ws_manager.broadcast_new_message(chat_room_id, payload)
        except Exception:
            logger.exception("Failed to broadcast message %s", message.id)

        return message

    async def get_messages(
        self,
        chat_room_id: str,
        user_id: str,
        limit: Optional[int] = None
    ) -> List[Message]:
        """
        Get the most recent messages of a room, oldest first.

        Raises:
            HTTPException: 404 if the room does not exist, 403 if the caller is not a member
        """
        await self.chat_service.verify_membership(chat_room_id, user_id)
        return await self.message_repo.get_room_messages(
            chat_room_id,
            limit=limit or settings.message_default_limit
        )

    async def send_global_message(self, sender_id: str, content: str) -> GlobalMessage:
        """
        Post to the global chat and broadcast to every connected client.

        Args:
            sender_id: Sender
            content: Message text

        Returns:
            Global message with sender loaded
        """
        message = await self.global_repo.create(sender_id=sender_id, content=content)
        await self.db.commit()

        message = await self.global_repo.get_with_sender(message.id)

        try:
            payload = GlobalMessageResponse.model_validate(message).model_dump(mode="json", by_alias=True)
            await self.ws_manager.broadcast_global_message(payload)
        except Exception:
            logger.exception("Failed to broadcast global message %s", message.id)

        return message

    async def get_global_messages(self, limit: Optional[int] = None) -> List[GlobalMessage]:
        """Get the most recent global messages, oldest first."""
        return await self.global_repo.get_recent(
            limit=limit or settings.global_message_default_limit
        )
