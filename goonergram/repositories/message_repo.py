"""
Message repository for database operations.
Handles chat room messages and the global chat.
"""
from typing import List, Optional

from sqlalchemy import select, desc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from goonergram.models.message import Message, GlobalMessage
from goonergram.repositories.base import BaseRepository


class MessageRepository(BaseRepository[Message]):
    """Repository for chat room messages."""

    def __init__(self, db: AsyncSession):
        super().__init__(Message, db)

    async def get_with_sender(self, message_id: str) -> Optional[Message]:
        """Get a message with its sender loaded."""
        result = await self.db.execute(
            select(Message)
            .where(Message.id == message_id)
            .options(selectinload(Message.sender))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_room_messages(self, chat_room_id: str, limit: int = 50) -> List[Message]:
        """
        Get the most recent messages in a room, in chronological order.

        Fetches the newest `limit` rows descending by creation time and
        reverses them, so the last element is the newest message.

        Args:
            chat_room_id: Chat room ID
            limit: Maximum messages to return

        Returns:
            Messages, oldest first
        """
        result = await self.db.execute(
            select(Message)
            .where(Message.chat_room_id == chat_room_id)
            .options(selectinload(Message.sender))
            .order_by(desc(Message.created_at))
            .limit(limit)
        )
        messages = list(result.scalars().all())
        messages.reverse()
        return messages


class GlobalMessageRepository(BaseRepository[GlobalMessage]):
    """Repository for global chat messages."""

    def __init__(self, db: AsyncSession):
        super().__init__(GlobalMessage, db)

    async def get_with_sender(self, message_id: str) -> Optional[GlobalMessage]:
        """Get a global message with its sender loaded."""
        result = await self.db.execute(
            select(GlobalMessage)
            .where(GlobalMessage.id == message_id)
            .options(selectinload(GlobalMessage.sender))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_recent(self, limit: int = 100) -> List[GlobalMessage]:
        """
        Get the most recent global messages, in chronological order.

        Args:
            limit: Maximum messages to return

        Returns:
            Messages, oldest first
        """
        result = await self.db.execute(
            select(GlobalMessage)
            .options(selectinload(GlobalMessage.sender))
            .order_by(desc(GlobalMessage.created_at))
            .limit(limit)
        )
        messages = list(result.scalars().all())
        messages.reverse()
        return messages
