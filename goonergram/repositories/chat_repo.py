"""
Chat room repository for database operations.
Handles private/group rooms and their memberships.
"""
from typing import List, Optional

from sqlalchemy import select, and_, func, desc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from goonergram.models.chat import ChatRoom, ChatRoomMember
from goonergram.models.message import Message
from goonergram.repositories.base import BaseRepository


class ChatRoomRepository(BaseRepository[ChatRoom]):
    """Repository for chat room database operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(ChatRoom, db)

    async def get_with_members(self, chat_room_id: str) -> Optional[ChatRoom]:
        """
        Get chat room with members and their users loaded.

        Args:
            chat_room_id: Chat room ID

        Returns:
            ChatRoom or None
        """
        result = await self.db.execute(
            select(ChatRoom)
            .where(ChatRoom.id == chat_room_id)
            .options(selectinload(ChatRoom.members).selectinload(ChatRoomMember.user))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def find_private_room(self, private_key: str) -> Optional[ChatRoom]:
        """
        Find the private room for a member pair.

        Args:
            private_key: Sorted pair key of the two members

        Returns:
            ChatRoom or None
        """
        result = await self.db.execute(
            select(ChatRoom)
            .where(
                and_(
                    ChatRoom.is_group.is_(False),
                    ChatRoom.private_key == private_key
                )
            )
            .options(selectinload(ChatRoom.members).selectinload(ChatRoomMember.user))
        )
        return result.scalar_one_or_none()

    async def create_with_members(
        self,
        creator_id: str,
        member_ids: List[str],
        is_group: bool,
        name: Optional[str] = None,
        private_key: Optional[str] = None
    ) -> ChatRoom:
        """
        Create a chat room and its memberships in one flush.

        Args:
            creator_id: Creator user ID (always added as a member)
            member_ids: Other member user IDs
            is_group: Group or private room
            name: Group name
            private_key: Pair key for private rooms

        Returns:
            Created room with members loaded
        """
        chat_room = ChatRoom(
            name=name,
            is_group=is_group,
            created_by=creator_id,
            private_key=private_key
        )
        self.db.add(chat_room)
        await self.db.flush()

        seen = set()
        for member_id in [creator_id, *member_ids]:
            if member_id in seen:
                continue
            seen.add(member_id)
            self.db.add(ChatRoomMember(chat_room_id=chat_room.id, user_id=member_id))

        await self.db.flush()
        return await self.get_with_members(chat_room.id)

    async def get_user_rooms(self, user_id: str) -> List[ChatRoom]:
        """
        Get all rooms the user belongs to, with members loaded.

        Args:
            user_id: User ID

        Returns:
            List of chat rooms
        """
        member_subquery = (
            select(ChatRoomMember.chat_room_id)
            .where(ChatRoomMember.user_id == user_id)
        )

        result = await self.db.execute(
            select(ChatRoom)
            .where(ChatRoom.id.in_(member_subquery))
            .options(selectinload(ChatRoom.members).selectinload(ChatRoomMember.user))
            .order_by(desc(ChatRoom.created_at))
        )
        return list(result.scalars().all())

    async def get_last_message(self, chat_room_id: str) -> Optional[Message]:
        """
        Get the most recent message in a room.

        Args:
            chat_room_id: Chat room ID

        Returns:
            Latest message with sender, or None
        """
        result = await self.db.execute(
            select(Message)
            .where(Message.chat_room_id == chat_room_id)
            .options(selectinload(Message.sender))
            .order_by(desc(Message.created_at))
            .limit(1)
        )
        return result.scalar_one_or_none()


class ChatRoomMemberRepository:
    """Repository for chat room member operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def is_member(self, chat_room_id: str, user_id: str) -> bool:
        """
        Check if user is a member of a chat room.

        Args:
            chat_room_id: Chat room ID
            user_id: User ID

        Returns:
            True if member, False otherwise
        """
        result = await self.db.execute(
            select(func.count())
            .select_from(ChatRoomMember)
            .where(
                and_(
                    ChatRoomMember.chat_room_id == chat_room_id,
                    ChatRoomMember.user_id == user_id
                )
            )
        )
        return result.scalar() > 0
