"""
Chat room service for business logic.
Handles private chat lookup-or-create, group chats, and room listings.
"""
from typing import List, Dict, Any, Optional
import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from goonergram.models.chat import ChatRoom
from goonergram.models.message import Message
from goonergram.models.partner import make_pair_key
from goonergram.repositories.chat_repo import ChatRoomRepository, ChatRoomMemberRepository
from goonergram.repositories.user_repo import UserRepository
from goonergram.schemas.chat import MessageResponse
from goonergram.schemas.user import UserBasicInfo
from goonergram.utils.datetime_utils import ensure_utc

logger = logging.getLogger(__name__)


class ChatService:
    """Service for chat room business logic."""

    def __init__(self, db: AsyncSession):
        """Initialize chat service."""
        self.db = db
        self.chat_repo = ChatRoomRepository(db)
        self.member_repo = ChatRoomMemberRepository(db)
        self.user_repo = UserRepository(db)

    async def verify_membership(self, chat_room_id: str, user_id: str) -> None:
        """
        Ensure the user belongs to the room.

        Raises:
            HTTPException: 404 if the room does not exist, 403 if the user is not a member
        """
        if not await self.chat_repo.exists(chat_room_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Chat not found"
            )

        if not await self.member_repo.is_member(chat_room_id, user_id):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You are not a member of this chat"
            )

    async def get_or_create_private_chat(self, user_id: str, partner_id: str) -> ChatRoom:
        """
        Return the private room for two users, creating it if needed.

        The pair is unordered: (A, B) and (B, A) resolve to the same room.

        Args:
            user_id: Caller
            partner_id: Other user

        Returns:
            Chat room with members loaded

        Raises:
            HTTPException: 400 for a chat with yourself, 404 if the partner does not exist
        """
        if user_id == partner_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cannot start a chat with yourself"
            )

        if not await self.user_repo.exists(partner_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found"
            )

        private_key = make_pair_key(user_id, partner_id)
        existing = await self.chat_repo.find_private_room(private_key)
        if existing:
            return existing

        try:
            chat_room = await self.chat_repo.create_with_members(
                creator_id=user_id,
                member_ids=[partner_id],
                is_group=False,
                private_key=private_key,
            )
            await self.db.commit()
        except IntegrityError:
            # The other user opened the same chat concurrently
            await self.db.rollback()
            return await self.chat_repo.find_private_room(private_key)

        logger.info("Created private chat %s for %s", chat_room.id, private_key)
        return await self.chat_repo.get_with_members(chat_room.id)

    async def create_group_chat(self, user_id: str, name: str, member_ids: List[str]) -> ChatRoom:
        """
        Create a named group chat with the caller as a member.

        Raises:
            HTTPException: 400 if the name is blank, 404 if a member does not exist
        """
        name = (name or "").strip()
        if not name:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Group chats must have a name"
            )

        others = [m for m in dict.fromkeys(member_ids) if m != user_id]
        found = await self.user_repo.get_many(others)
        if len(found) != len(others):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found"
            )

        chat_room = await self.chat_repo.create_with_members(
            creator_id=user_id,
            member_ids=others,
            is_group=True,
            name=name,
        )
        await self.db.commit()

        logger.info("User %s created group chat %s", user_id, chat_room.id)
        return await self.chat_repo.get_with_members(chat_room.id)

    async def get_chat_rooms(self, user_id: str) -> List[Dict[str, Any]]:
        """
        List the caller's rooms, most recently active first.

        Each entry carries the member list, the other participant for private
        rooms, and the newest message.

        Args:
            user_id: Caller

        Returns:
            Serialized chat rooms
        """
        rooms = await self.chat_repo.get_user_rooms(user_id)

        entries = []
        for room in rooms:
            last_message = await self.chat_repo.get_last_message(room.id)
            activity = ensure_utc(last_message.created_at if last_message else room.created_at)
            entries.append((activity, self.serialize_room(room, user_id, last_message)))

        entries.sort(key=lambda entry: entry[0], reverse=True)
        return [summary for _, summary in entries]

    @staticmethod
    def serialize_room(
        room: ChatRoom,
        user_id: str,
        last_message: Optional[Message] = None
    ) -> Dict[str, Any]:
        """
        Build the room summary seen by `user_id`.

        For private rooms `other_user` is the participant who is not the caller.
        """
        members = [m.user for m in room.members if m.user is not None]

        other_user = None
        if not room.is_group:
            other = next((u for u in members if u.id != user_id), None)
            if other is not None:
                other_user = UserBasicInfo.model_validate(other)

        return {
            "id": room.id,
            "name": room.name,
            "is_group": room.is_group,
            "created_by": room.created_by,
            "created_at": room.created_at,
            "members": [UserBasicInfo.model_validate(u) for u in members],
            "other_user": other_user,
            "last_message": MessageResponse.model_validate(last_message) if last_message else None,
        }
