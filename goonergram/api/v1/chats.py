"""
Chat API routes.
Provides endpoints for listing rooms, opening private and group chats,
and reading/sending room messages.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from goonergram.config import settings
from goonergram.core.database import get_db
from goonergram.core.rate_limit import limiter
from goonergram.dependencies import get_current_user, get_limit
from goonergram.schemas.chat import (
    ChatRoomResponse,
    PrivateChatCreate,
    GroupChatCreate,
    MessageCreate,
    MessageResponse
)
from goonergram.services.chat_service import ChatService
from goonergram.services.message_service import MessageService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=List[ChatRoomResponse],
    summary="List chats",
    description="Rooms the caller belongs to, most recently active first."
)
async def get_chat_rooms(
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    try:
        return await ChatService(db).get_chat_rooms(current_user["id"])
    except Exception:
        logger.exception("Failed to fetch chats")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch chats"
        )


@router.post(
    "/private",
    response_model=ChatRoomResponse,
    summary="Open a private chat",
    description="Return the private chat with a user, creating it on first use."
)
async def get_or_create_private_chat(
    chat_data: PrivateChatCreate,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    - **partnerId**: The other participant
    """
    try:
        chat_room = await ChatService(db).get_or_create_private_chat(
            current_user["id"], chat_data.partner_id
        )
        return ChatService.serialize_room(chat_room, current_user["id"])
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to open private chat")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create chat"
        )


@router.post(
    "/group",
    response_model=ChatRoomResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a group chat"
)
async def create_group_chat(
    chat_data: GroupChatCreate,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    - **name**: Group name
    - **memberIds**: Other members; the caller is always added
    """
    try:
        chat_room = await ChatService(db).create_group_chat(
            current_user["id"], chat_data.name, chat_data.member_ids
        )
        return ChatService.serialize_room(chat_room, current_user["id"])
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to create group chat")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create chat"
        )


@router.get(
    "/{chat_id}/messages",
    response_model=List[MessageResponse],
    summary="Get chat messages",
    description="Most recent messages in chronological order. Members only."
)
async def get_messages(
    chat_id: str,
    limit: Optional[int] = Depends(get_limit),
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    try:
        return await MessageService(db).get_messages(chat_id, current_user["id"], limit=limit)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to fetch messages for chat %s", chat_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch messages"
        )


@router.post(
    "/{chat_id}/messages",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Send a message",
    description="Send a message to a chat. The caller must be a member."
)
@limiter.limit(settings.rate_limit_messages)
async def send_message(
    request: Request,
    chat_id: str,
    message_data: MessageCreate,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Send a new message to a chat room.

    - **content**: Message text
    - **messageType**: text, image or video
    - **imageUrl** / **videoUrl**: Media URL for media messages
    """
    try:
        return await MessageService(db).send_message(
            chat_room_id=chat_id,
            sender_id=current_user["id"],
            content=message_data.content,
            message_type=message_data.message_type,
            image_url=message_data.image_url,
            video_url=message_data.video_url,
        )
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to send message to chat %s", chat_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to send message"
        )
