"""
Chat room and message schemas for API request/response validation.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator

from goonergram.models.message import MessageType
from goonergram.schemas.user import UserBasicInfo


# ============================================================================
# Request Schemas
# ============================================================================

class PrivateChatCreate(BaseModel):
    """Body for opening (or re-opening) a private chat."""

    partner_id: str = Field(..., alias="partnerId", min_length=1)

    model_config = ConfigDict(populate_by_name=True)


class GroupChatCreate(BaseModel):
    """Body for creating a group chat."""

    name: str = Field(..., min_length=1, max_length=255)
    member_ids: List[str] = Field(default_factory=list, alias="memberIds")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Group chats must have a name")
        return v


class MessageCreate(BaseModel):
    """Schema for sending a chat room message."""

    content: str = Field(..., max_length=10000)
    message_type: MessageType = Field(default=MessageType.TEXT, alias="messageType")
    image_url: Optional[str] = Field(None, alias="imageUrl", max_length=500)
    video_url: Optional[str] = Field(None, alias="videoUrl", max_length=500)

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="after")
    def validate_content(self) -> "MessageCreate":
        """Text messages need text; media messages need their URL."""
        if self.message_type == MessageType.TEXT and not self.content.strip():
            raise ValueError("Text messages must have content")
        if self.message_type == MessageType.IMAGE and not self.image_url:
            raise ValueError("Image messages must have an imageUrl")
        if self.message_type == MessageType.VIDEO and not self.video_url:
            raise ValueError("Video messages must have a videoUrl")
        return self


class GlobalMessageCreate(BaseModel):
    """Schema for sending a global chat message."""

    content: str = Field(..., min_length=1, max_length=2000)

    @field_validator("content")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Content cannot be empty or whitespace only")
        return v


# ============================================================================
# Response Schemas
# ============================================================================

class MessageResponse(BaseModel):
    """Schema for chat room message response."""

    id: str
    chat_room_id: str = Field(serialization_alias="chatRoomId")
    sender_id: str = Field(serialization_alias="senderId")
    content: str
    message_type: MessageType = Field(serialization_alias="messageType")
    image_url: Optional[str] = Field(None, serialization_alias="imageUrl")
    video_url: Optional[str] = Field(None, serialization_alias="videoUrl")
    created_at: datetime = Field(serialization_alias="createdAt")
    sender: Optional[UserBasicInfo] = None

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class GlobalMessageResponse(BaseModel):
    """Schema for global chat message response."""

    id: str
    sender_id: str = Field(serialization_alias="senderId")
    content: str
    created_at: datetime = Field(serialization_alias="createdAt")
    sender: Optional[UserBasicInfo] = None

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class ChatRoomResponse(BaseModel):
    """
    Chat room as listed for a member.

    other_user is set for private rooms; last_message is the newest message.
    """

    id: str
    name: Optional[str] = None
    is_group: bool = Field(serialization_alias="isGroup")
    created_by: Optional[str] = Field(None, serialization_alias="createdBy")
    created_at: datetime = Field(serialization_alias="createdAt")
    members: List[UserBasicInfo] = Field(default_factory=list)
    other_user: Optional[UserBasicInfo] = Field(None, serialization_alias="otherUser")
    last_message: Optional[MessageResponse] = Field(None, serialization_alias="lastMessage")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
