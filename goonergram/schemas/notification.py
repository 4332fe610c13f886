"""
Notification schemas for API request/response validation.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict

from goonergram.models.notification import NotificationType
from goonergram.schemas.user import UserBasicInfo


class NotificationPostInfo(BaseModel):
    """Post summary attached to like/comment notifications."""

    id: str
    content: Optional[str] = None
    image_url: Optional[str] = Field(None, serialization_alias="imageUrl")
    video_url: Optional[str] = Field(None, serialization_alias="videoUrl")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class NotificationResponse(BaseModel):
    """Schema for notification response."""

    id: str
    user_id: str = Field(serialization_alias="userId")
    from_user_id: Optional[str] = Field(None, serialization_alias="fromUserId")
    type: NotificationType
    post_id: Optional[str] = Field(None, serialization_alias="postId")
    message: str
    is_read: bool = Field(serialization_alias="isRead")
    created_at: datetime = Field(serialization_alias="createdAt")

    from_user: Optional[UserBasicInfo] = Field(None, serialization_alias="fromUser")
    post: Optional[NotificationPostInfo] = None

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class UnreadCountResponse(BaseModel):
    """Unread notification count."""

    count: int


class MarkAllReadResponse(BaseModel):
    """Result of marking every notification read."""

    success: bool = True
    updated_count: int = Field(serialization_alias="updatedCount")

    model_config = ConfigDict(populate_by_name=True)
