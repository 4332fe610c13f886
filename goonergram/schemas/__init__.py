"""
Pydantic schema exports.
Provides request/response models for API endpoints.
"""
from goonergram.schemas.user import (
    UserBasicInfo,
    UserResponse,
    ProfileUpdate,
    UsernameCheckResponse
)
from goonergram.schemas.post import (
    PostCreate,
    PostResponse,
    LikeResponse,
    CommentCreate,
    CommentResponse
)
from goonergram.schemas.story import StoryCreate, StoryResponse
from goonergram.schemas.partner import (
    PartnerAction,
    PartnerResponse,
    PartnerRequestResponse,
    PartnerActionResponse
)
from goonergram.schemas.chat import (
    PrivateChatCreate,
    GroupChatCreate,
    MessageCreate,
    GlobalMessageCreate,
    MessageResponse,
    GlobalMessageResponse,
    ChatRoomResponse
)
from goonergram.schemas.notification import (
    NotificationResponse,
    UnreadCountResponse,
    MarkAllReadResponse
)

__all__ = [
    # User schemas
    "UserBasicInfo",
    "UserResponse",
    "ProfileUpdate",
    "UsernameCheckResponse",
    # Post schemas
    "PostCreate",
    "PostResponse",
    "LikeResponse",
    "CommentCreate",
    "CommentResponse",
    # Story schemas
    "StoryCreate",
    "StoryResponse",
    # Partner schemas
    "PartnerAction",
    "PartnerResponse",
    "PartnerRequestResponse",
    "PartnerActionResponse",
    # Chat schemas
    "PrivateChatCreate",
    "GroupChatCreate",
    "MessageCreate",
    "GlobalMessageCreate",
    "MessageResponse",
    "GlobalMessageResponse",
    "ChatRoomResponse",
    # Notification schemas
    "NotificationResponse",
    "UnreadCountResponse",
    "MarkAllReadResponse",
]
