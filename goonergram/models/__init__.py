"""
SQLAlchemy models for the GoonerGram application.

All models must be imported here for Alembic auto-generation to work.
"""

# Import Base first
from goonergram.models.base import Base, TimestampMixin, CreatedAtMixin, UUIDMixin

# Import all models (order matters for relationships)
from goonergram.models.user import User
from goonergram.models.post import Post, PostLike, PostComment
from goonergram.models.story import Story
from goonergram.models.partner import GooningPartner, PartnerStatus
from goonergram.models.chat import ChatRoom, ChatRoomMember
from goonergram.models.message import Message, GlobalMessage, MessageType
from goonergram.models.notification import Notification, NotificationType

# Export all models and enums
__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "CreatedAtMixin",
    "UUIDMixin",
    # User
    "User",
    # Posts
    "Post",
    "PostLike",
    "PostComment",
    # Stories
    "Story",
    # Partners
    "GooningPartner",
    "PartnerStatus",
    # Chats
    "ChatRoom",
    "ChatRoomMember",
    # Messages
    "Message",
    "GlobalMessage",
    "MessageType",
    # Notifications
    "Notification",
    "NotificationType",
]
