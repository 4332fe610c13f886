"""
Repository layer exports.
Provides database access layer for the application.
"""
from goonergram.repositories.base import BaseRepository
from goonergram.repositories.user_repo import UserRepository
from goonergram.repositories.post_repo import (
    PostRepository,
    PostLikeRepository,
    PostCommentRepository
)
from goonergram.repositories.story_repo import StoryRepository
from goonergram.repositories.partner_repo import PartnerRepository
from goonergram.repositories.chat_repo import (
    ChatRoomRepository,
    ChatRoomMemberRepository
)
from goonergram.repositories.message_repo import (
    MessageRepository,
    GlobalMessageRepository
)
from goonergram.repositories.notification_repo import NotificationRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "PostRepository",
    "PostLikeRepository",
    "PostCommentRepository",
    "StoryRepository",
    "PartnerRepository",
    "ChatRoomRepository",
    "ChatRoomMemberRepository",
    "MessageRepository",
    "GlobalMessageRepository",
    "NotificationRepository",
]
