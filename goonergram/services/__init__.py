"""
Service layer exports.
Provides business logic for the application.
"""
from goonergram.services.user_service import UserService
from goonergram.services.post_service import PostService
from goonergram.services.story_service import StoryService
from goonergram.services.partner_service import PartnerService
from goonergram.services.chat_service import ChatService
from goonergram.services.message_service import MessageService
from goonergram.services.notification_service import NotificationService

__all__ = [
    "UserService",
    "PostService",
    "StoryService",
    "PartnerService",
    "ChatService",
    "MessageService",
    "NotificationService",
]
