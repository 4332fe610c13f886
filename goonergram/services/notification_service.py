"""
Notification service for business logic.
Creates notifications as side effects of other actions, lists them, tracks
read state, and pushes them to connected clients.
"""
from typing import List, Optional
import logging

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from goonergram.config import settings
from goonergram.core.cache import (
    cache_unread_notification_count,
    get_cached_unread_notification_count,
    invalidate_unread_notification_count
)
from goonergram.core.websocket import connection_manager
from goonergram.models.notification import Notification, NotificationType
from goonergram.repositories.notification_repo import NotificationRepository
from goonergram.schemas.notification import NotificationResponse

logger = logging.getLogger(__name__)


class NotificationService:
    """Service for notification-related business logic."""

    def __init__(self, db: AsyncSession):
        """Initialize notification service."""
        self.db = db
        self.notification_repo = NotificationRepository(db)
        self.ws_manager = connection_manager

    async def create_notification(
        self,
        user_id: str,
        type: NotificationType,
        message: str,
        from_user_id: Optional[str] = None,
        post_id: Optional[str] = None
    ) -> Notification:
        """
        Create a notification inside the caller's transaction.

        Does not commit. Call `publish` after the caller commits to push it
        to the recipient.

        Args:
            user_id: Recipient
            type: Notification type
            message: Human-readable text (e.g. "liked your post")
            from_user_id: Actor, if any
            post_id: Related post, if any

        Returns:
            Created notification
        """
        return await self.notification_repo.create(
            user_id=user_id,
            type=type,
            message=message,
            from_user_id=from_user_id,
            post_id=post_id,
        )

    async def publish(self, notification_id: str) -> None:
        """
        Push a committed notification and the new unread count to the recipient.

        Push failures are logged and never propagate; clients can still poll.
        """
        try:
            notification = await self.notification_repo.get_with_relations(notification_id)
            if notification is None:
                return

            await invalidate_unread_notification_count(notification.user_id)

            payload = NotificationResponse.model_validate(notification).model_dump(
                mode="json", by_alias=True
            )
            await self.ws_manager.send_notification(notification.user_id, payload)

            unread = await self.get_unread_notification_count(notification.user_id)
            await self.ws_manager.send_unread_count(notification.user_id, unread)
        except Exception:
            logger.exception("Failed to publish notification %s", notification_id)

    async def get_notifications(
        self,
        user_id: str,
        limit: Optional[int] = None
    ) -> List[Notification]:
        """
        Get a user's notifications, newest first, with actor and post.

        Args:
            user_id: Recipient
            limit: Maximum notifications (defaults to settings)

        Returns:
            List of notifications
        """
        return await self.notification_repo.get_for_user(
            user_id,
            limit=limit or settings.notification_default_limit
        )

    async def mark_notification_as_read(self, notification_id: str, user_id: str) -> Notification:
        """
        Mark one of the user's notifications as read.

        Args:
            notification_id: Notification ID
            user_id: Caller; must be the recipient

        Returns:
            Updated notification

        Raises:
            HTTPException: 404 if the notification does not exist or belongs to someone else
        """
        notification = await self.notification_repo.get_owned(notification_id, user_id)

        if not notification:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Notification not found"
            )

        if not notification.is_read:
            notification.is_read = True
            await self.db.commit()
            await invalidate_unread_notification_count(user_id)
            await self._push_unread_count(user_id)

        return await self.notification_repo.get_with_relations(notification_id)

    async def mark_all_as_read(self, user_id: str) -> int:
        """
        Mark all of a user's notifications as read.

        Returns:
            Number of notifications that changed
        """
        updated = await self.notification_repo.mark_all_read(user_id)
        await self.db.commit()

        await invalidate_unread_notification_count(user_id)
        if updated:
            await self._push_unread_count(user_id)

        return updated

    async def get_unread_notification_count(self, user_id: str) -> int:
        """
        Count a user's unread notifications (cached briefly in Redis).

        Args:
            user_id: Recipient

        Returns:
            Unread count
        """
        cached = await get_cached_unread_notification_count(user_id)
        if cached is not None:
            return cached

        count = await self.notification_repo.count(user_id=user_id, is_read=False)
        await cache_unread_notification_count(user_id, count)
        return count

    async def _push_unread_count(self, user_id: str) -> None:
        try:
            count = await self.get_unread_notification_count(user_id)
            await self.ws_manager.send_unread_count(user_id, count)
        except Exception:
            logger.exception("Failed to push unread count to %s", user_id)
