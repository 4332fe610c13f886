"""
Notification repository for database operations.
"""
from typing import List, Optional

from sqlalchemy import select, update, desc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from goonergram.models.notification import Notification
from goonergram.repositories.base import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    """Repository for notifications."""

    def __init__(self, db: AsyncSession):
        """Initialize notification repository."""
        super().__init__(Notification, db)

    async def get_with_relations(self, notification_id: str) -> Optional[Notification]:
        """Get a notification with actor and post loaded."""
        result = await self.db.execute(
            select(Notification)
            .where(Notification.id == notification_id)
            .options(
                selectinload(Notification.from_user),
                selectinload(Notification.post)
            )
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_for_user(self, user_id: str, limit: int = 50) -> List[Notification]:
        """
        Get a user's notifications, newest first.

        The actor and post are optional and loaded when present.

        Args:
            user_id: Recipient ID
            limit: Maximum notifications

        Returns:
            List of notifications
        """
        result = await self.db.execute(
            select(Notification)
            .where(Notification.user_id == user_id)
            .options(
                selectinload(Notification.from_user),
                selectinload(Notification.post)
            )
            .order_by(desc(Notification.created_at))
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def get_owned(self, notification_id: str, user_id: str) -> Optional[Notification]:
        """
        Get a notification only if it is addressed to the user.

        Args:
            notification_id: Notification ID
            user_id: Expected recipient

        Returns:
            Notification or None
        """
        result = await self.db.execute(
            select(Notification).where(
                Notification.id == notification_id,
                Notification.user_id == user_id
            )
        )
        return result.scalar_one_or_none()

    async def mark_all_read(self, user_id: str) -> int:
        """
        Mark every unread notification of a user as read.

        Returns:
            Number of notifications updated
        """
        result = await self.db.execute(
            update(Notification)
            .where(Notification.user_id == user_id, Notification.is_read.is_(False))
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
        await self.db.flush()
        return result.rowcount
