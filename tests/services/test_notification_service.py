"""
Unit tests for NotificationService.
"""
import pytest
from fastapi import HTTPException

from goonergram.models.notification import NotificationType
from goonergram.services.notification_service import NotificationService
from goonergram.services.post_service import PostService


@pytest.mark.asyncio
class TestNotificationService:
    """Test cases for NotificationService."""

    async def test_like_then_read_scenario(self, db_session, test_user, test_user_2, test_post):
        """A like produces one unread notification which the author then reads."""
        service = NotificationService(db_session)

        await PostService(db_session).like_post(test_post.id, test_user_2.id)

        notifications = await service.get_notifications(test_user.id)
        assert len(notifications) == 1
        notification = notifications[0]
        assert notification.type == NotificationType.LIKE
        assert notification.from_user.username == "odegaard8"
        assert notification.post.id == test_post.id
        assert await service.get_unread_notification_count(test_user.id) == 1

        updated = await service.mark_notification_as_read(notification.id, test_user.id)

        assert updated.is_read is True
        assert await service.get_unread_notification_count(test_user.id) == 0

    async def test_cannot_mark_someone_elses_notification(self, db_session, test_user, test_user_2, test_post):
        service = NotificationService(db_session)
        await PostService(db_session).like_post(test_post.id, test_user_2.id)
        notification = (await service.get_notifications(test_user.id))[0]

        with pytest.raises(HTTPException) as exc_info:
            await service.mark_notification_as_read(notification.id, test_user_2.id)

        assert exc_info.value.status_code == 404
        assert await service.get_unread_notification_count(test_user.id) == 1

    async def test_mark_missing_notification_is_404(self, db_session, test_user):
        with pytest.raises(HTTPException) as exc_info:
            await NotificationService(db_session).mark_notification_as_read("missing", test_user.id)

        assert exc_info.value.status_code == 404

    async def test_mark_all_as_read(self, db_session, test_user, test_user_2, test_user_3, mock_websocket_manager):
        service = NotificationService(db_session)
        for actor in (test_user_2, test_user_3):
            await service.create_notification(
                user_id=test_user.id,
                type=NotificationType.FOLLOW,
                message="wants to be your gooning partner",
                from_user_id=actor.id,
            )
        await db_session.commit()

        updated = await service.mark_all_as_read(test_user.id)

        assert updated == 2
        assert await service.get_unread_notification_count(test_user.id) == 0
        assert all(n.is_read for n in await service.get_notifications(test_user.id))
        mock_websocket_manager.send_unread_count.assert_awaited_with(test_user.id, 0)

    async def test_notifications_newest_first_and_limited(self, db_session, test_user, test_user_2):
        service = NotificationService(db_session)
        for i in range(3):
            await service.create_notification(
                user_id=test_user.id,
                type=NotificationType.COMMENT,
                message=f"comment {i}",
                from_user_id=test_user_2.id,
            )
        await db_session.commit()

        notifications = await service.get_notifications(test_user.id, limit=2)

        assert [n.message for n in notifications] == ["comment 2", "comment 1"]

    async def test_notification_without_actor_or_post(self, db_session, test_user):
        service = NotificationService(db_session)
        notification = await service.create_notification(
            user_id=test_user.id,
            type=NotificationType.UNFOLLOW,
            message="Your partnership ended",
        )
        await db_session.commit()
        await service.publish(notification.id)

        listed = await service.get_notifications(test_user.id)

        assert listed[0].from_user is None
        assert listed[0].post is None
