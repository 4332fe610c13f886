"""
Tests for database models.

Covers uniqueness constraints, defaults, and ON DELETE CASCADE behaviour.
"""
import pytest
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError

from goonergram.models import (
    User,
    Post,
    PostLike,
    PostComment,
    GooningPartner,
    PartnerStatus,
    ChatRoom,
    Message,
    Notification,
    NotificationType,
)
from goonergram.models.partner import make_pair_key


async def _count(db_session, model) -> int:
    result = await db_session.execute(select(func.count()).select_from(model))
    return result.scalar()


@pytest.mark.asyncio
class TestConstraints:
    """Uniqueness guarantees enforced by the schema."""

    async def test_username_unique(self, db_session, test_user):
        db_session.add(User(id="google:9999", username=test_user.username))

        with pytest.raises(IntegrityError):
            await db_session.commit()

    async def test_one_like_per_user_and_post(self, db_session, test_post, test_user_2):
        db_session.add(PostLike(post_id=test_post.id, user_id=test_user_2.id))
        await db_session.commit()

        db_session.add(PostLike(post_id=test_post.id, user_id=test_user_2.id))
        with pytest.raises(IntegrityError):
            await db_session.commit()

    async def test_one_partner_row_per_pair(self, db_session, test_user, test_user_2):
        db_session.add(GooningPartner(
            user_id=test_user.id,
            partner_id=test_user_2.id,
            pair_key=make_pair_key(test_user.id, test_user_2.id),
        ))
        await db_session.commit()

        db_session.add(GooningPartner(
            user_id=test_user_2.id,
            partner_id=test_user.id,
            pair_key=make_pair_key(test_user_2.id, test_user.id),
        ))
        with pytest.raises(IntegrityError):
            await db_session.commit()

    async def test_one_private_room_per_pair(self, db_session, test_user, test_user_2, test_chat):
        db_session.add(ChatRoom(
            is_group=False,
            created_by=test_user_2.id,
            private_key=make_pair_key(test_user_2.id, test_user.id),
        ))

        with pytest.raises(IntegrityError):
            await db_session.commit()

    async def test_group_rooms_have_no_private_key(self, db_session, test_user):
        db_session.add_all([
            ChatRoom(name="North Bank", is_group=True, created_by=test_user.id),
            ChatRoom(name="Clock End", is_group=True, created_by=test_user.id),
        ])
        await db_session.commit()

        assert await _count(db_session, ChatRoom) == 2


@pytest.mark.asyncio
class TestDefaults:
    """Column defaults."""

    async def test_user_defaults(self, test_user):
        assert test_user.username_change_count == 0
        assert test_user.username_changed_at is None
        assert test_user.created_at is not None
        assert test_user.display_name == "Bukayo Gooner"

    async def test_post_counters_start_at_zero(self, test_post):
        assert test_post.likes_count == 0
        assert test_post.comments_count == 0

    async def test_partner_defaults_to_pending(self, db_session, test_user, test_user_2):
        relationship = GooningPartner(
            user_id=test_user.id,
            partner_id=test_user_2.id,
            pair_key=make_pair_key(test_user.id, test_user_2.id),
        )
        db_session.add(relationship)
        await db_session.commit()

        assert relationship.status == PartnerStatus.PENDING

    async def test_notification_unread_by_default(self, db_session, test_user):
        notification = Notification(
            user_id=test_user.id,
            type=NotificationType.FOLLOW,
            message="wants to be your gooning partner",
        )
        db_session.add(notification)
        await db_session.commit()

        assert notification.is_read is False


@pytest.mark.asyncio
class TestCascades:
    """Rows owned by a deleted parent go with it."""

    async def test_deleting_post_removes_likes_comments_notifications(
        self, db_session, test_post, test_user, test_user_2
    ):
        db_session.add_all([
            PostLike(post_id=test_post.id, user_id=test_user_2.id),
            PostComment(post_id=test_post.id, user_id=test_user_2.id, content="Wonderkid"),
            Notification(
                user_id=test_user.id,
                from_user_id=test_user_2.id,
                post_id=test_post.id,
                type=NotificationType.LIKE,
                message="liked your post",
            ),
        ])
        await db_session.commit()

        await db_session.delete(test_post)
        await db_session.commit()

        assert await _count(db_session, PostLike) == 0
        assert await _count(db_session, PostComment) == 0
        assert await _count(db_session, Notification) == 0

    async def test_deleting_room_removes_messages(self, db_session, test_user, test_chat):
        db_session.add(Message(chat_room_id=test_chat.id, sender_id=test_user.id, content="Hi"))
        await db_session.commit()

        await db_session.delete(test_chat)
        await db_session.commit()

        assert await _count(db_session, Message) == 0

    async def test_deleting_user_removes_posts(self, db_session, test_user, test_post):
        await db_session.delete(test_user)
        await db_session.commit()

        assert await _count(db_session, Post) == 0
