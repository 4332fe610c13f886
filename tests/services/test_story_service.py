"""
Unit tests for StoryService.
"""
import pytest
from datetime import timedelta
from fastapi import HTTPException

from goonergram.models.story import Story
from goonergram.services.story_service import StoryService
from goonergram.utils.datetime_utils import utc_now, ensure_utc


@pytest.mark.asyncio
class TestStoryService:
    """Test cases for StoryService."""

    async def test_story_expires_after_24_hours(self, db_session, test_user):
        story = await StoryService(db_session).create_story(test_user.id, content="Matchday")

        lifetime = ensure_utc(story.expires_at) - ensure_utc(story.created_at)
        assert lifetime == timedelta(hours=24)
        assert story.user.username == "saka7"

    async def test_empty_story_rejected(self, db_session, test_user):
        with pytest.raises(HTTPException) as exc_info:
            await StoryService(db_session).create_story(test_user.id)

        assert exc_info.value.status_code == 400

    async def test_new_story_is_visible(self, db_session, test_user):
        service = StoryService(db_session)
        story = await service.create_story(test_user.id, image_url="https://img.example.com/a.jpg")

        active = await service.get_active_stories()

        assert [s.id for s in active] == [story.id]

    async def test_expired_story_is_hidden(self, db_session, test_user):
        now = utc_now()
        expired = Story(
            user_id=test_user.id,
            content="Old news",
            created_at=now - timedelta(hours=25),
            expires_at=now - timedelta(hours=1),
        )
        db_session.add(expired)
        await db_session.commit()

        active = await StoryService(db_session).get_active_stories()

        assert active == []

    async def test_active_stories_newest_first(self, db_session, test_user, test_user_2):
        service = StoryService(db_session)
        first = await service.create_story(test_user.id, content="one")
        second = await service.create_story(test_user_2.id, content="two")

        active = await service.get_active_stories()

        assert [s.id for s in active] == [second.id, first.id]
