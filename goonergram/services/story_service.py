"""
Story service for business logic.
Stories expire a fixed time after creation and are filtered at read time.
"""
from datetime import timedelta
from typing import List, Optional
import logging

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from goonergram.config import settings
from goonergram.models.story import Story
from goonergram.repositories.story_repo import StoryRepository
from goonergram.utils.datetime_utils import utc_now

logger = logging.getLogger(__name__)


class StoryService:
    """Service for story-related business logic."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.story_repo = StoryRepository(db)

    async def create_story(
        self,
        user_id: str,
        content: Optional[str] = None,
        image_url: Optional[str] = None,
        video_url: Optional[str] = None
    ) -> Story:
        """
        Create a story that expires `story_ttl_hours` from now.

        Raises:
            HTTPException: 400 if the story has neither text nor media
        """
        if not ((content and content.strip()) or image_url or video_url):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Story must have content, an image, or a video"
            )

        now = utc_now()
        story = await self.story_repo.create(
            user_id=user_id,
            content=content,
            image_url=image_url,
            video_url=video_url,
            created_at=now,
            expires_at=now + timedelta(hours=settings.story_ttl_hours),
        )
        await self.db.commit()

        logger.info("User %s posted story %s", user_id, story.id)
        return await self.story_repo.get_with_author(story.id)

    async def get_active_stories(self) -> List[Story]:
        """Get every unexpired story, newest first."""
        return await self.story_repo.get_active(utc_now())
