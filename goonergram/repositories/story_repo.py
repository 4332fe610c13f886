"""
Story repository for database operations.
"""
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from goonergram.models.story import Story
from goonergram.repositories.base import BaseRepository


class StoryRepository(BaseRepository[Story]):
    """Repository for story database operations."""

    def __init__(self, db: AsyncSession):
        """Initialize story repository."""
        super().__init__(Story, db)

    async def get_with_author(self, story_id: str) -> Optional[Story]:
        """Get a story with its author loaded."""
        result = await self.db.execute(
            select(Story)
            .options(selectinload(Story.user))
            .where(Story.id == story_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_active(self, now: datetime) -> List[Story]:
        """
        Get stories that have not expired, newest first.

        Args:
            now: Reference time; stories with expires_at >= now are active

        Returns:
            List of active stories with authors
        """
        result = await self.db.execute(
            select(Story)
            .options(selectinload(Story.user))
            .where(Story.expires_at >= now)
            .order_by(Story.created_at.desc())
        )
        return list(result.scalars().all())
