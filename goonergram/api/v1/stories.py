"""
Story API routes.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from goonergram.config import settings
from goonergram.core.database import get_db
from goonergram.core.rate_limit import limiter
from goonergram.dependencies import get_current_user
from goonergram.schemas.story import StoryCreate, StoryResponse
from goonergram.services.story_service import StoryService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=StoryResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.rate_limit_posts)
async def create_story(
    request: Request,
    story_data: StoryCreate,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Post a story that disappears after 24 hours.

    **Authentication**: Required
    """
    try:
        return await StoryService(db).create_story(
            user_id=current_user["id"],
            content=story_data.content,
            image_url=story_data.image_url,
            video_url=story_data.video_url,
        )
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to create story")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create story"
        )


@router.get("", response_model=List[StoryResponse])
async def get_stories(
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Get every unexpired story, newest first."""
    try:
        return await StoryService(db).get_active_stories()
    except Exception:
        logger.exception("Failed to fetch stories")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch stories"
        )
