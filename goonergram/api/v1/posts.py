"""
Post API routes.
Provides endpoints for the feed, post lifecycle, likes and comments.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from goonergram.config import settings
from goonergram.core.database import get_db
from goonergram.core.rate_limit import limiter
from goonergram.dependencies import get_current_user, get_limit
from goonergram.schemas.post import (
    PostCreate,
    PostResponse,
    LikeResponse,
    CommentCreate,
    CommentResponse
)
from goonergram.services.post_service import PostService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a post",
    description="Create a post with text, an image, or a video."
)
@limiter.limit(settings.rate_limit_posts)
async def create_post(
    request: Request,
    post_data: PostCreate,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Create a new post.

    - **content**: Text body
    - **imageUrl** / **videoUrl**: Media URLs; at least one of content, image or video
    - **videoDuration**: Video length in seconds
    """
    try:
        return await PostService(db).create_post(
            user_id=current_user["id"],
            content=post_data.content,
            image_url=post_data.image_url,
            video_url=post_data.video_url,
            video_duration=post_data.video_duration,
        )
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to create post")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create post"
        )


@router.get(
    "",
    response_model=List[PostResponse],
    summary="Get the feed",
    description="Most recent posts, newest first, with isLiked for the caller."
)
async def get_posts(
    limit: Optional[int] = Depends(get_limit),
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    try:
        return await PostService(db).get_posts(current_user["id"], limit=limit)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to fetch posts")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch posts"
        )


@router.get(
    "/user/{user_id}",
    response_model=List[PostResponse],
    summary="Get a user's posts"
)
async def get_user_posts(
    user_id: str,
    limit: Optional[int] = Depends(get_limit),
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Get posts by one author, newest first.

    - **user_id**: Author ID
    """
    try:
        return await PostService(db).get_posts_by_user(user_id, current_user["id"], limit=limit)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to fetch posts for user %s", user_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch user posts"
        )


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a post",
    description="Delete one of your own posts."
)
async def delete_post(
    post_id: str,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    try:
        await PostService(db).delete_post(post_id, current_user["id"])
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to delete post %s", post_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete post"
        )


@router.post(
    "/{post_id}/like",
    response_model=LikeResponse,
    summary="Like a post"
)
async def like_post(
    post_id: str,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Like a post. Liking twice has no further effect.

    - **post_id**: Post ID
    """
    try:
        return await PostService(db).like_post(post_id, current_user["id"])
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to like post %s", post_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to like post"
        )


@router.delete(
    "/{post_id}/like",
    response_model=LikeResponse,
    summary="Unlike a post"
)
async def unlike_post(
    post_id: str,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    try:
        return await PostService(db).unlike_post(post_id, current_user["id"])
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to unlike post %s", post_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to unlike post"
        )


@router.get(
    "/{post_id}/comments",
    response_model=List[CommentResponse],
    summary="Get comments on a post"
)
async def get_comments(
    post_id: str,
    limit: Optional[int] = Depends(get_limit),
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    try:
        return await PostService(db).get_comments(post_id, limit=limit)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to fetch comments for post %s", post_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch comments"
        )


@router.post(
    "/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a post"
)
async def add_comment(
    post_id: str,
    comment_data: CommentCreate,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Add a comment and notify the post's author.

    - **content**: Comment text
    """
    try:
        return await PostService(db).add_comment(post_id, current_user["id"], comment_data.content)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to comment on post %s", post_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add comment"
        )
