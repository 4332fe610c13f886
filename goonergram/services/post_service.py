"""
Post service for business logic.
Handles the feed, post lifecycle, likes and comments.
"""
from typing import List, Optional, Dict, Any
import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from goonergram.config import settings
from goonergram.core.cache import invalidate_unread_notification_count
from goonergram.models.notification import NotificationType
from goonergram.models.post import Post, PostComment
from goonergram.repositories.post_repo import (
    PostRepository,
    PostLikeRepository,
    PostCommentRepository
)
from goonergram.schemas.user import UserBasicInfo
from goonergram.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


class PostService:
    """Service for post-related business logic."""

    def __init__(self, db: AsyncSession):
        """Initialize post service."""
        self.db = db
        self.post_repo = PostRepository(db)
        self.like_repo = PostLikeRepository(db)
        self.comment_repo = PostCommentRepository(db)
        self.notification_service = NotificationService(db)

    def _serialize_post(self, post: Post, is_liked: bool) -> Dict[str, Any]:
        return {
            "id": post.id,
            "user_id": post.user_id,
            "content": post.content,
            "image_url": post.image_url,
            "video_url": post.video_url,
            "video_duration": post.video_duration,
            "likes_count": post.likes_count,
            "comments_count": post.comments_count,
            "created_at": post.created_at,
            "user": UserBasicInfo.model_validate(post.user) if post.user else None,
            "is_liked": is_liked,
        }

    async def _with_like_flags(self, posts: List[Post], viewer_id: str) -> List[Dict[str, Any]]:
        liked = await self.like_repo.get_liked_post_ids(viewer_id, [p.id for p in posts])
        return [self._serialize_post(post, post.id in liked) for post in posts]

    async def _get_post_or_404(self, post_id: str) -> Post:
        post = await self.post_repo.get_with_author(post_id)
        if not post:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Post not found"
            )
        return post

    async def create_post(
        self,
        user_id: str,
        content: Optional[str] = None,
        image_url: Optional[str] = None,
        video_url: Optional[str] = None,
        video_duration: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Create a post.

        Args:
            user_id: Author
            content: Text body
            image_url: Image URL
            video_url: Video URL
            video_duration: Video length in seconds

        Returns:
            Serialized post with author and is_liked=False

        Raises:
            HTTPException: 400 if the post has neither text nor media
        """
        if not ((content and content.strip()) or image_url or video_url):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Post must have content, an image, or a video"
            )

        post = await self.post_repo.create(
            user_id=user_id,
            content=content,
            image_url=image_url,
            video_url=video_url,
            video_duration=video_duration,
        )
        await self.db.commit()

        logger.info("User %s created post %s", user_id, post.id)
        post = await self.post_repo.get_with_author(post.id)
        return self._serialize_post(post, is_liked=False)

    async def get_posts(self, viewer_id: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        Get the feed, newest first, with is_liked for the viewer.

        Args:
            viewer_id: Caller
            limit: Maximum posts (defaults to settings)

        Returns:
            Serialized posts
        """
        posts = await self.post_repo.get_feed(limit=limit or settings.post_feed_default_limit)
        return await self._with_like_flags(posts, viewer_id)

    async def get_posts_by_user(
        self,
        user_id: str,
        viewer_id: str,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """
        Get one author's posts, newest first.

        Args:
            user_id: Author
            viewer_id: Caller, for is_liked
            limit: Maximum posts

        Returns:
            Serialized posts
        """
        posts = await self.post_repo.get_by_user(user_id, limit=limit or 100)
        return await self._with_like_flags(posts, viewer_id)

    async def delete_post(self, post_id: str, user_id: str) -> None:
        """
        Delete one of the caller's posts.

        Likes, comments and post notifications cascade with it.

        Raises:
            HTTPException: 404 if the post does not exist or is not the caller's
        """
        deleted = await self.post_repo.delete_owned(post_id, user_id)
        if not deleted:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Post not found"
            )

        await self.db.commit()
        await invalidate_unread_notification_count(user_id)
        logger.info("User %s deleted post %s", user_id, post_id)

    async def like_post(self, post_id: str, user_id: str) -> Dict[str, Any]:
        """
        Like a post.

        Idempotent: liking an already-liked post changes nothing. A first like
        increments likes_count in SQL and notifies the author unless the
        author liked their own post.

        Args:
            post_id: Post ID
            user_id: Caller

        Returns:
            Dict with post_id, likes_count, is_liked

        Raises:
            HTTPException: 404 if the post does not exist
        """
        post = await self._get_post_or_404(post_id)

        existing = await self.like_repo.get_like(post_id, user_id)
        if existing:
            return {"post_id": post_id, "likes_count": post.likes_count, "is_liked": True}

        notification = None
        try:
            await self.like_repo.create(post_id=post_id, user_id=user_id)
            await self.post_repo.increment_likes(post_id)

            if post.user_id != user_id:
                notification = await self.notification_service.create_notification(
                    user_id=post.user_id,
                    type=NotificationType.LIKE,
                    message="liked your post",
                    from_user_id=user_id,
                    post_id=post_id,
                )

            await self.db.commit()
        except IntegrityError:
            # Concurrent like from the same user won the race
            await self.db.rollback()
            notification = None

        if notification is not None:
            await self.notification_service.publish(notification.id)

        post = await self._get_post_or_404(post_id)
        return {"post_id": post_id, "likes_count": post.likes_count, "is_liked": True}

    async def unlike_post(self, post_id: str, user_id: str) -> Dict[str, Any]:
        """
        Remove the caller's like from a post.

        Idempotent: unliking a post that is not liked changes nothing.
        likes_count never drops below zero.

        Raises:
            HTTPException: 404 if the post does not exist
        """
        await self._get_post_or_404(post_id)

        removed = await self.like_repo.delete_like(post_id, user_id)
        if removed:
            await self.post_repo.decrement_likes(post_id)
        await self.db.commit()

        post = await self._get_post_or_404(post_id)
        return {"post_id": post_id, "likes_count": post.likes_count, "is_liked": False}

    async def add_comment(self, post_id: str, user_id: str, content: str) -> PostComment:
        """
        Comment on a post and notify its author.

        Args:
            post_id: Post ID
            user_id: Commenter
            content: Comment text

        Returns:
            Comment with author loaded

        Raises:
            HTTPException: 404 if the post does not exist
        """
        post = await self._get_post_or_404(post_id)

        comment = await self.comment_repo.create(
            post_id=post_id,
            user_id=user_id,
            content=content.strip(),
        )
        await self.post_repo.increment_comments(post_id)

        notification = None
        if post.user_id != user_id:
            notification = await self.notification_service.create_notification(
                user_id=post.user_id,
                type=NotificationType.COMMENT,
                message="commented on your post",
                from_user_id=user_id,
                post_id=post_id,
            )

        await self.db.commit()

        if notification is not None:
            await self.notification_service.publish(notification.id)

        return await self.comment_repo.get_with_author(comment.id)

    async def get_comments(self, post_id: str, limit: Optional[int] = None) -> List[PostComment]:
        """
        Get the most recent comments on a post, oldest first.

        Raises:
            HTTPException: 404 if the post does not exist
        """
        await self._get_post_or_404(post_id)
        return await self.comment_repo.get_for_post(
            post_id,
            limit=limit or settings.comment_default_limit
        )
