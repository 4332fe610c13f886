"""
Post repository for database operations.
Handles posts, likes, comments and their denormalized counters.
"""
from typing import List, Optional, Set

from sqlalchemy import select, update, delete, case
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from goonergram.models.post import Post, PostLike, PostComment
from goonergram.repositories.base import BaseRepository


class PostRepository(BaseRepository[Post]):
    """Repository for post database operations."""

    def __init__(self, db: AsyncSession):
        """Initialize post repository."""
        super().__init__(Post, db)

    async def get_with_author(self, post_id: str) -> Optional[Post]:
        """
        Get a post with its author loaded.

        Args:
            post_id: Post ID

        Returns:
            Post instance or None
        """
        result = await self.db.execute(
            select(Post)
            .options(selectinload(Post.user))
            .where(Post.id == post_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_feed(self, limit: int = 20) -> List[Post]:
        """
        Get the most recent posts, newest first, with authors.

        Args:
            limit: Maximum number of posts

        Returns:
            List of posts
        """
        result = await self.db.execute(
            select(Post)
            .options(selectinload(Post.user))
            .order_by(Post.created_at.desc())
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def get_by_user(self, user_id: str, limit: int = 100) -> List[Post]:
        """
        Get posts by one author, newest first.

        Args:
            user_id: Author ID
            limit: Maximum number of posts

        Returns:
            List of posts
        """
        result = await self.db.execute(
            select(Post)
            .options(selectinload(Post.user))
            .where(Post.user_id == user_id)
            .order_by(Post.created_at.desc())
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def delete_owned(self, post_id: str, user_id: str) -> bool:
        """
        Delete a post only if it belongs to the user.

        Args:
            post_id: Post ID
            user_id: Expected owner

        Returns:
            True if a row was deleted
        """
        result = await self.db.execute(
            delete(Post).where(Post.id == post_id, Post.user_id == user_id)
        )
        await self.db.flush()
        return result.rowcount > 0

    async def increment_likes(self, post_id: str) -> None:
        """Add one to likes_count in SQL."""
        await self.db.execute(
            update(Post)
            .where(Post.id == post_id)
            .values(likes_count=Post.likes_count + 1)
            .execution_options(synchronize_session=False)
        )

    async def decrement_likes(self, post_id: str) -> None:
        """Subtract one from likes_count in SQL, never going below zero."""
        await self.db.execute(
            update(Post)
            .where(Post.id == post_id)
            .values(likes_count=case((Post.likes_count > 0, Post.likes_count - 1), else_=0))
            .execution_options(synchronize_session=False)
        )

    async def increment_comments(self, post_id: str) -> None:
        """Add one to comments_count in SQL."""
        await self.db.execute(
            update(Post)
            .where(Post.id == post_id)
            .values(comments_count=Post.comments_count + 1)
            .execution_options(synchronize_session=False)
        )


class PostLikeRepository(BaseRepository[PostLike]):
    """Repository for post likes."""

    def __init__(self, db: AsyncSession):
        """Initialize post like repository."""
        super().__init__(PostLike, db)

    async def get_like(self, post_id: str, user_id: str) -> Optional[PostLike]:
        """Get the like row for (post, user), if any."""
        result = await self.db.execute(
            select(PostLike).where(
                PostLike.post_id == post_id,
                PostLike.user_id == user_id
            )
        )
        return result.scalar_one_or_none()

    async def delete_like(self, post_id: str, user_id: str) -> bool:
        """
        Remove a like.

        Returns:
            True if a like row was removed
        """
        result = await self.db.execute(
            delete(PostLike).where(
                PostLike.post_id == post_id,
                PostLike.user_id == user_id
            )
        )
        return result.rowcount > 0

    async def get_liked_post_ids(self, user_id: str, post_ids: List[str]) -> Set[str]:
        """
        Return which of the given posts the user has liked.

        Args:
            user_id: Viewer ID
            post_ids: Candidate post IDs

        Returns:
            Set of liked post IDs
        """
        if not post_ids:
            return set()

        result = await self.db.execute(
            select(PostLike.post_id).where(
                PostLike.user_id == user_id,
                PostLike.post_id.in_(post_ids)
            )
        )
        return set(result.scalars().all())


class PostCommentRepository(BaseRepository[PostComment]):
    """Repository for post comments."""

    def __init__(self, db: AsyncSession):
        """Initialize post comment repository."""
        super().__init__(PostComment, db)

    async def get_with_author(self, comment_id: str) -> Optional[PostComment]:
        """Get a comment with its author loaded."""
        result = await self.db.execute(
            select(PostComment)
            .options(selectinload(PostComment.user))
            .where(PostComment.id == comment_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_for_post(self, post_id: str, limit: int = 50) -> List[PostComment]:
        """
        Get the most recent comments on a post in chronological order.

        Args:
            post_id: Post ID
            limit: Maximum number of comments

        Returns:
            Comments, oldest first
        """
        result = await self.db.execute(
            select(PostComment)
            .options(selectinload(PostComment.user))
            .where(PostComment.post_id == post_id)
            .order_by(PostComment.created_at.desc())
            .limit(limit)
        )
        comments = list(result.scalars().all())
        comments.reverse()
        return comments
