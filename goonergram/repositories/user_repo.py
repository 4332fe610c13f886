"""
User repository for database operations.
Handles user lookups, username availability, and OAuth upserts.
"""
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from goonergram.models.user import User
from goonergram.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for user database operations."""

    def __init__(self, db: AsyncSession):
        """Initialize user repository."""
        super().__init__(User, db)

    async def get_by_username(self, username: str) -> Optional[User]:
        """
        Get user by username (case-insensitive).

        Args:
            username: Username to look up

        Returns:
            User instance or None
        """
        result = await self.db.execute(
            select(User).where(func.lower(User.username) == username.lower())
        )
        return result.scalar_one_or_none()

    async def is_username_taken(
        self,
        username: str,
        excluding_user_id: Optional[str] = None
    ) -> bool:
        """
        Check whether a username is held by someone else.

        Args:
            username: Candidate username
            excluding_user_id: User whose own username does not count as taken

        Returns:
            True if another user holds the username

        Example:
            ```python
            if await user_repo.is_username_taken("gunner", excluding_user_id=me):
                ...
            ```
        """
        holder = await self.get_by_username(username)
        if holder is None:
            return False
        return holder.id != excluding_user_id

    async def upsert_oauth_user(
        self,
        user_id: str,
        username: str,
        email: Optional[str] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        profile_image_url: Optional[str] = None,
    ) -> User:
        """
        Insert or update a user from an identity provider profile.

        Profile fields are refreshed on every login. The username is only
        used when the user is created; afterwards it is owned by the user.

        Args:
            user_id: Provider-qualified user ID (e.g. 'google:123')
            username: Username to assign on first login
            email: Email from the provider
            first_name: Given name
            last_name: Family name
            profile_image_url: Avatar URL

        Returns:
            User instance (created or updated)
        """
        existing_user = await self.get(user_id)

        if existing_user:
            existing_user.email = email
            existing_user.first_name = first_name
            existing_user.last_name = last_name
            existing_user.profile_image_url = profile_image_url
            await self.db.flush()
            await self.db.refresh(existing_user)
            return existing_user

        return await self.create(
            id=user_id,
            username=username,
            email=email,
            first_name=first_name,
            last_name=last_name,
            profile_image_url=profile_image_url,
        )
