"""
User service for profile management and username governance.
Handles OAuth user provisioning, username availability, and the
username change quota.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Dict, Any
import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from goonergram.config import settings
from goonergram.models.user import User
from goonergram.repositories.user_repo import UserRepository
from goonergram.schemas.user import USERNAME_PATTERN, USERNAME_FORMAT_ERROR
from goonergram.utils.datetime_utils import utc_now, add_days, is_expired, to_iso_utc

logger = logging.getLogger(__name__)

USERNAME_TAKEN = "Username is already taken"


@dataclass
class UsernameChangeEligibility:
    """Whether a user may change their username right now."""

    can_change: bool
    reason: Optional[str] = None
    next_allowed_date: Optional[datetime] = None


class UserService:
    """Service for user-related business logic."""

    def __init__(self, db: AsyncSession):
        """Initialize user service."""
        self.db = db
        self.user_repo = UserRepository(db)

    async def get_user(self, user_id: str) -> User:
        """
        Get a user by ID.

        Raises:
            HTTPException: 404 if the user does not exist
        """
        user = await self.user_repo.get(user_id)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found"
            )
        return user

    async def check_username_availability(
        self,
        username: str,
        excluding_user_id: Optional[str] = None
    ) -> bool:
        """
        Check whether a username can be claimed.

        A username held by `excluding_user_id` itself counts as available.

        Args:
            username: Candidate username
            excluding_user_id: Caller's user ID

        Returns:
            True if available
        """
        candidate = username.strip().lower()
        return not await self.user_repo.is_username_taken(candidate, excluding_user_id)

    async def can_change_username(self, user_id: str) -> UsernameChangeEligibility:
        """
        Evaluate the username change quota.

        At most `username_change_limit` changes are allowed within
        `username_change_window_days` of the last change. Once the window
        has passed the counter and timestamp are reset.

        Args:
            user_id: User ID

        Returns:
            UsernameChangeEligibility

        Example:
            ```python
            eligibility = await user_service.can_change_username(user_id)
            if not eligibility.can_change:
                print(eligibility.next_allowed_date)
            ```
        """
        user = await self.get_user(user_id)

        if user.username_change_count < settings.username_change_limit:
            return UsernameChangeEligibility(can_change=True)

        if user.username_changed_at is not None:
            window_end = add_days(user.username_changed_at, settings.username_change_window_days)
            if not is_expired(window_end):
                return UsernameChangeEligibility(
                    can_change=False,
                    reason=(
                        f"You can only change your username {settings.username_change_limit} times "
                        f"in {settings.username_change_window_days} days"
                    ),
                    next_allowed_date=window_end,
                )

        # Window elapsed: start a fresh quota
        user.username_change_count = 0
        user.username_changed_at = None
        await self.db.flush()
        return UsernameChangeEligibility(can_change=True)

    async def update_user_profile(
        self,
        user_id: str,
        username: Optional[str] = None,
        bio: Optional[str] = None,
        profile_image_url: Optional[str] = None
    ) -> User:
        """
        Partially update a user's profile.

        Args:
            user_id: User ID
            username: New username (already normalized), or None to keep
            bio: New bio, or None to keep
            profile_image_url: New avatar URL, or None to keep

        Returns:
            Updated user

        Raises:
            HTTPException: 409 if the username is taken,
                429 if the username change quota is exhausted
        """
        user = await self.get_user(user_id)

        if username is not None and username != user.username:
            if not await self.check_username_availability(username, user_id):
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail=USERNAME_TAKEN
                )

            eligibility = await self.can_change_username(user_id)
            if not eligibility.can_change:
                raise HTTPException(
                    status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                    detail={
                        "message": eligibility.reason,
                        "nextAllowedDate": to_iso_utc(eligibility.next_allowed_date),
                    }
                )

            user.username = username
            user.username_changed_at = utc_now()
            user.username_change_count = user.username_change_count + 1
            logger.info("User %s changed username (change %d)", user_id, user.username_change_count)

        if bio is not None:
            user.bio = bio

        if profile_image_url is not None:
            user.profile_image_url = profile_image_url

        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=USERNAME_TAKEN
            )

        await self.db.refresh(user)
        return user

    async def check_username(self, username: str, user_id: str) -> Dict[str, Any]:
        """
        Availability and change-eligibility probe for the profile editor.

        Args:
            username: Candidate username
            user_id: Caller

        Returns:
            Dict with username, available, can_change, reason, next_allowed_date
        """
        candidate = username.strip().lower()
        eligibility = await self.can_change_username(user_id)

        if not USERNAME_PATTERN.match(candidate):
            available = False
            reason = USERNAME_FORMAT_ERROR
        else:
            available = await self.check_username_availability(candidate, user_id)
            reason = eligibility.reason

        return {
            "username": candidate,
            "available": available,
            "can_change": eligibility.can_change,
            "reason": reason,
            "next_allowed_date": eligibility.next_allowed_date,
        }

    async def generate_unique_username(self, hint: str) -> str:
        """
        Turn a username hint into an unused username.

        Appends 1, 2, 3, ... to the hint until no user holds it.

        Example:
            ```python
            await user_service.generate_unique_username("saka")  # "saka" or "saka1", ...
            ```
        """
        candidate = hint
        suffix = 0

        while await self.user_repo.is_username_taken(candidate):
            suffix += 1
            candidate = f"{hint}{suffix}"

        return candidate

    async def upsert_oauth_user(self, profile: Dict[str, Any]) -> User:
        """
        Create or refresh a user from a normalized OAuth profile.

        Args:
            profile: Dict from GoogleOAuthClient.authenticate()

        Returns:
            The stored user
        """
        existing = await self.user_repo.get(profile["id"])
        username = existing.username if existing else await self.generate_unique_username(
            profile.get("username_hint") or "user"
        )

        user = await self.user_repo.upsert_oauth_user(
            user_id=profile["id"],
            username=username,
            email=profile.get("email"),
            first_name=profile.get("first_name"),
            last_name=profile.get("last_name"),
            profile_image_url=profile.get("profile_image_url"),
        )
        await self.db.commit()

        if not existing:
            logger.info("Provisioned new user %s as %s", user.id, user.username)

        return user
