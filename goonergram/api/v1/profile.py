"""
Profile API endpoints.
Profile read/update and the username availability probe.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from goonergram.core.database import get_db
from goonergram.dependencies import get_current_user
from goonergram.schemas.user import UserResponse, ProfileUpdate, UsernameCheckResponse
from goonergram.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=UserResponse)
async def get_profile(
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Get the caller's profile.

    **Authentication**: Required
    """
    try:
        return await UserService(db).get_user(current_user["id"])
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to fetch profile for %s", current_user["id"])
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch profile"
        )


@router.patch("", response_model=UserResponse)
async def update_profile(
    updates: ProfileUpdate,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Update the caller's profile. Only provided fields change.

    **Authentication**: Required

    **Request Body**:
    - `username` (str, optional): 3-30 chars of a-z, 0-9, `_` or `.`
    - `bio` (str, optional)
    - `profileImageUrl` (str, optional)

    **Errors**:
    - 409: Username is already taken
    - 429: Username change limit reached; detail carries `nextAllowedDate`
    """
    try:
        return await UserService(db).update_user_profile(
            current_user["id"],
            username=updates.username,
            bio=updates.bio,
            profile_image_url=updates.profile_image_url,
        )
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to update profile for %s", current_user["id"])
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update profile"
        )


@router.get("/check-username/{username}", response_model=UsernameCheckResponse)
async def check_username(
    username: str,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Check whether a username is free and whether the caller may change to it now.

    **Authentication**: Required
    """
    try:
        result = await UserService(db).check_username(username, current_user["id"])
        await db.commit()
        return result
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to check username %s", username)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to check username"
        )
