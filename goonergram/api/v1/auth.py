"""
Authentication API endpoints.
Google OAuth2 login, callback and logout, plus the current-user endpoints.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Cookie, Depends, HTTPException, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from goonergram.config import settings
from goonergram.core.database import get_db
from goonergram.core.oauth import oauth_client, create_state_token, verify_state_token, OAuthException
from goonergram.core.security import create_session_token
from goonergram.dependencies import get_current_user
from goonergram.schemas.user import UserResponse, ProfileUpdate
from goonergram.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()


def _set_cookie(response: RedirectResponse, key: str, value: str, max_age: int) -> None:
    response.set_cookie(
        key=key,
        value=value,
        max_age=max_age,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        path="/",
    )


@router.get("/login")
async def login():
    """
    Start the OAuth flow.

    Sets a signed state cookie and redirects to Google's consent screen.
    """
    state = create_state_token()
    response = RedirectResponse(
        url=oauth_client.get_authorization_url(state),
        status_code=status.HTTP_302_FOUND
    )
    _set_cookie(response, settings.oauth_state_cookie_name, state, settings.oauth_state_ttl_seconds)
    return response


@router.get("/callback")
async def callback(
    code: Optional[str] = None,
    state: Optional[str] = None,
    oauth_state: Optional[str] = Cookie(None, alias=settings.oauth_state_cookie_name),
    db: AsyncSession = Depends(get_db)
):
    """
    Complete the OAuth flow.

    **Flow:**
    1. Verify the echoed state against the state cookie
    2. Exchange the code and read the Google profile
    3. Upsert the user keyed by `google:<sub>`
    4. Set the session cookie and redirect to `/`

    Provider failures redirect to `/?error=auth_failed`.
    """
    verify_state_token(state, oauth_state)

    if not code:
        return RedirectResponse(url="/?error=auth_failed", status_code=status.HTTP_302_FOUND)

    try:
        profile = await oauth_client.authenticate(code)
    except OAuthException as e:
        logger.warning("OAuth callback failed: %s", e)
        return RedirectResponse(url="/?error=auth_failed", status_code=status.HTTP_302_FOUND)

    user = await UserService(db).upsert_oauth_user(profile)

    response = RedirectResponse(url="/", status_code=status.HTTP_302_FOUND)
    _set_cookie(
        response,
        settings.session_cookie_name,
        create_session_token(user.id),
        settings.jwt_expiration_hours * 3600,
    )
    response.delete_cookie(settings.oauth_state_cookie_name, path="/")

    logger.info("User %s logged in", user.id)
    return response


@router.get("/logout")
async def logout():
    """Clear the session cookie and go home."""
    response = RedirectResponse(url="/", status_code=status.HTTP_302_FOUND)
    response.delete_cookie(settings.session_cookie_name, path="/")
    return response


@router.get("/auth/user", response_model=UserResponse)
async def get_auth_user(
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Get the authenticated user's full profile.

    **Authentication**: Required
    """
    try:
        return await UserService(db).get_user(current_user["id"])
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to fetch user %s", current_user["id"])
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch user"
        )


@router.patch("/auth/user", response_model=UserResponse)
async def update_auth_user(
    updates: ProfileUpdate,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Update the authenticated user's profile.

    Same rules as `PATCH /api/profile`.

    **Authentication**: Required
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
        logger.exception("Failed to update user %s", current_user["id"])
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update user"
        )
