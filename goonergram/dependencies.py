"""
Dependency injection for FastAPI routes.
Provides reusable dependencies for authentication and request parameters.
"""
import logging
from typing import Optional

from fastapi import Cookie, Depends, Header, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from goonergram.config import settings
from goonergram.core.database import get_db
from goonergram.core.security import extract_token_from_header, get_session_user_id, SecurityException
from goonergram.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    authorization: Optional[str] = Header(None),
    access_token: Optional[str] = Cookie(None, alias=settings.session_cookie_name),
    db: AsyncSession = Depends(get_db)
) -> dict:
    """
    Dependency to get the current authenticated user.

    Flow:
    1. Take the session token from the Authorization header or the session cookie
    2. Validate the JWT locally
    3. Load the user from the database

    Args:
        authorization: Optional "Bearer <token>" header
        access_token: Session cookie set by /api/callback
        db: Database session

    Returns:
        Dictionary with the user's id, username, email and profile fields

    Raises:
        HTTPException: 401 with detail "Unauthorized" for any failure

    Example:
        ```python
        @router.get("/protected")
        async def protected_route(current_user: dict = Depends(get_current_user)):
            return {"user": current_user["username"]}
        ```
    """
    try:
        token = extract_token_from_header(authorization) if authorization else access_token
        if not token:
            raise _unauthorized()

        user_id = get_session_user_id(token)
    except SecurityException as e:
        logger.debug("Rejected session: %s", e.detail)
        raise _unauthorized()

    user = await UserRepository(db).get(user_id)
    if not user:
        raise _unauthorized()

    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "profile_image_url": user.profile_image_url,
    }


def get_limit(
    limit: Optional[int] = Query(None, ge=1, le=200, description="Maximum number of items")
) -> Optional[int]:
    """
    Dependency for list endpoint limits.

    Returns None when absent so each service applies its own default.
    """
    return limit
