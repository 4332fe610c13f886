"""
Notification API endpoints.
Lists notifications, reports the unread count, and marks them read.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from goonergram.core.database import get_db
from goonergram.dependencies import get_current_user, get_limit
from goonergram.schemas.notification import (
    NotificationResponse,
    UnreadCountResponse,
    MarkAllReadResponse
)
from goonergram.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[NotificationResponse])
async def get_notifications(
    limit: Optional[int] = Depends(get_limit),
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Get the caller's notifications, newest first.

    **Authentication**: Required

    **Returns**: List of NotificationResponse with `fromUser` and `post` when present
    """
    try:
        return await NotificationService(db).get_notifications(current_user["id"], limit=limit)
    except Exception:
        logger.exception("Failed to fetch notifications")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch notifications"
        )


@router.get("/unread-count", response_model=UnreadCountResponse)
async def get_unread_count(
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Get the caller's unread notification count.

    **Authentication**: Required
    """
    try:
        count = await NotificationService(db).get_unread_notification_count(current_user["id"])
        return {"count": count}
    except Exception:
        logger.exception("Failed to fetch unread count")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch unread count"
        )


@router.patch("/read-all", response_model=MarkAllReadResponse)
async def mark_all_as_read(
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Mark every notification of the caller as read.

    **Authentication**: Required
    """
    try:
        updated = await NotificationService(db).mark_all_as_read(current_user["id"])
        return {"success": True, "updated_count": updated}
    except Exception:
        logger.exception("Failed to mark notifications as read")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to mark notifications as read"
        )


@router.patch("/{notification_id}/read", response_model=NotificationResponse)
async def mark_notification_as_read(
    notification_id: str,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Mark one notification as read.

    **Authentication**: Required

    **Errors**:
    - 404: Notification not found or addressed to someone else
    """
    try:
        return await NotificationService(db).mark_notification_as_read(
            notification_id, current_user["id"]
        )
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to mark notification %s as read", notification_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to mark notification as read"
        )
