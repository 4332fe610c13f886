"""
Global chat API routes.
A single room shared by every signed-in user.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from goonergram.config import settings
from goonergram.core.database import get_db
from goonergram.core.rate_limit import limiter
from goonergram.dependencies import get_current_user, get_limit
from goonergram.schemas.chat import GlobalMessageCreate, GlobalMessageResponse
from goonergram.services.message_service import MessageService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/messages", response_model=List[GlobalMessageResponse])
async def get_global_messages(
    limit: Optional[int] = Depends(get_limit),
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Get the most recent global messages, oldest first."""
    try:
        return await MessageService(db).get_global_messages(limit=limit)
    except Exception:
        logger.exception("Failed to fetch global messages")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch messages"
        )


@router.post(
    "/messages",
    response_model=GlobalMessageResponse,
    status_code=status.HTTP_201_CREATED
)
@limiter.limit(settings.rate_limit_messages)
async def send_global_message(
    request: Request,
    message_data: GlobalMessageCreate,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Post to the global chat.

    - **content**: Message text
    """
    try:
        return await MessageService(db).send_global_message(current_user["id"], message_data.content)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to send global message")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to send message"
        )
