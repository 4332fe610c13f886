"""
Partner API routes.
Send and accept partner requests, list partners and pending requests.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from goonergram.core.database import get_db
from goonergram.dependencies import get_current_user
from goonergram.schemas.partner import (
    PartnerAction,
    PartnerActionResponse,
    PartnerResponse,
    PartnerRequestResponse
)
from goonergram.services.partner_service import PartnerService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/request", response_model=PartnerActionResponse)
async def send_partner_request(
    action: PartnerAction,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Ask another user to be your gooning partner.

    If they already asked you, the partnership is accepted immediately.

    **Request Body**:
    - `partnerId` (str): Target user ID
    """
    try:
        relationship = await PartnerService(db).send_partner_request(
            current_user["id"], action.partner_id
        )
        return {"success": True, "status": relationship.status}
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to send partner request")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to send partner request"
        )


@router.post("/accept", response_model=PartnerActionResponse)
async def accept_partner_request(
    action: PartnerAction,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Accept a pending request.

    **Request Body**:
    - `partnerId` (str): The user who sent the request
    """
    try:
        relationship = await PartnerService(db).accept_partner_request(
            current_user["id"], action.partner_id
        )
        return {"success": True, "status": relationship.status}
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to accept partner request")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to accept partner request"
        )


@router.get("", response_model=List[PartnerResponse])
async def get_partners(
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """List accepted partners; `partner` is always the other user."""
    try:
        return await PartnerService(db).get_partners(current_user["id"])
    except Exception:
        logger.exception("Failed to fetch partners")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch partners"
        )


@router.get("/requests", response_model=List[PartnerRequestResponse])
async def get_pending_requests(
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """List pending requests addressed to the caller."""
    try:
        return await PartnerService(db).get_pending_requests(current_user["id"])
    except Exception:
        logger.exception("Failed to fetch partner requests")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch partner requests"
        )
