"""
Partner service for business logic.
Handles partner requests, acceptance and listing. One relationship row
exists per unordered pair of users.
"""
from typing import List, Dict, Any
import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from goonergram.models.notification import NotificationType
from goonergram.models.partner import GooningPartner, PartnerStatus, make_pair_key
from goonergram.repositories.partner_repo import PartnerRepository
from goonergram.repositories.user_repo import UserRepository
from goonergram.schemas.user import UserBasicInfo
from goonergram.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


class PartnerService:
    """Service for partner-related business logic."""

    def __init__(self, db: AsyncSession):
        """Initialize partner service."""
        self.db = db
        self.partner_repo = PartnerRepository(db)
        self.user_repo = UserRepository(db)
        self.notification_service = NotificationService(db)

    async def send_partner_request(self, user_id: str, partner_id: str) -> GooningPartner:
        """
        Send a partner request from user_id to partner_id.

        - If a pending request already exists from the caller, it is returned unchanged.
        - If the other user already asked the caller, that request is accepted.
        - If the pair is already accepted, it is returned unchanged.

        Args:
            user_id: Requester
            partner_id: Target user

        Returns:
            The relationship row

        Raises:
            HTTPException: 400 for self-requests, 404 if the target does not exist,
                409 if the relationship is blocked
        """
        if user_id == partner_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cannot send a partner request to yourself"
            )

        if not await self.user_repo.exists(partner_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found"
            )

        existing = await self.partner_repo.get_by_pair(user_id, partner_id)
        if existing:
            return await self._resolve_existing(existing, user_id)

        try:
            relationship = await self.partner_repo.create(
                user_id=user_id,
                partner_id=partner_id,
                pair_key=make_pair_key(user_id, partner_id),
                status=PartnerStatus.PENDING,
            )
            notification = await self.notification_service.create_notification(
                user_id=partner_id,
                type=NotificationType.FOLLOW,
                message="wants to be your gooning partner",
                from_user_id=user_id,
            )
            await self.db.commit()
        except IntegrityError:
            # Both users sent a request at the same moment
            await self.db.rollback()
            existing = await self.partner_repo.get_by_pair(user_id, partner_id)
            return await self._resolve_existing(existing, user_id)

        await self.notification_service.publish(notification.id)
        logger.info("Partner request %s -> %s", user_id, partner_id)
        return relationship

    async def _resolve_existing(self, existing: GooningPartner, user_id: str) -> GooningPartner:
        if existing.status == PartnerStatus.BLOCKED:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Cannot send a partner request to this user"
            )

        if existing.status == PartnerStatus.PENDING and existing.partner_id == user_id:
            existing.status = PartnerStatus.ACCEPTED
            await self.db.commit()
            await self.db.refresh(existing)
            logger.info("Crossed partner requests accepted for %s", existing.pair_key)

        return existing

    async def accept_partner_request(self, user_id: str, partner_id: str) -> GooningPartner:
        """
        Accept the pending request that partner_id sent to user_id.

        Accepting an already-accepted partnership is a no-op.

        Args:
            user_id: Caller (the request target)
            partner_id: Original requester

        Returns:
            The accepted relationship

        Raises:
            HTTPException: 404 if there is no request from partner_id to the caller
        """
        relationship = await self.partner_repo.get_by_pair(user_id, partner_id)

        if relationship and relationship.status == PartnerStatus.ACCEPTED:
            return relationship

        if (
            not relationship
            or relationship.status != PartnerStatus.PENDING
            or relationship.user_id != partner_id
        ):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Partner request not found"
            )

        relationship.status = PartnerStatus.ACCEPTED
        await self.db.commit()
        await self.db.refresh(relationship)

        logger.info("User %s accepted partner request from %s", user_id, partner_id)
        return relationship

    async def get_partners(self, user_id: str) -> List[Dict[str, Any]]:
        """
        Get accepted partners, with `partner` always the other user.

        Args:
            user_id: Caller

        Returns:
            Serialized partnerships
        """
        relationships = await self.partner_repo.get_accepted_for_user(user_id)

        partners = []
        for rel in relationships:
            other = rel.other_user(user_id)
            partners.append({
                "id": rel.id,
                "user_id": rel.user_id,
                "partner_id": rel.partner_id,
                "status": rel.status,
                "created_at": rel.created_at,
                "partner": UserBasicInfo.model_validate(other) if other else None,
            })
        return partners

    async def get_pending_requests(self, user_id: str) -> List[GooningPartner]:
        """Get pending requests addressed to the caller, with requesters."""
        return await self.partner_repo.get_pending_for_target(user_id)
