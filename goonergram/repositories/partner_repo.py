"""
Partner repository for database operations.
One row per unordered pair; lookups go through the pair key.
"""
from typing import List, Optional

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from goonergram.models.partner import GooningPartner, PartnerStatus, make_pair_key
from goonergram.repositories.base import BaseRepository


class PartnerRepository(BaseRepository[GooningPartner]):
    """Repository for partner relationships."""

    def __init__(self, db: AsyncSession):
        """Initialize partner repository."""
        super().__init__(GooningPartner, db)

    async def get_by_pair(self, user_id_1: str, user_id_2: str) -> Optional[GooningPartner]:
        """
        Get the relationship between two users regardless of direction.

        Args:
            user_id_1: First user ID
            user_id_2: Second user ID

        Returns:
            GooningPartner or None
        """
        result = await self.db.execute(
            select(GooningPartner).where(
                GooningPartner.pair_key == make_pair_key(user_id_1, user_id_2)
            )
        )
        return result.scalar_one_or_none()

    async def get_accepted_for_user(self, user_id: str) -> List[GooningPartner]:
        """
        Get accepted relationships where the user is on either side.

        Args:
            user_id: User ID

        Returns:
            Relationships with both users loaded
        """
        result = await self.db.execute(
            select(GooningPartner)
            .options(
                selectinload(GooningPartner.requester),
                selectinload(GooningPartner.partner)
            )
            .where(
                or_(GooningPartner.user_id == user_id, GooningPartner.partner_id == user_id),
                GooningPartner.status == PartnerStatus.ACCEPTED
            )
            .order_by(GooningPartner.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_pending_for_target(self, user_id: str) -> List[GooningPartner]:
        """
        Get pending requests addressed to the user, newest first.

        Args:
            user_id: Target user ID

        Returns:
            Pending requests with requester loaded
        """
        result = await self.db.execute(
            select(GooningPartner)
            .options(selectinload(GooningPartner.requester))
            .where(
                GooningPartner.partner_id == user_id,
                GooningPartner.status == PartnerStatus.PENDING
            )
            .order_by(GooningPartner.created_at.desc())
        )
        return list(result.scalars().all())
