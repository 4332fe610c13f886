"""
Unit tests for PartnerService.
Tests the request/accept state machine and partner listings.
"""
import pytest
from fastapi import HTTPException
from sqlalchemy import select, func

from goonergram.models.notification import Notification, NotificationType
from goonergram.models.partner import GooningPartner, PartnerStatus, make_pair_key
from goonergram.services.partner_service import PartnerService


@pytest.mark.asyncio
class TestPartnerRequests:
    """Test cases for sending and accepting requests."""

    async def test_send_request_is_pending(self, db_session, test_user, test_user_2):
        relationship = await PartnerService(db_session).send_partner_request(test_user.id, test_user_2.id)

        assert relationship.status == PartnerStatus.PENDING
        assert relationship.user_id == test_user.id
        assert relationship.partner_id == test_user_2.id

        result = await db_session.execute(select(Notification))
        notification = result.scalar_one()
        assert notification.type == NotificationType.FOLLOW
        assert notification.user_id == test_user_2.id

    async def test_send_request_twice_is_idempotent(self, db_session, test_user, test_user_2):
        service = PartnerService(db_session)

        first = await service.send_partner_request(test_user.id, test_user_2.id)
        second = await service.send_partner_request(test_user.id, test_user_2.id)

        assert first.id == second.id
        count = await db_session.execute(select(func.count()).select_from(GooningPartner))
        assert count.scalar() == 1

    async def test_crossed_requests_accept(self, db_session, test_user, test_user_2):
        service = PartnerService(db_session)

        await service.send_partner_request(test_user.id, test_user_2.id)
        relationship = await service.send_partner_request(test_user_2.id, test_user.id)

        assert relationship.status == PartnerStatus.ACCEPTED

    async def test_request_to_self_rejected(self, db_session, test_user):
        with pytest.raises(HTTPException) as exc_info:
            await PartnerService(db_session).send_partner_request(test_user.id, test_user.id)

        assert exc_info.value.status_code == 400

    async def test_request_to_missing_user_rejected(self, db_session, test_user):
        with pytest.raises(HTTPException) as exc_info:
            await PartnerService(db_session).send_partner_request(test_user.id, "google:nobody")

        assert exc_info.value.status_code == 404

    async def test_blocked_pair_rejected(self, db_session, test_user, test_user_2):
        db_session.add(GooningPartner(
            user_id=test_user_2.id,
            partner_id=test_user.id,
            pair_key=make_pair_key(test_user.id, test_user_2.id),
            status=PartnerStatus.BLOCKED,
        ))
        await db_session.commit()

        with pytest.raises(HTTPException) as exc_info:
            await PartnerService(db_session).send_partner_request(test_user.id, test_user_2.id)

        assert exc_info.value.status_code == 409

    async def test_accept_request(self, db_session, test_user, test_user_2):
        service = PartnerService(db_session)
        await service.send_partner_request(test_user.id, test_user_2.id)

        relationship = await service.accept_partner_request(test_user_2.id, test_user.id)

        assert relationship.status == PartnerStatus.ACCEPTED

    async def test_requester_cannot_accept_own_request(self, db_session, test_user, test_user_2):
        service = PartnerService(db_session)
        await service.send_partner_request(test_user.id, test_user_2.id)

        with pytest.raises(HTTPException) as exc_info:
            await service.accept_partner_request(test_user.id, test_user_2.id)

        assert exc_info.value.status_code == 404

    async def test_accept_without_request_is_404(self, db_session, test_user, test_user_2):
        with pytest.raises(HTTPException) as exc_info:
            await PartnerService(db_session).accept_partner_request(test_user_2.id, test_user.id)

        assert exc_info.value.status_code == 404


@pytest.mark.asyncio
class TestPartnerListings:
    """Test cases for partner and pending request lists."""

    async def test_partners_visible_from_both_sides(self, db_session, test_user, test_user_2):
        service = PartnerService(db_session)
        await service.send_partner_request(test_user.id, test_user_2.id)
        await service.accept_partner_request(test_user_2.id, test_user.id)

        mine = await service.get_partners(test_user.id)
        theirs = await service.get_partners(test_user_2.id)

        assert [p["partner"].id for p in mine] == [test_user_2.id]
        assert [p["partner"].id for p in theirs] == [test_user.id]

    async def test_pending_requests_not_listed_as_partners(self, db_session, test_user, test_user_2):
        service = PartnerService(db_session)
        await service.send_partner_request(test_user.id, test_user_2.id)

        assert await service.get_partners(test_user.id) == []

        pending = await service.get_pending_requests(test_user_2.id)
        assert len(pending) == 1
        assert pending[0].requester.username == "saka7"

        assert await service.get_pending_requests(test_user.id) == []
