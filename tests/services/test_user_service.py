"""
Unit tests for UserService.
Covers username availability, the change quota and OAuth provisioning.
"""
import pytest
from datetime import timedelta
from fastapi import HTTPException

from goonergram.services.user_service import UserService
from goonergram.utils.datetime_utils import utc_now, ensure_utc


@pytest.mark.asyncio
class TestUsernameAvailability:
    """Test cases for username availability checks."""

    async def test_free_username_is_available(self, db_session, test_user):
        service = UserService(db_session)

        assert await service.check_username_availability("martinelli11") is True

    async def test_taken_username_is_unavailable(self, db_session, test_user, test_user_2):
        service = UserService(db_session)

        assert await service.check_username_availability("odegaard8", test_user.id) is False

    async def test_own_username_counts_as_available(self, db_session, test_user):
        service = UserService(db_session)

        assert await service.check_username_availability("saka7", test_user.id) is True

    async def test_check_is_case_insensitive(self, db_session, test_user, test_user_2):
        service = UserService(db_session)

        assert await service.check_username_availability("ODEGAARD8", test_user.id) is False


@pytest.mark.asyncio
class TestUsernameQuota:
    """Test cases for the username change quota."""

    async def test_first_change_allowed(self, db_session, test_user):
        service = UserService(db_session)

        user = await service.update_user_profile(test_user.id, username="starboy7")

        assert user.username == "starboy7"
        assert user.username_change_count == 1
        assert user.username_changed_at is not None

    async def test_third_change_within_window_rejected(self, db_session, test_user):
        service = UserService(db_session)

        await service.update_user_profile(test_user.id, username="starboy7")
        await service.update_user_profile(test_user.id, username="starboy77")

        with pytest.raises(HTTPException) as exc_info:
            await service.update_user_profile(test_user.id, username="starboy777")

        assert exc_info.value.status_code == 429
        assert "nextAllowedDate" in exc_info.value.detail
        assert exc_info.value.detail["nextAllowedDate"].endswith("Z")

        user = await service.get_user(test_user.id)
        assert user.username == "starboy77"
        assert user.username_change_count == 2

    async def test_next_allowed_date_is_window_after_last_change(self, db_session, test_user):
        test_user.username_change_count = 2
        test_user.username_changed_at = utc_now() - timedelta(days=1)
        await db_session.commit()

        eligibility = await UserService(db_session).can_change_username(test_user.id)

        assert eligibility.can_change is False
        expected = ensure_utc(test_user.username_changed_at) + timedelta(days=24)
        assert abs((eligibility.next_allowed_date - expected).total_seconds()) < 1

    async def test_quota_resets_after_window(self, db_session, test_user):
        test_user.username_change_count = 2
        test_user.username_changed_at = utc_now() - timedelta(days=25)
        await db_session.commit()

        service = UserService(db_session)
        user = await service.update_user_profile(test_user.id, username="starboy7")

        assert user.username == "starboy7"
        assert user.username_change_count == 1

    async def test_taken_username_conflict(self, db_session, test_user, test_user_2):
        service = UserService(db_session)

        with pytest.raises(HTTPException) as exc_info:
            await service.update_user_profile(test_user.id, username="odegaard8")

        assert exc_info.value.status_code == 409

        user = await service.get_user(test_user.id)
        assert user.username_change_count == 0

    async def test_same_username_is_not_a_change(self, db_session, test_user):
        service = UserService(db_session)

        user = await service.update_user_profile(test_user.id, username="saka7", bio="Hale End")

        assert user.bio == "Hale End"
        assert user.username_change_count == 0

    async def test_bio_update_ignores_quota(self, db_session, test_user):
        test_user.username_change_count = 2
        test_user.username_changed_at = utc_now()
        await db_session.commit()

        user = await UserService(db_session).update_user_profile(
            test_user.id, bio="Starboy", profile_image_url="https://img.example.com/s.png"
        )

        assert user.bio == "Starboy"
        assert user.profile_image_url == "https://img.example.com/s.png"


@pytest.mark.asyncio
class TestOAuthProvisioning:
    """Test cases for creating users from OAuth profiles."""

    async def test_new_user_gets_hint_username(self, db_session):
        profile = {
            "id": "google:2001",
            "email": "gabriel.jesus@example.com",
            "first_name": "Gabriel",
            "last_name": "Jesus",
            "profile_image_url": None,
            "username_hint": "gabriel_jesus",
        }

        user = await UserService(db_session).upsert_oauth_user(profile)

        assert user.id == "google:2001"
        assert user.username == "gabriel_jesus"

    async def test_clashing_hint_gets_suffix(self, db_session, test_user):
        profile = {"id": "google:2002", "email": "other@example.com", "username_hint": "saka7"}

        user = await UserService(db_session).upsert_oauth_user(profile)

        assert user.username == "saka71"

    async def test_returning_user_keeps_username(self, db_session, test_user):
        await UserService(db_session).update_user_profile(test_user.id, username="starboy7")

        profile = {
            "id": test_user.id,
            "email": test_user.email,
            "first_name": "Bukayo",
            "last_name": "Saka",
            "profile_image_url": "https://img.example.com/new.png",
            "username_hint": "saka7",
        }
        user = await UserService(db_session).upsert_oauth_user(profile)

        assert user.username == "starboy7"
        assert user.last_name == "Saka"
        assert user.profile_image_url == "https://img.example.com/new.png"

    async def test_get_missing_user_raises_404(self, db_session):
        with pytest.raises(HTTPException) as exc_info:
            await UserService(db_session).get_user("google:missing")

        assert exc_info.value.status_code == 404
