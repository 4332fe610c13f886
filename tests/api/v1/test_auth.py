"""
Integration tests for the OAuth login flow and session authentication.
"""
import pytest
from urllib.parse import urlparse, parse_qs

from goonergram.config import settings
from goonergram.core.oauth import oauth_client, OAuthException


GOOGLE_PROFILE = {
    "id": "google:2002",
    "email": "gabriel.martinelli@example.com",
    "first_name": "Gabriel",
    "last_name": "Martinelli",
    "profile_image_url": "https://img.example.com/gm.jpg",
    "username_hint": "gabriel_martinelli",
}


@pytest.mark.asyncio
class TestOAuthFlow:
    """Test cases for /api/login, /api/callback and /api/logout."""

    async def test_login_redirects_to_google(self, unauth_client):
        response = await unauth_client.get("/api/login")

        assert response.status_code == 302
        location = urlparse(response.headers["location"])
        assert location.netloc == "accounts.google.com"

        state = parse_qs(location.query)["state"][0]
        assert unauth_client.cookies.get(settings.oauth_state_cookie_name) == state

    async def test_callback_creates_session(self, unauth_client, mocker):
        mocker.patch.object(oauth_client, "authenticate", return_value=GOOGLE_PROFILE)

        login = await unauth_client.get("/api/login")
        state = parse_qs(urlparse(login.headers["location"]).query)["state"][0]

        response = await unauth_client.get("/api/callback", params={"code": "abc", "state": state})

        assert response.status_code == 302
        assert response.headers["location"] == "/"
        assert unauth_client.cookies.get(settings.session_cookie_name)

        me = await unauth_client.get("/api/auth/user")
        assert me.status_code == 200
        data = me.json()
        assert data["id"] == "google:2002"
        assert data["username"] == "gabriel_martinelli"
        assert data["firstName"] == "Gabriel"

    async def test_callback_rejects_mismatched_state(self, unauth_client, mocker):
        authenticate = mocker.patch.object(oauth_client, "authenticate", return_value=GOOGLE_PROFILE)

        await unauth_client.get("/api/login")
        response = await unauth_client.get("/api/callback", params={"code": "abc", "state": "forged"})

        assert response.status_code == 401
        authenticate.assert_not_called()

    async def test_callback_provider_failure_redirects(self, unauth_client, mocker):
        mocker.patch.object(oauth_client, "authenticate", side_effect=OAuthException("denied"))

        login = await unauth_client.get("/api/login")
        state = parse_qs(urlparse(login.headers["location"]).query)["state"][0]

        response = await unauth_client.get("/api/callback", params={"code": "abc", "state": state})

        assert response.status_code == 302
        assert response.headers["location"] == "/?error=auth_failed"

    async def test_logout_clears_session(self, unauth_client):
        response = await unauth_client.get("/api/logout")

        assert response.status_code == 302
        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith(f"{settings.session_cookie_name}=")
        assert "Max-Age=0" in set_cookie


@pytest.mark.asyncio
class TestSessionAuthentication:
    """Test cases for get_current_user via real tokens."""

    @pytest.mark.parametrize("path", [
        "/api/auth/user",
        "/api/profile",
        "/api/posts",
        "/api/stories",
        "/api/partners",
        "/api/chats",
        "/api/global/messages",
        "/api/notifications",
        "/api/notifications/unread-count",
    ])
    async def test_requires_authentication(self, unauth_client, path):
        response = await unauth_client.get(path)

        assert response.status_code == 401
        assert response.json()["detail"] == "Unauthorized"

    async def test_bearer_token(self, unauth_client, auth_headers):
        response = await unauth_client.get("/api/auth/user", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["username"] == "saka7"

    async def test_session_cookie(self, unauth_client, session_token):
        unauth_client.cookies.set(settings.session_cookie_name, session_token)

        response = await unauth_client.get("/api/profile")

        assert response.status_code == 200
        assert response.json()["id"] == "google:1001"

    async def test_invalid_token(self, unauth_client):
        response = await unauth_client.get(
            "/api/auth/user",
            headers={"Authorization": "Bearer not-a-jwt"}
        )

        assert response.status_code == 401

    async def test_token_for_deleted_user(self, unauth_client, db_session, test_user, auth_headers):
        await db_session.delete(test_user)
        await db_session.commit()

        response = await unauth_client.get("/api/auth/user", headers=auth_headers)

        assert response.status_code == 401
