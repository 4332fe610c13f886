"""
Google OAuth2 client.
Handles the authorization-code flow: building the consent URL, exchanging
the code for tokens, and fetching the user's profile.
"""
import logging
import re
import secrets
from datetime import timedelta
from typing import Any, Dict
from urllib.parse import urlencode

import httpx

from goonergram.config import settings
from goonergram.core.security import create_access_token, decode_token, SecurityException

logger = logging.getLogger(__name__)

PROVIDER_PREFIX = "google"
USERNAME_MAX_LENGTH = 20


class OAuthException(Exception):
    """Exception raised when the identity provider rejects or fails a request."""
    pass


def create_state_token() -> str:
    """
    Create a signed, short-lived OAuth state value.

    The same value is set as a cookie and passed to Google; the callback
    requires both to match.
    """
    return create_access_token(
        {"nonce": secrets.token_urlsafe(16), "typ": "oauth_state"},
        expires_delta=timedelta(seconds=settings.oauth_state_ttl_seconds)
    )


def verify_state_token(state: str | None, cookie_state: str | None) -> None:
    """
    Check the state echoed by the provider against the state cookie.

    Raises:
        SecurityException: If state is missing, mismatched, expired, or forged
    """
    if not state or not cookie_state or not secrets.compare_digest(state, cookie_state):
        raise SecurityException("Invalid OAuth state")

    payload = decode_token(state)
    if payload.get("typ") != "oauth_state":
        raise SecurityException("Invalid OAuth state")


def to_username(value: str | None) -> str:
    """
    Derive a username candidate from an email local-part or display name.

    Lowercases, collapses runs of characters outside [a-z0-9_] into '_',
    trims leading/trailing '_' and caps the length.

    Example:
        >>> to_username("Bukayo.Saka")
        'bukayo_saka'
    """
    if not value:
        return "user"

    candidate = re.sub(r"[^a-z0-9_]+", "_", value.lower()).strip("_")
    candidate = candidate[:USERNAME_MAX_LENGTH].strip("_")

    if len(candidate) < 3:
        return "user"
    return candidate


class GoogleOAuthClient:
    """Client for Google's OAuth2 and OpenID Connect userinfo endpoints."""

    def __init__(self):
        """Initialize OAuth client from settings."""
        self.client_id = settings.google_client_id
        self.client_secret = settings.google_client_secret
        self.redirect_uri = settings.google_redirect_uri
        self.timeout = settings.oauth_timeout

    def get_authorization_url(self, state: str) -> str:
        """
        Build the Google consent screen URL.

        Args:
            state: Signed state value to be echoed back on callback

        Returns:
            Absolute URL to redirect the browser to
        """
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": "openid email profile",
            "state": state,
            "prompt": "select_account",
        }
        return f"{settings.google_auth_url}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> Dict[str, Any]:
        """
        Exchange an authorization code for tokens.

        Args:
            code: Authorization code from the callback

        Returns:
            Token response (contains access_token)

        Raises:
            OAuthException: If the exchange fails
        """
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.post(
                    settings.google_token_url,
                    data={
                        "code": code,
                        "client_id": self.client_id,
                        "client_secret": self.client_secret,
                        "redirect_uri": self.redirect_uri,
                        "grant_type": "authorization_code",
                    },
                    headers={"Accept": "application/json"},
                )
                response.raise_for_status()
                token_data = response.json()
            except httpx.HTTPStatusError as e:
                raise OAuthException(f"Token exchange failed: {e.response.text[:200]}")
            except httpx.RequestError as e:
                raise OAuthException(f"OAuth provider unavailable: {str(e)}")

        if not token_data.get("access_token"):
            raise OAuthException("No access token in provider response")

        return token_data

    async def get_user_info(self, access_token: str) -> Dict[str, Any]:
        """
        Fetch the OpenID Connect profile for an access token.

        Args:
            access_token: Provider access token

        Returns:
            Profile claims (sub, email, given_name, family_name, picture, name)

        Raises:
            OAuthException: If the request fails or the profile has no subject
        """
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.get(
                    settings.google_userinfo_url,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
                response.raise_for_status()
                profile = response.json()
            except httpx.HTTPStatusError as e:
                raise OAuthException(f"Userinfo request failed: {e.response.text[:200]}")
            except httpx.RequestError as e:
                raise OAuthException(f"OAuth provider unavailable: {str(e)}")

        if not profile.get("sub"):
            raise OAuthException("Provider profile has no subject")

        return profile

    async def authenticate(self, code: str) -> Dict[str, Any]:
        """
        Complete the code flow and return a normalized profile.

        Returns:
            Dict with id (provider-qualified), email, first_name, last_name,
            profile_image_url and username_hint
        """
        token_data = await self.exchange_code(code)
        profile = await self.get_user_info(token_data["access_token"])

        email = profile.get("email")
        username_source = email.split("@", 1)[0] if email else profile.get("name")

        logger.info("OAuth login completed for subject %s", profile["sub"])

        return {
            "id": f"{PROVIDER_PREFIX}:{profile['sub']}",
            "email": email,
            "first_name": profile.get("given_name"),
            "last_name": profile.get("family_name"),
            "profile_image_url": profile.get("picture"),
            "username_hint": to_username(username_source),
        }


# Global OAuth client instance
oauth_client = GoogleOAuthClient()
