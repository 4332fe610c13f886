"""
Security utilities for authentication.
Issues and validates the app's own session JWTs.
"""
import jwt
from datetime import timedelta
from typing import Optional, Dict, Any
from fastapi import HTTPException, status

from goonergram.config import settings
from goonergram.utils.datetime_utils import utc_now


class SecurityException(HTTPException):
    """Custom exception for security-related errors."""
    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create JWT access token.

    Args:
        data: Payload data to encode
        expires_delta: Optional expiration time delta

    Returns:
        Encoded JWT token

    Example:
        ```python
        token = create_access_token(
            data={"sub": "google:1234"},
            expires_delta=timedelta(hours=24)
        )
        ```
    """
    to_encode = data.copy()
    now = utc_now()

    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(hours=settings.jwt_expiration_hours)

    to_encode.update({"exp": expire, "iat": now})

    return jwt.encode(
        to_encode,
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm
    )


def decode_token(token: str) -> Dict[str, Any]:
    """
    Decode and validate JWT token.

    Args:
        token: JWT token string

    Returns:
        Decoded token payload

    Raises:
        SecurityException: If token is invalid or expired
    """
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm]
        )
    except jwt.ExpiredSignatureError:
        raise SecurityException("Token has expired")
    except jwt.InvalidTokenError:
        raise SecurityException("Invalid token")


def create_session_token(user_id: str) -> str:
    """Issue the session token stored in the login cookie."""
    return create_access_token({"sub": user_id, "typ": "session"})


def get_session_user_id(token: str) -> str:
    """
    Validate a session token and return its user ID.

    Raises:
        SecurityException: If the token is invalid, expired, or not a session token
    """
    payload = decode_token(token)
    user_id = payload.get("sub")

    if payload.get("typ") != "session" or not user_id:
        raise SecurityException("Invalid token")

    return user_id


def extract_token_from_header(authorization: str) -> str:
    """
    Extract JWT token from Authorization header.

    Args:
        authorization: Authorization header value (e.g., "Bearer <token>")

    Returns:
        Extracted token

    Raises:
        SecurityException: If header format is invalid
    """
    if not authorization:
        raise SecurityException("Missing authorization header")

    parts = authorization.split()

    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise SecurityException("Invalid authorization header format")

    return parts[1]
