"""
Centralized datetime utilities.

Ensures consistent timezone handling across the application.
All timestamps are stored and transmitted as UTC with explicit timezone indicators.
"""

from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    """
    Get current UTC time as timezone-aware datetime.

    Use this instead of datetime.utcnow() to ensure timezone awareness.

    Returns:
        datetime: Current time in UTC with timezone info

    Example:
        >>> now = utc_now()
        >>> now.tzinfo  # timezone.utc
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure datetime is UTC timezone-aware.

    Converts naive datetime (assumed to be UTC) to timezone-aware UTC.
    If datetime is already timezone-aware, converts to UTC.

    Args:
        dt: Datetime object (naive or aware) or None

    Returns:
        datetime | None: UTC timezone-aware datetime or None

    Example:
        >>> naive_dt = datetime(2025, 12, 16, 11, 30)  # Naive
        >>> aware_dt = ensure_utc(naive_dt)
        >>> aware_dt.tzinfo  # timezone.utc
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        # Naive datetime - assume UTC
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def to_iso_utc(dt: datetime | None) -> str | None:
    """
    Convert datetime to ISO format with 'Z' suffix (UTC indicator).

    Used for values sent to clients outside of pydantic serialization
    (429 payloads, Socket.IO events).

    Args:
        dt: Datetime object (naive or aware) or None

    Returns:
        str | None: ISO 8601 string like '2025-12-16T11:30:00.123456Z' or None

    Example:
        >>> to_iso_utc(datetime(2025, 12, 16, 11, 30))
        '2025-12-16T11:30:00Z'
    """
    if dt is None:
        return None

    utc_dt = ensure_utc(dt)
    return utc_dt.isoformat().replace('+00:00', 'Z')


def add_days(dt: datetime, days: int) -> datetime:
    """Shift a datetime by whole days, normalized to UTC."""
    return ensure_utc(dt) + timedelta(days=days)


def is_expired(expires_at: datetime | None, now: datetime | None = None) -> bool:
    """
    Check whether an expiry timestamp has passed.

    A value equal to ``now`` is still considered active.

    Args:
        expires_at: Expiry timestamp (naive values are treated as UTC)
        now: Reference time, defaults to utc_now()

    Returns:
        True if expires_at is strictly before now
    """
    if expires_at is None:
        return False
    reference = ensure_utc(now) if now else utc_now()
    return ensure_utc(expires_at) < reference
