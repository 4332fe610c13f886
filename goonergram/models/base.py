"""
Base model classes and mixins for SQLAlchemy ORM.
Provides common functionality for all database models.
"""
import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from goonergram.utils.datetime_utils import utc_now


class Base(AsyncAttrs, DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Includes AsyncAttrs mixin for async relationship access.
    All models should inherit from this class.
    """
    pass


def generate_uuid() -> str:
    """Generate a new UUID v4 as a string primary key."""
    return str(uuid.uuid4())


class UUIDMixin:
    """
    Mixin for string ID primary key.

    Generated rows get a UUID4 string. Users override it with a
    provider-qualified id (e.g. 'google:1234').
    """

    id: Mapped[str] = mapped_column(
        String(255),
        primary_key=True,
        default=generate_uuid,
        doc="String ID primary key"
    )


class CreatedAtMixin:
    """Mixin for an immutable created_at timestamp."""

    # Python-side default keeps microsecond ordering on every backend
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=func.now(),
        nullable=False,
        index=True,
        doc="Timestamp when the record was created"
    )


class TimestampMixin(CreatedAtMixin):
    """Mixin for created_at and updated_at timestamps."""

    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=True,
        doc="Timestamp when the record was last updated"
    )
