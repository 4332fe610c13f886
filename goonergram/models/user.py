"""
User model.

Users are created on first OAuth login and keyed by a provider-qualified
id ('google:<subject>'). The username is unique and changes are metered.
"""
from datetime import datetime
from typing import TYPE_CHECKING, List

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from goonergram.models.base import Base, UUIDMixin, TimestampMixin

if TYPE_CHECKING:
    from goonergram.models.post import Post
    from goonergram.models.story import Story


class User(Base, UUIDMixin, TimestampMixin):
    """User profile."""

    __tablename__ = "users"

    email: Mapped[str | None] = mapped_column(
        String(255),
        unique=True,
        nullable=True,
        doc="Email address from the identity provider"
    )

    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    profile_image_url: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
        doc="Avatar URL"
    )

    username: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        doc="Public handle, lowercase"
    )

    bio: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Username change metering
    username_change_count: Mapped[int] = mapped_column(
        Integer,
        default=0,
        server_default="0",
        nullable=False,
        doc="Username changes within the current window"
    )
    username_changed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        doc="When the username was last changed (window start reference)"
    )

    posts: Mapped[List["Post"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    stories: Mapped[List["Story"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def display_name(self) -> str:
        """First and last name, falling back to the username."""
        full_name = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return full_name or self.username

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username})>"
