"""
Story model.

Stories expire 24 hours after creation. Expired rows are never purged;
they are filtered out at read time.
"""
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from goonergram.models.base import Base, UUIDMixin, CreatedAtMixin

if TYPE_CHECKING:
    from goonergram.models.user import User


class Story(Base, UUIDMixin, CreatedAtMixin):
    """Ephemeral story."""

    __tablename__ = "stories"

    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    video_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
        doc="Story is active while now <= expires_at"
    )

    user: Mapped["User"] = relationship(back_populates="stories")

    def __repr__(self) -> str:
        return f"<Story(id={self.id}, user_id={self.user_id}, expires_at={self.expires_at})>"
