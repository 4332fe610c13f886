"""
Notification model.

Notifications are created as side effects of likes, comments and partner
requests. Only the recipient can read or mark them.
"""
import enum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, ForeignKey, Index, Text, Enum as SQLEnum, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from goonergram.models.base import Base, UUIDMixin, CreatedAtMixin

if TYPE_CHECKING:
    from goonergram.models.user import User
    from goonergram.models.post import Post


class NotificationType(str, enum.Enum):
    """Enum for notification types."""
    LIKE = "like"
    COMMENT = "comment"
    FOLLOW = "follow"
    UNFOLLOW = "unfollow"


class Notification(Base, UUIDMixin, CreatedAtMixin):
    """Notification addressed to a single user."""

    __tablename__ = "notifications"
    __table_args__ = (
        Index("idx_notifications_user_read", "user_id", "is_read"),
    )

    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        doc="Recipient"
    )
    from_user_id: Mapped[str | None] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=True,
        doc="Actor"
    )
    type: Mapped[NotificationType] = mapped_column(
        SQLEnum(NotificationType, name="notification_type", native_enum=False,
                values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    post_id: Mapped[str | None] = mapped_column(
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=True,
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)
    is_read: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        server_default=false(),
        nullable=False,
    )

    from_user: Mapped[Optional["User"]] = relationship(foreign_keys=[from_user_id])
    post: Mapped[Optional["Post"]] = relationship()

    def __repr__(self) -> str:
        return f"<Notification(id={self.id}, user_id={self.user_id}, type={self.type}, is_read={self.is_read})>"
