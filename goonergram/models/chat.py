"""
ChatRoom and ChatRoomMember models.

Private rooms carry a private_key built from the sorted member pair so the
database holds at most one private room per pair. Group rooms leave it null.
"""
from datetime import datetime
from typing import TYPE_CHECKING, List

from sqlalchemy import Boolean, DateTime, ForeignKey, String, UniqueConstraint, false, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from goonergram.models.base import Base, UUIDMixin, CreatedAtMixin
from goonergram.utils.datetime_utils import utc_now

if TYPE_CHECKING:
    from goonergram.models.user import User
    from goonergram.models.message import Message


class ChatRoom(Base, UUIDMixin, CreatedAtMixin):
    """Private (two members) or group chat room."""

    __tablename__ = "chat_rooms"

    name: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        doc="Group name (null for private rooms)"
    )
    is_group: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        server_default=false(),
        nullable=False,
    )
    created_by: Mapped[str | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    private_key: Mapped[str | None] = mapped_column(
        String(520),
        unique=True,
        nullable=True,
        doc="Sorted member pair for private rooms"
    )

    members: Mapped[List["ChatRoomMember"]] = relationship(
        back_populates="chat_room",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    messages: Mapped[List["Message"]] = relationship(
        back_populates="chat_room",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<ChatRoom(id={self.id}, is_group={self.is_group}, name={self.name})>"


class ChatRoomMember(Base, UUIDMixin):
    """Membership of a user in a chat room."""

    __tablename__ = "chat_room_members"
    __table_args__ = (
        UniqueConstraint("chat_room_id", "user_id", name="uq_chat_room_members_room_user"),
    )

    chat_room_id: Mapped[str] = mapped_column(
        ForeignKey("chat_rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=func.now(),
        nullable=False,
    )

    chat_room: Mapped["ChatRoom"] = relationship(back_populates="members")
    user: Mapped["User"] = relationship()
