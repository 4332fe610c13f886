"""
Message and GlobalMessage models.
"""
import enum
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String, Text, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from goonergram.models.base import Base, UUIDMixin, CreatedAtMixin

if TYPE_CHECKING:
    from goonergram.models.user import User
    from goonergram.models.chat import ChatRoom


class MessageType(str, enum.Enum):
    """Enum for chat message types."""
    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"


class Message(Base, UUIDMixin, CreatedAtMixin):
    """Message in a chat room."""

    __tablename__ = "messages"
    __table_args__ = (
        Index("idx_messages_room_created", "chat_room_id", "created_at"),
    )

    chat_room_id: Mapped[str] = mapped_column(
        ForeignKey("chat_rooms.id", ondelete="CASCADE"),
        nullable=False,
    )
    sender_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    message_type: Mapped[MessageType] = mapped_column(
        SQLEnum(MessageType, name="message_type", native_enum=False,
                values_callable=lambda e: [m.value for m in e]),
        default=MessageType.TEXT,
        nullable=False,
    )
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    video_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    chat_room: Mapped["ChatRoom"] = relationship(back_populates="messages")
    sender: Mapped["User"] = relationship()

    def __repr__(self) -> str:
        return f"<Message(id={self.id}, chat_room_id={self.chat_room_id}, type={self.message_type})>"


class GlobalMessage(Base, UUIDMixin, CreatedAtMixin):
    """Message in the single global chat room."""

    __tablename__ = "global_messages"

    sender_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)

    sender: Mapped["User"] = relationship()
