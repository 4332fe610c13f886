"""
GooningPartner model.

One row per unordered user pair. user_id is the requester, partner_id the
target; pair_key ('<smaller id>|<larger id>') enforces a single row per pair.
"""
import enum
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from goonergram.models.base import Base, UUIDMixin, CreatedAtMixin

if TYPE_CHECKING:
    from goonergram.models.user import User


class PartnerStatus(str, enum.Enum):
    """Enum for partnership states."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    BLOCKED = "blocked"


def make_pair_key(user_id_1: str, user_id_2: str) -> str:
    """Order-independent key for a pair of user ids."""
    low, high = sorted((user_id_1, user_id_2))
    return f"{low}|{high}"


class GooningPartner(Base, UUIDMixin, CreatedAtMixin):
    """Partner relationship between two users."""

    __tablename__ = "gooning_partners"

    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        doc="User who sent the request"
    )
    partner_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        doc="User who received the request"
    )
    pair_key: Mapped[str] = mapped_column(
        String(520),
        unique=True,
        nullable=False,
    )
    status: Mapped[PartnerStatus] = mapped_column(
        SQLEnum(PartnerStatus, name="partner_status", native_enum=False,
                values_callable=lambda e: [m.value for m in e]),
        default=PartnerStatus.PENDING,
        nullable=False,
    )

    requester: Mapped["User"] = relationship(foreign_keys=[user_id])
    partner: Mapped["User"] = relationship(foreign_keys=[partner_id])

    def other_user(self, user_id: str) -> "User":
        """Return the user on the other side of the pair."""
        return self.partner if self.user_id == user_id else self.requester

    def __repr__(self) -> str:
        return f"<GooningPartner(user_id={self.user_id}, partner_id={self.partner_id}, status={self.status})>"
