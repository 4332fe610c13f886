"""
Post, PostLike and PostComment models.

likes_count and comments_count are denormalized counters; they are only
changed with SQL-side arithmetic in the same transaction as the row
insert/delete they track.
"""
from typing import TYPE_CHECKING, List

from sqlalchemy import ForeignKey, Integer, String, Text, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from goonergram.models.base import Base, UUIDMixin, CreatedAtMixin

if TYPE_CHECKING:
    from goonergram.models.user import User


class Post(Base, UUIDMixin, CreatedAtMixin):
    """Feed post with optional text, image, or video."""

    __tablename__ = "posts"

    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        doc="Author"
    )

    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    video_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    video_duration: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        doc="Video length in seconds"
    )

    likes_count: Mapped[int] = mapped_column(Integer, default=0, server_default="0", nullable=False)
    comments_count: Mapped[int] = mapped_column(Integer, default=0, server_default="0", nullable=False)

    user: Mapped["User"] = relationship(back_populates="posts")
    likes: Mapped[List["PostLike"]] = relationship(
        back_populates="post",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    comments: Mapped[List["PostComment"]] = relationship(
        back_populates="post",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, user_id={self.user_id}, likes={self.likes_count})>"


class PostLike(Base, UUIDMixin, CreatedAtMixin):
    """A user's like on a post. One per (post, user)."""

    __tablename__ = "post_likes"
    __table_args__ = (
        UniqueConstraint("post_id", "user_id", name="uq_post_likes_post_user"),
    )

    post_id: Mapped[str] = mapped_column(
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    post: Mapped["Post"] = relationship(back_populates="likes")


class PostComment(Base, UUIDMixin, CreatedAtMixin):
    """Comment on a post."""

    __tablename__ = "post_comments"
    __table_args__ = (
        Index("idx_post_comments_post_created", "post_id", "created_at"),
    )

    post_id: Mapped[str] = mapped_column(
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)

    post: Mapped["Post"] = relationship(back_populates="comments")
    user: Mapped["User"] = relationship()
