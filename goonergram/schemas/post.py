"""
Post, like and comment schemas for API request/response validation.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict, model_validator

from goonergram.schemas.user import UserBasicInfo


# ============================================================================
# Request Schemas
# ============================================================================

class PostCreate(BaseModel):
    """Schema for creating a post. At least one of content, image, or video."""

    content: Optional[str] = Field(None, max_length=5000)
    image_url: Optional[str] = Field(None, alias="imageUrl", max_length=500)
    video_url: Optional[str] = Field(None, alias="videoUrl", max_length=500)
    video_duration: Optional[int] = Field(None, alias="videoDuration", ge=0)

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "content": "Up the Arsenal",
                "imageUrl": None,
                "videoUrl": None
            }
        }
    )

    @model_validator(mode="after")
    def require_some_content(self) -> "PostCreate":
        """Reject posts that carry neither text nor media."""
        has_text = bool(self.content and self.content.strip())
        if not (has_text or self.image_url or self.video_url):
            raise ValueError("Post must have content, an image, or a video")
        return self


class CommentCreate(BaseModel):
    """Schema for commenting on a post."""

    content: str = Field(..., min_length=1, max_length=2000)

    @model_validator(mode="after")
    def reject_blank(self) -> "CommentCreate":
        if not self.content.strip():
            raise ValueError("Content cannot be empty or whitespace only")
        return self


# ============================================================================
# Response Schemas
# ============================================================================

class PostResponse(BaseModel):
    """Schema for post response with author."""

    id: str
    user_id: str = Field(serialization_alias="userId")
    content: Optional[str] = None
    image_url: Optional[str] = Field(None, serialization_alias="imageUrl")
    video_url: Optional[str] = Field(None, serialization_alias="videoUrl")
    video_duration: Optional[int] = Field(None, serialization_alias="videoDuration")
    likes_count: int = Field(0, serialization_alias="likesCount")
    comments_count: int = Field(0, serialization_alias="commentsCount")
    created_at: datetime = Field(serialization_alias="createdAt")

    user: Optional[UserBasicInfo] = None
    is_liked: bool = Field(False, serialization_alias="isLiked")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class LikeResponse(BaseModel):
    """Result of a like/unlike call."""

    success: bool = True
    post_id: str = Field(serialization_alias="postId")
    likes_count: int = Field(serialization_alias="likesCount")
    is_liked: bool = Field(serialization_alias="isLiked")

    model_config = ConfigDict(populate_by_name=True)


class CommentResponse(BaseModel):
    """Schema for comment response with author."""

    id: str
    post_id: str = Field(serialization_alias="postId")
    user_id: str = Field(serialization_alias="userId")
    content: str
    created_at: datetime = Field(serialization_alias="createdAt")
    user: Optional[UserBasicInfo] = None

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
