"""
Story schemas for API request/response validation.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict, model_validator

from goonergram.schemas.user import UserBasicInfo


class StoryCreate(BaseModel):
    """Schema for creating a story."""

    content: Optional[str] = Field(None, max_length=2000)
    image_url: Optional[str] = Field(None, alias="imageUrl", max_length=500)
    video_url: Optional[str] = Field(None, alias="videoUrl", max_length=500)

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="after")
    def require_some_content(self) -> "StoryCreate":
        """Reject stories that carry neither text nor media."""
        has_text = bool(self.content and self.content.strip())
        if not (has_text or self.image_url or self.video_url):
            raise ValueError("Story must have content, an image, or a video")
        return self


class StoryResponse(BaseModel):
    """Schema for story response with author."""

    id: str
    user_id: str = Field(serialization_alias="userId")
    content: Optional[str] = None
    image_url: Optional[str] = Field(None, serialization_alias="imageUrl")
    video_url: Optional[str] = Field(None, serialization_alias="videoUrl")
    created_at: datetime = Field(serialization_alias="createdAt")
    expires_at: datetime = Field(serialization_alias="expiresAt")
    user: Optional[UserBasicInfo] = None

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
