"""
User schemas for API request/response validation.

Note: Uses serialization_alias to output camelCase for frontend compatibility
while keeping internal snake_case for Python conventions. Request bodies
accept either form.
"""
import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, ConfigDict

USERNAME_PATTERN = re.compile(r"^[a-z0-9_.]{3,30}$")
USERNAME_FORMAT_ERROR = "Username must be 3-30 characters of lowercase letters, digits, '_' or '.'"


class UserBasicInfo(BaseModel):
    """Author/actor summary embedded in posts, messages and notifications."""

    id: str
    username: str
    first_name: Optional[str] = Field(None, serialization_alias="firstName")
    last_name: Optional[str] = Field(None, serialization_alias="lastName")
    profile_image_url: Optional[str] = Field(None, serialization_alias="profileImageUrl")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class UserResponse(BaseModel):
    """Full profile of a user."""

    id: str
    email: Optional[str] = None
    username: str
    first_name: Optional[str] = Field(None, serialization_alias="firstName")
    last_name: Optional[str] = Field(None, serialization_alias="lastName")
    profile_image_url: Optional[str] = Field(None, serialization_alias="profileImageUrl")
    bio: Optional[str] = None
    username_change_count: int = Field(0, serialization_alias="usernameChangeCount")
    username_changed_at: Optional[datetime] = Field(None, serialization_alias="usernameChangedAt")
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: Optional[datetime] = Field(None, serialization_alias="updatedAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class ProfileUpdate(BaseModel):
    """Partial profile update. Omitted fields are left unchanged."""

    username: Optional[str] = None
    bio: Optional[str] = Field(None, max_length=500)
    profile_image_url: Optional[str] = Field(None, alias="profileImageUrl", max_length=500)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("username")
    @classmethod
    def normalize_username(cls, v: Optional[str]) -> Optional[str]:
        """Lowercase and validate the username format."""
        if v is None:
            return v

        v = v.strip().lower()
        if not USERNAME_PATTERN.match(v):
            raise ValueError(USERNAME_FORMAT_ERROR)
        return v


class UsernameCheckResponse(BaseModel):
    """Availability and change-eligibility probe result."""

    username: str
    available: bool
    can_change: bool = Field(serialization_alias="canChange")
    reason: Optional[str] = None
    next_allowed_date: Optional[datetime] = Field(None, serialization_alias="nextAllowedDate")

    model_config = ConfigDict(populate_by_name=True)
