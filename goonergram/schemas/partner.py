"""
Partner schemas for API request/response validation.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict

from goonergram.models.partner import PartnerStatus
from goonergram.schemas.user import UserBasicInfo


class PartnerAction(BaseModel):
    """Body for sending or accepting a partner request."""

    partner_id: str = Field(..., alias="partnerId", min_length=1)

    model_config = ConfigDict(populate_by_name=True)


class PartnerResponse(BaseModel):
    """A partnership as seen by the caller; `partner` is the other user."""

    id: str
    user_id: str = Field(serialization_alias="userId")
    partner_id: str = Field(serialization_alias="partnerId")
    status: PartnerStatus
    created_at: datetime = Field(serialization_alias="createdAt")
    partner: Optional[UserBasicInfo] = None

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class PartnerRequestResponse(BaseModel):
    """A pending request addressed to the caller, with the requester."""

    id: str
    user_id: str = Field(serialization_alias="userId")
    partner_id: str = Field(serialization_alias="partnerId")
    status: PartnerStatus
    created_at: datetime = Field(serialization_alias="createdAt")
    requester: Optional[UserBasicInfo] = None

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class PartnerActionResponse(BaseModel):
    """Result of a partner request/accept call."""

    success: bool = True
    status: PartnerStatus

    model_config = ConfigDict(populate_by_name=True)
