"""Team member and organization settings schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from leadflow.models.enums import UserRole


class TeamMemberCreateRequest(BaseModel):
    name: str | None = None
    phone: str | None = None
    role: str = Field(default=UserRole.SALES_REP.value, max_length=20)


class TeamMemberResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    organization_id: int
    name: str
    phone: str
    role: UserRole
    created_at: datetime | None = None


class OrganizationUpdateRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str | None = Field(default=None, max_length=255)
    contact_number: str | None = Field(default=None, max_length=20)
    logo_url: str | None = Field(default=None, max_length=500)
    google_review_qr_url: str | None = Field(default=None, max_length=500)


class OrganizationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    contact_number: str | None = None
    logo_url: str | None = None
    google_review_qr_url: str | None = None
