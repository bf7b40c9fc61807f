"""Organization and conversion schemas."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from leadhub.app.schemas.lead import LeadRead
from leadhub.app.schemas.user import UserRead

OrganizationType = Literal["company", "bank", "school", "govt", "other"]
OrganizationSegment = Literal["B2B", "B2E"]


class PrimaryContact(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    job_title: Optional[str] = None


class OrganizationCreate(BaseModel):
    name: str = Field(min_length=1)
    type: OrganizationType
    segment: OrganizationSegment
    primary_contact: PrimaryContact


class OrganizationRead(BaseModel):
    id: int
    name: str
    type: str
    segment: str
    unique_code: str
    status: str
    primary_contact_name: str
    primary_contact_email: str
    primary_contact_phone: Optional[str] = None
    primary_contact_job_title: Optional[str] = None
    owner_id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrganizationPublicRead(BaseModel):
    id: int
    name: str
    type: str
    unique_code: str

    model_config = ConfigDict(from_attributes=True)


class OrganizationDetail(OrganizationRead):
    members: list[UserRead] = []


class ConversionRead(BaseModel):
    organization: OrganizationRead
    user: UserRead
    lead: LeadRead
    email_sent: bool
    warnings: list[str] = []

    model_config = ConfigDict(from_attributes=True)
