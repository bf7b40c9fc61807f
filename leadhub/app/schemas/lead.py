"""Lead schemas for intake, updates, lifecycle actions and responses."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from leadhub.app.schemas.note import EngagementRead, NoteRead

LeadSegment = Literal["B2B", "B2E", "other"]
LeadSource = Literal["b2b_form", "b2e_form", "contact_form", "manual"]
LeadStatus = Literal["new", "warm", "hot", "converted", "lost"]
ManualLeadStatus = Literal["new", "warm", "hot", "lost"]
DemoStatus = Literal["none", "requested", "scheduled", "completed", "no_show"]
QuoteStatus = Literal["none", "requested", "sent", "accepted", "lost"]


class LeadCreate(BaseModel):
    """Manual lead entry by an admin."""

    name: str = Field(min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    organization_name: Optional[str] = None
    job_title: Optional[str] = None
    segment: LeadSegment
    source: LeadSource = "manual"
    has_urgent_need: bool = False
    is_decision_maker: bool = False


class LeadUpdate(BaseModel):
    """Schema for lead updates with partial fields."""

    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    organization_name: Optional[str] = None
    job_title: Optional[str] = None
    segment: Optional[LeadSegment] = None
    source: Optional[LeadSource] = None
    has_urgent_need: Optional[bool] = None
    is_decision_maker: Optional[bool] = None


class B2BFormSubmission(BaseModel):
    name: str = Field(min_length=1)
    company: str = Field(min_length=1)
    email: EmailStr
    phone: Optional[str] = None


class EducationFormSubmission(BaseModel):
    name: str = Field(min_length=1)
    school: str = Field(min_length=1)
    email: EmailStr
    phone: Optional[str] = None


class ContactFormSubmission(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    company: Optional[str] = None
    phone: Optional[str] = None


class LegacyLeadRecord(BaseModel):
    """A lead from the old per-segment tables or a contact message."""

    kind: Literal["b2b", "education", "contact"]
    name: str
    email: EmailStr
    company: Optional[str] = None
    topic: Optional[str] = None


class LegacyImportRequest(BaseModel):
    records: list[LegacyLeadRecord]


class LegacyImportResult(BaseModel):
    migrated: int
    skipped: int
    errors: int
    total: int


class DemoStatusUpdate(BaseModel):
    status: DemoStatus
    scheduled_at: Optional[datetime] = None


class QuoteStatusUpdate(BaseModel):
    status: QuoteStatus


class DemoApprovalUpdate(BaseModel):
    approved: bool


class ComplianceTagsUpdate(BaseModel):
    tags: list[str]


class TrialLink(BaseModel):
    trial_id: str = Field(min_length=1)


class StatusOverride(BaseModel):
    status: ManualLeadStatus


class LeadRead(BaseModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    organization_name: Optional[str] = None
    job_title: Optional[str] = None
    segment: str
    source: str
    status: str
    demo_requested: bool
    demo_completed: bool
    demo_status: str
    demo_scheduled_at: Optional[datetime] = None
    demo_completed_at: Optional[datetime] = None
    demo_approved: Optional[bool] = None
    quote_requested: bool
    quote_status: str
    quote_requested_at: Optional[datetime] = None
    quote_sent_at: Optional[datetime] = None
    quote_accepted_at: Optional[datetime] = None
    engagement_count: int
    has_urgent_need: bool
    is_decision_maker: bool
    last_contacted_at: Optional[datetime] = None
    linked_trial_ids: list[str] = []
    compliance_tags: list[str] = []
    converted_organization_id: Optional[int] = None
    converted_at: Optional[datetime] = None
    created_at: datetime
    notes: list[NoteRead] = []
    engagements: list[EngagementRead] = []

    model_config = ConfigDict(from_attributes=True)


class LeadActionResult(BaseModel):
    lead: LeadRead
    warnings: list[str] = []
