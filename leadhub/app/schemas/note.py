"""Note and engagement schemas for lead interactions."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

EngagementType = Literal["call", "email", "meeting", "other"]


class NoteCreate(BaseModel):
    text: str = Field(min_length=1)


class NoteRead(BaseModel):
    id: int
    lead_id: int
    text: str
    created_by: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class EngagementCreate(BaseModel):
    type: EngagementType
    summary: Optional[str] = None


class EngagementRead(BaseModel):
    id: int
    type: str
    summary: Optional[str] = None
    created_by: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
