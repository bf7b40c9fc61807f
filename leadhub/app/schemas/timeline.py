"""Timeline event schemas for lead activity."""

from datetime import datetime
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class TimelineEventRead(BaseModel):
    id: int
    event_type: str
    description: str
    metadata: dict[str, Any] = Field(default_factory=dict, validation_alias=AliasChoices("event_metadata", "metadata"))
    created_by: Optional[int] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
