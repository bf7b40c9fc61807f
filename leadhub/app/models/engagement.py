"""Engagement model: a logged call, email, meeting or other touchpoint."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from leadhub.app.core.time import utc_now
from leadhub.app.db.base_class import Base

ENGAGEMENT_TYPES = ("call", "email", "meeting", "other")


class Engagement(Base):
    __tablename__ = "lead_engagements"

    id = Column(Integer, primary_key=True, index=True)
    lead_id = Column(Integer, ForeignKey("leads.id"), nullable=False, index=True)
    type = Column(String(20), nullable=False)
    summary = Column(Text, nullable=True)
    created_by = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    lead = relationship("Lead", back_populates="engagements")
