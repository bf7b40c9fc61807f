"""Lead model for LeadHub.

A lead owns its notes, engagements and timeline; those rows have no lifecycle
outside the lead and are removed with it.
"""

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from leadhub.app.core.time import utc_now
from leadhub.app.db.base_class import Base

LEAD_SEGMENTS = ("B2B", "B2E", "other")
LEAD_SOURCES = ("b2b_form", "b2e_form", "contact_form", "manual")
TERMINAL_STATUSES = frozenset({"converted", "lost"})
DEMO_STATUSES = ("none", "requested", "scheduled", "completed", "no_show")
QUOTE_STATUSES = ("none", "requested", "sent", "accepted", "lost")
COMPLIANCE_TAGS = ("NIS2", "DORA", "GDPR", "ISO27001", "SOC2", "HIPAA", "PCI_DSS")


class Lead(Base):
    __tablename__ = "leads"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(50), nullable=True)
    organization_name = Column(String(255), nullable=True)
    job_title = Column(String(255), nullable=True)
    segment = Column(String(10), nullable=False)
    source = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False, default="new")

    demo_requested = Column(Boolean, nullable=False, default=False)
    demo_completed = Column(Boolean, nullable=False, default=False)
    demo_status = Column(String(20), nullable=False, default="none")
    demo_scheduled_at = Column(DateTime(timezone=True), nullable=True)
    demo_completed_at = Column(DateTime(timezone=True), nullable=True)
    demo_approved = Column(Boolean, nullable=True)

    quote_requested = Column(Boolean, nullable=False, default=False)
    quote_status = Column(String(20), nullable=False, default="none")
    quote_requested_at = Column(DateTime(timezone=True), nullable=True)
    quote_sent_at = Column(DateTime(timezone=True), nullable=True)
    quote_accepted_at = Column(DateTime(timezone=True), nullable=True)

    engagement_count = Column(Integer, nullable=False, default=0)
    has_urgent_need = Column(Boolean, nullable=False, default=False)
    is_decision_maker = Column(Boolean, nullable=False, default=False)
    last_contacted_at = Column(DateTime(timezone=True), nullable=True)

    linked_trial_ids = Column(JSON, nullable=False, default=list)
    compliance_tags = Column(JSON, nullable=False, default=list)

    converted_organization_id = Column(Integer, ForeignKey("organizations.id"), nullable=True)
    converted_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    notes = relationship("Note", back_populates="lead", cascade="all, delete-orphan", order_by="Note.id")
    engagements = relationship("Engagement", back_populates="lead", cascade="all, delete-orphan", order_by="Engagement.id")
    timeline = relationship("TimelineEvent", back_populates="lead", cascade="all, delete-orphan", order_by="TimelineEvent.id")
    converted_organization = relationship("Organization")
