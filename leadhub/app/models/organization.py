"""Organization (tenant) model for LeadHub."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from leadhub.app.core.time import utc_now
from leadhub.app.db.base_class import Base

ORGANIZATION_TYPES = ("company", "bank", "school", "govt", "other")
ORGANIZATION_SEGMENTS = ("B2B", "B2E")
ORGANIZATION_STATUSES = ("active", "expired", "prospect")


class Organization(Base):
    __tablename__ = "organizations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    type = Column(String(20), nullable=False)
    segment = Column(String(10), nullable=False)
    unique_code = Column(String(20), unique=True, nullable=False, index=True)
    status = Column(String(20), nullable=False, default="prospect")
    primary_contact_name = Column(String(255), nullable=False)
    primary_contact_email = Column(String(255), nullable=False)
    primary_contact_phone = Column(String(50), nullable=True)
    primary_contact_job_title = Column(String(255), nullable=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    owner = relationship("User", foreign_keys=[owner_id])
    members = relationship("User", back_populates="organization", foreign_keys="User.organization_id")
