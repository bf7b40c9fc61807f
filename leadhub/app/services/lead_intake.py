"""Lead capture: manual entry, public forms and legacy lead import.

A channel is the ``(segment, source)`` pair a lead arrived through; within a
channel the email address identifies the lead.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from leadhub.app.models.lead import TERMINAL_STATUSES, Lead
from leadhub.app.services import timeline
from leadhub.app.services.status_rules import refresh_status

logger = logging.getLogger(__name__)

FORM_CHANNELS = {
    "b2b": ("B2B", "b2b_form"),
    "education": ("B2E", "b2e_form"),
    "contact": ("other", "contact_form"),
}
LEGACY_CONTACT_TOPICS = {
    "b2b_demo": ("B2B", "b2b_form"),
    "education": ("B2E", "b2e_form"),
}


@dataclass
class ImportReport:
    migrated: int = 0
    skipped: int = 0
    errors: int = 0

    @property
    def total(self) -> int:
        return self.migrated + self.skipped + self.errors


def find_in_channel(db: Session, email: str, segment: str, source: str, open_only: bool = False) -> Lead | None:
    query = db.query(Lead).filter(
        Lead.email == email.strip().lower(),
        Lead.segment == segment,
        Lead.source == source,
    )
    if open_only:
        query = query.filter(Lead.status.notin_(TERMINAL_STATUSES))
    return query.order_by(Lead.id.desc()).first()


def _new_lead(db: Session, actor_id: int | None, description: str, **fields) -> Lead:
    fields["email"] = fields["email"].strip().lower()
    lead = Lead(status="new", engagement_count=0, linked_trial_ids=[], compliance_tags=[], **fields)
    db.add(lead)
    db.flush()
    timeline.record(db, lead, "created", description, {"source": lead.source, "segment": lead.segment}, actor_id)
    timeline.record_status_change(db, lead, refresh_status(lead), actor_id)
    return lead


def create_lead(db: Session, data, actor_id: int) -> Lead:
    lead = _new_lead(
        db,
        actor_id,
        "Lead created manually",
        name=data.name,
        email=str(data.email),
        phone=data.phone,
        organization_name=data.organization_name,
        job_title=data.job_title,
        segment=data.segment,
        source=data.source,
        has_urgent_need=data.has_urgent_need,
        is_decision_maker=data.is_decision_maker,
    )
    db.commit()
    db.refresh(lead)
    return lead


def submit_form(db: Session, form: str, name: str, email: str, organization_name: str | None, phone: str | None) -> Lead:
    """Capture a public form submission.

    B2B and education forms are demo requests. An open lead in the same
    channel is re-signalled instead of duplicated.
    """
    segment, source = FORM_CHANNELS[form]
    is_demo_request = form in ("b2b", "education")
    existing = find_in_channel(db, email, segment, source, open_only=True)
    if existing is not None:
        if is_demo_request:
            existing.demo_requested = True
            if existing.demo_status == "none":
                existing.demo_status = "requested"
            timeline.record(db, existing, "demo_requested", "Demo requested again via form", {"form": form})
            timeline.record_status_change(db, existing, refresh_status(existing))
        db.commit()
        db.refresh(existing)
        return existing

    lead = _new_lead(
        db,
        None,
        f"Lead captured from {form} form",
        name=name,
        email=email,
        phone=phone or "",
        organization_name=organization_name,
        segment=segment,
        source=source,
        demo_requested=is_demo_request,
        demo_status="requested" if is_demo_request else "none",
    )
    db.commit()
    db.refresh(lead)
    logger.info("Captured %s lead %s from %s form", segment, lead.id, form)
    return lead


def _legacy_channel(record) -> tuple[str, str] | None:
    if record.kind == "b2b":
        return FORM_CHANNELS["b2b"]
    if record.kind == "education":
        return FORM_CHANNELS["education"]
    return LEGACY_CONTACT_TOPICS.get(record.topic or "")


def import_legacy_leads(db: Session, records, actor_id: int) -> ImportReport:
    """Migrate legacy per-segment leads into unified leads, skipping known ones."""
    report = ImportReport()
    for record in records:
        channel = _legacy_channel(record)
        if channel is None:
            report.skipped += 1
            continue
        segment, source = channel
        if find_in_channel(db, str(record.email), segment, source):
            report.skipped += 1
            continue
        try:
            _new_lead(
                db,
                actor_id,
                "Lead migrated from legacy records",
                name=record.name,
                email=str(record.email),
                phone="",
                organization_name=record.company or "",
                segment=segment,
                source=source,
            )
            db.commit()
            report.migrated += 1
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("Error migrating legacy %s lead %s: %s", record.kind, record.email, exc)
            report.errors += 1
    return report
