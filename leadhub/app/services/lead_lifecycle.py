"""Lead lifecycle operations.

Every mutation follows the same shape: validate, mutate fields, count the
interaction when it is one, refresh the derived status (terminal statuses are
left alone), record timeline entries and commit once.
"""

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from leadhub.app.core.errors import ConflictError, DependencyFailureError, InvalidArgumentError, NotFoundError
from leadhub.app.core.time import utc_now
from leadhub.app.models.engagement import ENGAGEMENT_TYPES, Engagement
from leadhub.app.models.lead import (
    COMPLIANCE_TAGS,
    DEMO_STATUSES,
    LEAD_SEGMENTS,
    LEAD_SOURCES,
    QUOTE_STATUSES,
    Lead,
)
from leadhub.app.models.note import Note
from leadhub.app.services import timeline
from leadhub.app.services.mailer import Mailer
from leadhub.app.services.notifications import send_demo_decision_email
from leadhub.app.services.status_rules import refresh_status

logger = logging.getLogger(__name__)

DEMO_EVENTS = {
    "requested": "demo_requested",
    "scheduled": "demo_scheduled",
    "completed": "demo_completed",
    "no_show": "demo_no_show",
}
QUOTE_EVENTS = {
    "requested": "quote_requested",
    "sent": "quote_sent",
    "accepted": "quote_accepted",
    "lost": "quote_lost",
}
QUOTE_TIMESTAMPS = {
    "requested": "quote_requested_at",
    "sent": "quote_sent_at",
    "accepted": "quote_accepted_at",
}
MANUAL_STATUSES = ("new", "warm", "hot", "lost")
EDITABLE_FIELDS = (
    "name",
    "email",
    "phone",
    "organization_name",
    "job_title",
    "segment",
    "source",
    "has_urgent_need",
    "is_decision_maker",
)


def get_lead(db: Session, lead_id: int) -> Lead:
    lead = db.query(Lead).filter(Lead.id == lead_id).first()
    if not lead:
        raise NotFoundError("Lead not found")
    return lead


def _require_choice(value: str, choices, field: str) -> None:
    if value not in choices:
        raise InvalidArgumentError(f"Invalid {field}: {value}")


def _count_interaction(lead: Lead) -> None:
    lead.engagement_count = (lead.engagement_count or 0) + 1
    lead.last_contacted_at = utc_now()


def _finish(db: Session, lead: Lead, actor_id: int | None) -> Lead:
    timeline.record_status_change(db, lead, refresh_status(lead), actor_id)
    db.commit()
    db.refresh(lead)
    return lead


def add_note(db: Session, lead_id: int, text: str, actor_id: int) -> Lead:
    text = (text or "").strip()
    if not text:
        raise InvalidArgumentError("Note text is required")
    lead = get_lead(db, lead_id)
    lead.notes.append(Note(text=text, created_by=actor_id, created_at=utc_now()))
    _count_interaction(lead)
    timeline.record(db, lead, "note_added", f"Note added: {text[:40]}", {"length": len(text)}, actor_id)
    return _finish(db, lead, actor_id)


def log_engagement(db: Session, lead_id: int, engagement_type: str, summary: str | None, actor_id: int) -> Lead:
    _require_choice(engagement_type, ENGAGEMENT_TYPES, "engagement type")
    lead = get_lead(db, lead_id)
    lead.engagements.append(
        Engagement(type=engagement_type, summary=summary, created_by=actor_id, created_at=utc_now())
    )
    _count_interaction(lead)
    timeline.record(
        db,
        lead,
        "engagement_logged",
        f"{engagement_type.capitalize()} logged",
        {"type": engagement_type},
        actor_id,
    )
    return _finish(db, lead, actor_id)


def set_demo_status(
    db: Session,
    lead_id: int,
    demo_status: str,
    actor_id: int,
    scheduled_at: datetime | None = None,
) -> Lead:
    _require_choice(demo_status, DEMO_STATUSES, "demo status")
    lead = get_lead(db, lead_id)
    previous = lead.demo_status
    if demo_status == previous and not (demo_status == "scheduled" and scheduled_at):
        return lead

    lead.demo_status = demo_status
    lead.demo_requested = demo_status != "none"
    lead.demo_completed = demo_status == "completed"
    now = utc_now()
    if demo_status == "scheduled":
        lead.demo_scheduled_at = scheduled_at or now
    elif demo_status == "completed":
        lead.demo_completed_at = now

    metadata = {"from": previous, "to": demo_status}
    if demo_status == "none":
        metadata["field"] = "demo_status"
        timeline.record(db, lead, "status_changed", "Demo status reset", metadata, actor_id)
    else:
        _count_interaction(lead)
        if demo_status == "scheduled":
            metadata["scheduled_at"] = lead.demo_scheduled_at.isoformat()
        timeline.record(
            db,
            lead,
            DEMO_EVENTS[demo_status],
            f"Demo status changed from {previous} to {demo_status}",
            metadata,
            actor_id,
        )
    return _finish(db, lead, actor_id)


def set_quote_status(db: Session, lead_id: int, quote_status: str, actor_id: int) -> Lead:
    _require_choice(quote_status, QUOTE_STATUSES, "quote status")
    lead = get_lead(db, lead_id)
    previous = lead.quote_status
    if quote_status == previous:
        return lead

    lead.quote_status = quote_status
    lead.quote_requested = quote_status != "none"
    stamp_field = QUOTE_TIMESTAMPS.get(quote_status)
    if stamp_field:
        setattr(lead, stamp_field, utc_now())

    metadata = {"from": previous, "to": quote_status}
    if quote_status == "none":
        metadata["field"] = "quote_status"
        timeline.record(db, lead, "status_changed", "Quote status reset", metadata, actor_id)
    else:
        _count_interaction(lead)
        timeline.record(
            db,
            lead,
            QUOTE_EVENTS[quote_status],
            f"Quote status changed from {previous} to {quote_status}",
            metadata,
            actor_id,
        )
    return _finish(db, lead, actor_id)


def set_demo_approval(db: Session, lead_id: int, approved: bool, actor_id: int, mailer: Mailer) -> tuple[Lead, list[str]]:
    """Approve or reject a demo request and notify the lead.

    The notice is best effort: a delivery failure is logged and returned as a
    warning, the approval itself is kept. Status is not affected.
    """
    lead = get_lead(db, lead_id)
    lead.demo_approved = approved
    event_type = "demo_approved" if approved else "demo_rejected"
    timeline.record(
        db,
        lead,
        event_type,
        "Demo request approved" if approved else "Demo request rejected",
        {"approved": approved},
        actor_id,
    )
    db.commit()
    db.refresh(lead)

    warnings: list[str] = []
    try:
        send_demo_decision_email(mailer, lead, approved)
    except DependencyFailureError as exc:
        logger.warning("Demo decision notice for lead %s not delivered: %s", lead.id, exc.detail)
        warnings.append(exc.detail)
    return lead, warnings


def set_compliance_tags(db: Session, lead_id: int, tags: list[str]) -> Lead:
    lead = get_lead(db, lead_id)
    accepted: list[str] = []
    for tag in tags:
        if tag in COMPLIANCE_TAGS and tag not in accepted:
            accepted.append(tag)
    lead.compliance_tags = accepted
    db.commit()
    db.refresh(lead)
    return lead


def link_trial(db: Session, lead_id: int, trial_id: str, actor_id: int) -> Lead:
    trial_id = str(trial_id).strip()
    if not trial_id:
        raise InvalidArgumentError("Trial id is required")
    lead = get_lead(db, lead_id)
    linked = list(lead.linked_trial_ids or [])
    if trial_id in linked:
        return lead
    lead.linked_trial_ids = linked + [trial_id]
    _count_interaction(lead)
    timeline.record(db, lead, "trial_linked", f"Trial {trial_id} linked", {"trial_id": trial_id}, actor_id)
    return _finish(db, lead, actor_id)


def set_status(db: Session, lead_id: int, new_status: str, actor_id: int) -> Lead:
    """Explicit status override; ``converted`` is only reachable through conversion."""
    if new_status == "converted":
        raise InvalidArgumentError("Use the convert action to convert a lead")
    _require_choice(new_status, MANUAL_STATUSES, "status")
    lead = get_lead(db, lead_id)
    if lead.status == "converted":
        raise ConflictError("Converted leads cannot change status")
    if lead.status == new_status:
        return lead
    change = (lead.status, new_status)
    lead.status = new_status
    timeline.record_status_change(db, lead, change, actor_id)
    db.commit()
    db.refresh(lead)
    return lead


def update_lead(db: Session, lead_id: int, changes: dict, actor_id: int) -> Lead:
    lead = get_lead(db, lead_id)
    if "segment" in changes and changes["segment"] is not None:
        _require_choice(changes["segment"], LEAD_SEGMENTS, "segment")
    if "source" in changes and changes["source"] is not None:
        _require_choice(changes["source"], LEAD_SOURCES, "source")
    for field in EDITABLE_FIELDS:
        value = changes.get(field)
        if value is None:
            continue
        if field == "email":
            value = value.strip().lower()
        setattr(lead, field, value)
    return _finish(db, lead, actor_id)


def delete_lead(db: Session, lead_id: int) -> None:
    lead = get_lead(db, lead_id)
    db.delete(lead)
    db.commit()
