"""Timeline services for recording lead events."""

from sqlalchemy.orm import Session

from leadhub.app.core.time import utc_now
from leadhub.app.models.lead import Lead
from leadhub.app.models.timeline import TimelineEvent

MAX_TIMELINE_ENTRIES = 100

EVENT_TYPES = frozenset(
    {
        "created",
        "status_changed",
        "demo_requested",
        "demo_scheduled",
        "demo_completed",
        "demo_no_show",
        "demo_approved",
        "demo_rejected",
        "quote_requested",
        "quote_sent",
        "quote_accepted",
        "quote_lost",
        "note_added",
        "engagement_logged",
        "trial_linked",
        "converted",
    }
)


def record(
    db: Session,
    lead: Lead,
    event_type: str,
    description: str,
    metadata: dict | None = None,
    actor_id: int | None = None,
) -> TimelineEvent:
    """Append an event to the lead timeline, keeping only the newest entries.

    The event is flushed with the lead; committing is left to the caller so the
    mutation and its audit entry land in the same transaction.
    """
    if event_type not in EVENT_TYPES:
        raise ValueError(f"Unknown timeline event type: {event_type}")
    event = TimelineEvent(
        event_type=event_type,
        description=description,
        event_metadata=dict(metadata or {}),
        created_by=actor_id,
        created_at=utc_now(),
    )
    lead.timeline.append(event)
    overflow = len(lead.timeline) - MAX_TIMELINE_ENTRIES
    if overflow > 0:
        # delete-orphan cascade removes the evicted rows
        del lead.timeline[:overflow]
    db.add(lead)
    db.flush()
    return event


def record_status_change(db: Session, lead: Lead, change: tuple[str, str] | None, actor_id: int | None = None) -> None:
    if change is None:
        return
    old_status, new_status = change
    record(
        db,
        lead,
        "status_changed",
        f"Status changed from {old_status} to {new_status}",
        {"from": old_status, "to": new_status},
        actor_id,
    )
