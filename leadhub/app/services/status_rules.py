"""Lead temperature rules.

``derive_status`` is a pure function over a lead's signals; callers decide
whether to apply and persist the result. Rules are evaluated in order and the
first match wins, so a lead eligible for both hot and warm is hot.
"""

from leadhub.app.models.lead import TERMINAL_STATUSES

HOT_ENGAGEMENT_THRESHOLD = 3


def _is_hot(lead) -> bool:
    return bool(
        (lead.demo_requested and lead.demo_completed)
        or lead.quote_requested
        or (lead.engagement_count or 0) >= HOT_ENGAGEMENT_THRESHOLD
        or lead.has_urgent_need
        or lead.is_decision_maker
    )


def _is_warm(lead) -> bool:
    engagement_count = lead.engagement_count or 0
    return bool(
        (lead.demo_requested and not lead.demo_completed)
        or lead.last_contacted_at is not None
        or lead.notes
        or 0 < engagement_count < HOT_ENGAGEMENT_THRESHOLD
    )


def derive_status(lead) -> str:
    if _is_hot(lead):
        return "hot"
    if _is_warm(lead):
        return "warm"
    return "new"


def refresh_status(lead) -> tuple[str, str] | None:
    """Apply the derived status unless the lead is terminal.

    Returns ``(old, new)`` when the status changed, otherwise ``None``.
    """
    if lead.status in TERMINAL_STATUSES:
        return None
    derived = derive_status(lead)
    if derived == lead.status:
        return None
    old_status = lead.status
    lead.status = derived
    return old_status, derived
