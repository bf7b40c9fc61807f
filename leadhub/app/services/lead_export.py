"""CSV export of leads for audit reporting."""

import csv
import io

from leadhub.app.core.time import ensure_utc
from leadhub.app.models.lead import Lead

EXPORT_FIELDS = [
    "ID",
    "Name",
    "Email",
    "Phone",
    "Organization",
    "Job Title",
    "Segment",
    "Source",
    "Status",
    "Demo Status",
    "Quote Status",
    "Engagement Count",
    "Urgent Need",
    "Decision Maker",
    "Last Contacted",
    "Compliance Tags",
    "Linked Trials",
    "Notes",
    "Engagements",
    "Converted Organization",
    "Converted At",
    "Created At",
]


FORMULA_PREFIXES = ("=", "+", "-", "@", "\t", "\r")


def _iso(value) -> str:
    return ensure_utc(value).isoformat() if value else ""


def _safe_cell(value):
    """Neutralize text a spreadsheet would evaluate as a formula."""
    if isinstance(value, str) and value.startswith(FORMULA_PREFIXES):
        return "'" + value
    return value


def lead_to_row(lead: Lead) -> dict:
    row = {
        "ID": lead.id,
        "Name": lead.name,
        "Email": lead.email,
        "Phone": lead.phone or "",
        "Organization": lead.organization_name or "",
        "Job Title": lead.job_title or "",
        "Segment": lead.segment,
        "Source": lead.source,
        "Status": lead.status,
        "Demo Status": lead.demo_status,
        "Quote Status": lead.quote_status,
        "Engagement Count": lead.engagement_count,
        "Urgent Need": "yes" if lead.has_urgent_need else "no",
        "Decision Maker": "yes" if lead.is_decision_maker else "no",
        "Last Contacted": _iso(lead.last_contacted_at),
        "Compliance Tags": ", ".join(lead.compliance_tags or []),
        "Linked Trials": ", ".join(str(t) for t in lead.linked_trial_ids or []),
        "Notes": " | ".join(note.text for note in lead.notes),
        "Engagements": " | ".join(
            f"{e.type}: {e.summary}" if e.summary else e.type for e in lead.engagements
        ),
        "Converted Organization": lead.converted_organization.name if lead.converted_organization else "",
        "Converted At": _iso(lead.converted_at),
        "Created At": _iso(lead.created_at),
    }
    return {key: _safe_cell(value) for key, value in row.items()}


def generate_csv(leads: list[Lead]) -> str:
    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=EXPORT_FIELDS, quoting=csv.QUOTE_ALL)
    writer.writeheader()
    for lead in leads:
        writer.writerow(lead_to_row(lead))
    return output.getvalue()
