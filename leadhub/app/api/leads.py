"""Lead management endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy import or_
from sqlalchemy.orm import Session

from leadhub.app.db.filters import LIKE_ESCAPE, contains_pattern
from leadhub.app.db.session import get_db
from leadhub.app.dependencies.auth import Actor, require_capability
from leadhub.app.models.lead import Lead
from leadhub.app.schemas.lead import (
    LeadCreate,
    LeadRead,
    LeadSegment,
    LeadSource,
    LeadStatus,
    LeadUpdate,
    LegacyImportRequest,
    LegacyImportResult,
)
from leadhub.app.services import lead_export, lead_intake, lead_lifecycle

router = APIRouter(prefix="/leads", tags=["leads"])

require_leads = require_capability("leads")


def _filtered_query(
    db: Session,
    status: str | None,
    segment: str | None,
    source: str | None,
    search: str | None,
):
    query = db.query(Lead)
    if status:
        query = query.filter(Lead.status == status)
    if segment:
        query = query.filter(Lead.segment == segment)
    if source:
        query = query.filter(Lead.source == source)
    if search:
        for token in (t for t in search.split() if t):
            pattern = contains_pattern(token)
            query = query.filter(
                or_(
                    Lead.name.ilike(pattern, escape=LIKE_ESCAPE),
                    Lead.email.ilike(pattern, escape=LIKE_ESCAPE),
                    Lead.organization_name.ilike(pattern, escape=LIKE_ESCAPE),
                    Lead.phone.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
    return query


@router.post("", response_model=LeadRead)
async def create_lead(lead_in: LeadCreate, db: Session = Depends(get_db), actor: Actor = Depends(require_leads)):
    return lead_intake.create_lead(db, lead_in, actor.id)


@router.get("", response_model=list[LeadRead])
async def list_leads(
    status: LeadStatus | None = None,
    segment: LeadSegment | None = None,
    source: LeadSource | None = None,
    search: str | None = None,
    skip: int = 0,
    limit: int = 50,
    sort_order: str | None = "desc",
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_leads),
):
    sort_order_normalized = (sort_order or "desc").lower()
    if sort_order_normalized not in {"asc", "desc"}:
        raise HTTPException(status_code=400, detail="Invalid sort_order value")
    query = _filtered_query(db, status, segment, source, search)
    if sort_order_normalized == "asc":
        query = query.order_by(Lead.created_at.asc(), Lead.id.asc())
    else:
        query = query.order_by(Lead.created_at.desc(), Lead.id.desc())
    return query.offset(skip).limit(limit).all()


@router.get("/export")
async def export_leads(
    status: LeadStatus | None = None,
    segment: LeadSegment | None = None,
    source: LeadSource | None = None,
    search: str | None = None,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_leads),
):
    leads = _filtered_query(db, status, segment, source, search).order_by(Lead.id.asc()).all()
    return Response(
        content=lead_export.generate_csv(leads),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=leads.csv"},
    )


@router.post("/import", response_model=LegacyImportResult)
async def import_legacy_leads(
    payload: LegacyImportRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_leads),
):
    report = lead_intake.import_legacy_leads(db, payload.records, actor.id)
    return {"migrated": report.migrated, "skipped": report.skipped, "errors": report.errors, "total": report.total}


@router.get("/{lead_id}", response_model=LeadRead)
async def get_lead(lead_id: int, db: Session = Depends(get_db), actor: Actor = Depends(require_leads)):
    return lead_lifecycle.get_lead(db, lead_id)


@router.put("/{lead_id}", response_model=LeadRead)
async def update_lead(
    lead_id: int,
    lead_in: LeadUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_leads),
):
    return lead_lifecycle.update_lead(db, lead_id, lead_in.model_dump(exclude_unset=True), actor.id)


@router.delete("/{lead_id}")
async def delete_lead(lead_id: int, db: Session = Depends(get_db), actor: Actor = Depends(require_leads)):
    lead_lifecycle.delete_lead(db, lead_id)
    return {"status": "deleted", "id": lead_id}
