"""Lead notes and engagement endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from leadhub.app.db.session import get_db
from leadhub.app.dependencies.auth import Actor, require_capability
from leadhub.app.schemas.lead import LeadRead
from leadhub.app.schemas.note import EngagementCreate, EngagementRead, NoteCreate, NoteRead
from leadhub.app.services import lead_lifecycle

router = APIRouter(prefix="/leads", tags=["leads"])

require_leads = require_capability("leads")


@router.post("/{lead_id}/notes", response_model=LeadRead)
async def create_note(
    lead_id: int,
    note_in: NoteCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_leads),
):
    return lead_lifecycle.add_note(db, lead_id, note_in.text, actor.id)


@router.get("/{lead_id}/notes", response_model=list[NoteRead])
async def list_notes(lead_id: int, db: Session = Depends(get_db), actor: Actor = Depends(require_leads)):
    return lead_lifecycle.get_lead(db, lead_id).notes


@router.post("/{lead_id}/engagements", response_model=LeadRead)
async def log_engagement(
    lead_id: int,
    engagement_in: EngagementCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_leads),
):
    return lead_lifecycle.log_engagement(db, lead_id, engagement_in.type, engagement_in.summary, actor.id)


@router.get("/{lead_id}/engagements", response_model=list[EngagementRead])
async def list_engagements(lead_id: int, db: Session = Depends(get_db), actor: Actor = Depends(require_leads)):
    return lead_lifecycle.get_lead(db, lead_id).engagements
