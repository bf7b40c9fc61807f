"""Lead timeline endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from leadhub.app.db.session import get_db
from leadhub.app.dependencies.auth import Actor, require_capability
from leadhub.app.schemas.timeline import TimelineEventRead
from leadhub.app.services.lead_lifecycle import get_lead

router = APIRouter(prefix="/leads", tags=["timeline"])


@router.get("/{lead_id}/timeline", response_model=list[TimelineEventRead])
async def get_timeline(
    lead_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_capability("leads")),
):
    return get_lead(db, lead_id).timeline
