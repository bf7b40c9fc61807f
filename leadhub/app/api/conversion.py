"""Lead conversion endpoint."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from leadhub.app.db.session import get_db
from leadhub.app.dependencies.auth import Actor, require_capability
from leadhub.app.schemas.organization import ConversionRead, OrganizationCreate
from leadhub.app.services.conversion import convert_lead
from leadhub.app.services.mailer import Mailer, get_mailer

router = APIRouter(prefix="/leads", tags=["leads"])


@router.post("/{lead_id}/convert", response_model=ConversionRead, status_code=status.HTTP_201_CREATED)
def convert(
    lead_id: int,
    org_in: OrganizationCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_capability("leads", "organizations")),
    mailer: Mailer = Depends(get_mailer),
):
    result = convert_lead(db, lead_id, org_in, actor.id, mailer)
    return ConversionRead.model_validate(result)
