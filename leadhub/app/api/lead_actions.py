"""Lead signal endpoints: demo, quote, approval, compliance, trials and status."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from leadhub.app.db.session import get_db
from leadhub.app.dependencies.auth import Actor, require_capability
from leadhub.app.schemas.lead import (
    ComplianceTagsUpdate,
    DemoApprovalUpdate,
    DemoStatusUpdate,
    LeadActionResult,
    LeadRead,
    QuoteStatusUpdate,
    StatusOverride,
    TrialLink,
)
from leadhub.app.services import lead_lifecycle
from leadhub.app.services.mailer import Mailer, get_mailer

router = APIRouter(prefix="/leads", tags=["leads"])

require_leads = require_capability("leads")


@router.put("/{lead_id}/demo-status", response_model=LeadRead)
async def update_demo_status(
    lead_id: int,
    update: DemoStatusUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_leads),
):
    return lead_lifecycle.set_demo_status(db, lead_id, update.status, actor.id, scheduled_at=update.scheduled_at)


@router.put("/{lead_id}/quote-status", response_model=LeadRead)
async def update_quote_status(
    lead_id: int,
    update: QuoteStatusUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_leads),
):
    return lead_lifecycle.set_quote_status(db, lead_id, update.status, actor.id)


@router.put("/{lead_id}/demo-approval", response_model=LeadActionResult)
def update_demo_approval(
    lead_id: int,
    update: DemoApprovalUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_leads),
    mailer: Mailer = Depends(get_mailer),
):
    lead, warnings = lead_lifecycle.set_demo_approval(db, lead_id, update.approved, actor.id, mailer)
    return LeadActionResult(lead=LeadRead.model_validate(lead), warnings=warnings)


@router.put("/{lead_id}/compliance-tags", response_model=LeadRead)
async def update_compliance_tags(
    lead_id: int,
    update: ComplianceTagsUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_leads),
):
    return lead_lifecycle.set_compliance_tags(db, lead_id, update.tags)


@router.post("/{lead_id}/trials", response_model=LeadRead)
async def link_trial(
    lead_id: int,
    link: TrialLink,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_leads),
):
    return lead_lifecycle.link_trial(db, lead_id, link.trial_id, actor.id)


@router.put("/{lead_id}/status", response_model=LeadRead)
async def override_status(
    lead_id: int,
    update: StatusOverride,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_leads),
):
    return lead_lifecycle.set_status(db, lead_id, update.status, actor.id)
