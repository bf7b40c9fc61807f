"""Organization (tenant) endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from leadhub.app.db.session import get_db
from leadhub.app.dependencies.auth import Actor, require_capability
from leadhub.app.schemas.organization import (
    OrganizationCreate,
    OrganizationDetail,
    OrganizationPublicRead,
    OrganizationRead,
    OrganizationSegment,
)
from leadhub.app.services import organizations

router = APIRouter(prefix="/organizations", tags=["organizations"])

require_organizations = require_capability("organizations")


@router.get("/code/{code}", response_model=OrganizationPublicRead)
def get_organization_by_code(code: str, db: Session = Depends(get_db)):
    return organizations.get_by_code(db, code)


@router.get("", response_model=list[OrganizationRead])
async def list_organizations(
    search: str | None = None,
    segment: OrganizationSegment | None = None,
    status: str | None = None,
    skip: int = 0,
    limit: int = 50,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_organizations),
):
    return organizations.search_organizations(db, search=search, segment=segment, status=status, skip=skip, limit=limit)


@router.post("", response_model=OrganizationRead, status_code=status.HTTP_201_CREATED)
async def create_organization(
    org_in: OrganizationCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_organizations),
):
    return organizations.create_organization(db, org_in, owner_id=actor.id)


@router.get("/{organization_id}", response_model=OrganizationDetail)
async def get_organization(
    organization_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_organizations),
):
    return organizations.get_organization(db, organization_id)
