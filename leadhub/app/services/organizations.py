"""Organization (tenant) helpers shared by the admin endpoints and lead conversion."""

import secrets

from sqlalchemy import or_
from sqlalchemy.orm import Session

from leadhub.app.core.errors import ConflictError, InvalidArgumentError, NotFoundError
from leadhub.app.db.filters import LIKE_ESCAPE, contains_pattern, escape_like
from leadhub.app.models.organization import (
    ORGANIZATION_SEGMENTS,
    ORGANIZATION_STATUSES,
    ORGANIZATION_TYPES,
    Organization,
)


def _check_choice(value: str | None, choices, field: str) -> None:
    if value is not None and value not in choices:
        raise InvalidArgumentError(f"Invalid organization {field}: {value}")


def find_by_name(db: Session, name: str) -> Organization | None:
    """Case-insensitive exact match on the trimmed name."""
    pattern = escape_like(name.strip())
    return db.query(Organization).filter(Organization.name.ilike(pattern, escape=LIKE_ESCAPE)).first()


def ensure_name_available(db: Session, name: str) -> None:
    if find_by_name(db, name):
        raise ConflictError(
            f'An organization with the name "{name.strip()}" already exists. Please use a different name.'
        )


def generate_unique_code(db: Session, org_type: str) -> str:
    prefix = "SCH" if org_type == "school" else "ORG"
    while True:
        code = f"{prefix}-{secrets.token_hex(4).upper()}"
        if not db.query(Organization.id).filter(Organization.unique_code == code).first():
            return code


def build_organization(db: Session, data, owner_id: int) -> Organization:
    """Validate the name and stage a new organization owned by ``owner_id``.

    The organization is added and flushed but not committed.
    """
    _check_choice(data.type, ORGANIZATION_TYPES, "type")
    _check_choice(data.segment, ORGANIZATION_SEGMENTS, "segment")
    ensure_name_available(db, data.name)
    contact = data.primary_contact
    organization = Organization(
        name=data.name.strip(),
        type=data.type,
        segment=data.segment,
        unique_code=generate_unique_code(db, data.type),
        status="prospect",
        primary_contact_name=contact.name,
        primary_contact_email=str(contact.email).lower(),
        primary_contact_phone=contact.phone,
        primary_contact_job_title=contact.job_title,
        owner_id=owner_id,
    )
    db.add(organization)
    db.flush()
    return organization


def create_organization(db: Session, data, owner_id: int) -> Organization:
    organization = build_organization(db, data, owner_id)
    db.commit()
    db.refresh(organization)
    return organization


def get_organization(db: Session, organization_id: int) -> Organization:
    organization = db.query(Organization).filter(Organization.id == organization_id).first()
    if not organization:
        raise NotFoundError("Organization not found")
    return organization


def get_by_code(db: Session, code: str) -> Organization:
    organization = db.query(Organization).filter(Organization.unique_code == code.strip().upper()).first()
    if not organization:
        raise NotFoundError("Organization not found")
    return organization


def search_organizations(
    db: Session,
    search: str | None = None,
    segment: str | None = None,
    status: str | None = None,
    skip: int = 0,
    limit: int = 50,
) -> list[Organization]:
    _check_choice(segment, ORGANIZATION_SEGMENTS, "segment")
    _check_choice(status, ORGANIZATION_STATUSES, "status")
    query = db.query(Organization)
    if segment:
        query = query.filter(Organization.segment == segment)
    if status:
        query = query.filter(Organization.status == status)
    if search:
        pattern = contains_pattern(search)
        query = query.filter(
            or_(
                Organization.name.ilike(pattern, escape=LIKE_ESCAPE),
                Organization.primary_contact_name.ilike(pattern, escape=LIKE_ESCAPE),
                Organization.primary_contact_email.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )
    return query.order_by(Organization.created_at.desc(), Organization.id.desc()).offset(skip).limit(limit).all()
