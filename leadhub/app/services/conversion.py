"""Lead to organization conversion.

Provisions a tenant and an owner login from a lead. The organization, the
user and the lead update are committed together; the credentials email is sent
only after the commit and never fails the conversion.
"""

import logging
from dataclasses import dataclass, field

from sqlalchemy import func
from sqlalchemy.orm import Session

from leadhub.app.core.errors import ConflictError, DependencyFailureError
from leadhub.app.core.security import generate_password, get_password_hash
from leadhub.app.core.time import utc_now
from leadhub.app.models.lead import Lead
from leadhub.app.models.organization import Organization
from leadhub.app.models.user import User
from leadhub.app.services import timeline
from leadhub.app.services.lead_lifecycle import get_lead
from leadhub.app.services.mailer import Mailer
from leadhub.app.services.notifications import send_credentials_email
from leadhub.app.services.organizations import build_organization, ensure_name_available

logger = logging.getLogger(__name__)

SEGMENT_ROLES = {"B2B": "b2b_user", "B2E": "b2e_user"}


@dataclass
class ConversionResult:
    organization: Organization
    user: User
    lead: Lead
    email_sent: bool = False
    warnings: list[str] = field(default_factory=list)


def provision_owner(db: Session, email: str, name: str | None, segment: str, password: str) -> User:
    """Find or create the owner login and (re)set its credentials."""
    email = email.strip().lower()
    user = db.query(User).filter(func.lower(User.email) == email).first()
    if user is None:
        user = User(email=email, full_name=name, is_active=True)
        db.add(user)
    elif not user.full_name and name:
        user.full_name = name
    user.hashed_password = get_password_hash(password)
    user.is_email_verified = True
    user.role = SEGMENT_ROLES[segment]
    db.flush()
    return user


def convert_lead(db: Session, lead_id: int, org_input, actor_id: int, mailer: Mailer) -> ConversionResult:
    lead = get_lead(db, lead_id)
    if lead.status == "converted":
        raise ConflictError("Lead has already been converted")
    ensure_name_available(db, org_input.name)

    password = generate_password()
    try:
        contact = org_input.primary_contact
        user = provision_owner(db, str(contact.email), contact.name, org_input.segment, password)
        organization = build_organization(db, org_input, owner_id=user.id)
        user.organization_id = organization.id

        previous_status = lead.status
        lead.status = "converted"
        lead.converted_organization_id = organization.id
        lead.converted_at = utc_now()
        timeline.record(
            db,
            lead,
            "converted",
            f"Converted to organization {organization.name}",
            {
                "organization_id": organization.id,
                "user_id": user.id,
                "previous_status": previous_status,
            },
            actor_id,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(lead)
    db.refresh(user)
    db.refresh(organization)
    logger.info("Lead %s converted to organization %s (owner user %s)", lead.id, organization.id, user.id)

    result = ConversionResult(organization=organization, user=user, lead=lead)
    try:
        send_credentials_email(mailer, user, organization, password)
        result.email_sent = True
    except DependencyFailureError as exc:
        logger.warning("Credentials email for organization %s not delivered: %s", organization.id, exc.detail)
        result.warnings.append(exc.detail)
    return result
