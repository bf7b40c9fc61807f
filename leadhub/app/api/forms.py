"""Public lead capture forms."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from leadhub.app.db.session import get_db
from leadhub.app.schemas.lead import B2BFormSubmission, ContactFormSubmission, EducationFormSubmission
from leadhub.app.services.lead_intake import submit_form

router = APIRouter(prefix="/forms", tags=["forms"])


def _receipt(lead) -> dict:
    return {"id": lead.id, "status": "received"}


@router.post("/b2b", status_code=status.HTTP_201_CREATED)
def submit_b2b_form(form: B2BFormSubmission, db: Session = Depends(get_db)):
    lead = submit_form(db, "b2b", form.name, str(form.email), form.company, form.phone)
    return _receipt(lead)


@router.post("/education", status_code=status.HTTP_201_CREATED)
def submit_education_form(form: EducationFormSubmission, db: Session = Depends(get_db)):
    lead = submit_form(db, "education", form.name, str(form.email), form.school, form.phone)
    return _receipt(lead)


@router.post("/contact", status_code=status.HTTP_201_CREATED)
def submit_contact_form(form: ContactFormSubmission, db: Session = Depends(get_db)):
    lead = submit_form(db, "contact", form.name, str(form.email), form.company, form.phone)
    return _receipt(lead)
