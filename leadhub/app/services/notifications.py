"""Templated notification emails for leads and provisioned tenants."""

import html

from leadhub.app.core.errors import DependencyFailureError
from leadhub.app.core.settings import get_settings
from leadhub.app.models.lead import Lead
from leadhub.app.models.organization import Organization
from leadhub.app.models.user import User
from leadhub.app.services.mailer import Mailer, MailResult


def _wrap_html(title: str, paragraphs: list[str]) -> str:
    body = "".join(f"<p>{p}</p>" for p in paragraphs)
    return (
        "<!DOCTYPE html><html><body style=\"font-family: Arial, sans-serif;\">"
        f"<h2>{html.escape(title)}</h2>{body}"
        "<p>Best regards,<br>The LeadHub Team</p>"
        "</body></html>"
    )


def dispatch(mailer: Mailer, to: str, subject: str, html_body: str, text_body: str) -> MailResult:
    """Send one message, raising ``DependencyFailureError`` when delivery fails."""
    result = mailer.send(to, subject, html_body, text_body)
    if not result.success:
        raise DependencyFailureError(f"Email to {to} could not be sent: {result.error or 'unknown error'}")
    return result


def send_credentials_email(mailer: Mailer, user: User, organization: Organization, password: str) -> MailResult:
    settings = get_settings()
    login_url = f"{settings.frontend_url}/login"
    subject = f"Your Organization Has Been Created - {organization.name}"
    text_body = (
        f"Hello {user.full_name or user.email},\n\n"
        f"Your organization {organization.name} has been created.\n"
        f"Organization code: {organization.unique_code}\n"
        f"Login email: {user.email}\n"
        f"Temporary password: {password}\n\n"
        f"Sign in at {login_url} and change your password after the first login.\n"
    )
    html_body = _wrap_html(
        subject,
        [
            f"Hello {html.escape(user.full_name or user.email)},",
            f"Your organization <strong>{html.escape(organization.name)}</strong> has been created.",
            f"Organization code: <strong>{html.escape(organization.unique_code)}</strong>",
            f"Login email: {html.escape(user.email)}<br>Temporary password: <code>{html.escape(password)}</code>",
            f"Sign in at <a href=\"{html.escape(login_url)}\">{html.escape(login_url)}</a> "
            "and change your password after the first login.",
        ],
    )
    return dispatch(mailer, user.email, subject, html_body, text_body)


def send_demo_decision_email(mailer: Mailer, lead: Lead, approved: bool) -> MailResult:
    if approved:
        subject = "Your demo request has been approved"
        line = "Good news: your demo request has been approved. We will contact you shortly to schedule it."
    else:
        subject = "Update on your demo request"
        line = "Thank you for your interest. Unfortunately we are unable to offer a demo at this time."
    text_body = f"Hello {lead.name},\n\n{line}\n"
    html_body = _wrap_html(subject, [f"Hello {html.escape(lead.name)},", html.escape(line)])
    return dispatch(mailer, lead.email, subject, html_body, text_body)
