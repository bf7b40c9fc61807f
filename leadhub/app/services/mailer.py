"""Outgoing mail transport.

``SmtpMailer`` delivers through any SMTP server; ``LogMailer`` only logs the
message and is used whenever ``SMTP_HOST`` is not configured.
"""

import logging
import smtplib
import uuid
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr, make_msgid
from typing import Optional

from leadhub.app.core.settings import get_settings

logger = logging.getLogger(__name__)


@dataclass
class MailResult:
    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None


class Mailer:
    def send(self, to: str, subject: str, html_body: str, text_body: str) -> MailResult:
        raise NotImplementedError


class LogMailer(Mailer):
    def send(self, to: str, subject: str, html_body: str, text_body: str) -> MailResult:
        message_id = f"<{uuid.uuid4().hex}@leadhub.local>"
        logger.info("Email logged (SMTP not configured): to=%s subject=%s message_id=%s", to, subject, message_id)
        return MailResult(success=True, message_id=message_id)


class SmtpMailer(Mailer):
    def __init__(self, settings=None):
        self.settings = settings or get_settings()

    def _build(self, to: str, subject: str, html_body: str, text_body: str) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["From"] = formataddr((self.settings.mail_from_name, self.settings.mail_from))
        msg["To"] = to
        msg["Subject"] = subject
        msg["Message-ID"] = make_msgid(domain=self.settings.mail_from.split("@")[-1])
        msg.attach(MIMEText(text_body, "plain", "utf-8"))
        msg.attach(MIMEText(html_body, "html", "utf-8"))
        return msg

    def send(self, to: str, subject: str, html_body: str, text_body: str) -> MailResult:
        msg = self._build(to, subject, html_body, text_body)
        try:
            with smtplib.SMTP(self.settings.smtp_host, self.settings.smtp_port, timeout=self.settings.smtp_timeout_seconds) as server:
                if self.settings.smtp_use_tls:
                    server.starttls()
                if self.settings.smtp_username and self.settings.smtp_password:
                    server.login(self.settings.smtp_username, self.settings.smtp_password)
                server.sendmail(self.settings.mail_from, [to], msg.as_string())
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("SMTP delivery to %s failed: %s", to, exc)
            return MailResult(success=False, error=str(exc))
        logger.info("Email sent: to=%s subject=%s message_id=%s", to, subject, msg["Message-ID"])
        return MailResult(success=True, message_id=msg["Message-ID"])


def get_mailer() -> Mailer:
    settings = get_settings()
    if settings.smtp_host:
        return SmtpMailer(settings)
    return LogMailer()
