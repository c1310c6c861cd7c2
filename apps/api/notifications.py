from __future__ import annotations

import logging
import os
import smtplib
from email.message import EmailMessage
from email.utils import make_msgid
from typing import Optional

from packages.core.reminders.models import SendResult


logger = logging.getLogger("personalweb.email")

DEFAULT_FROM = '"PersonalWeb" <notifications@personalweb.com>'


def _smtp_config() -> dict:
    return {
        "host": os.getenv("SMTP_HOST", ""),
        "port": int(os.getenv("SMTP_PORT", "587")),
        "user": os.getenv("SMTP_USER", ""),
        "password": os.getenv("SMTP_PASSWORD", ""),
        "from_email": os.getenv("SMTP_FROM", DEFAULT_FROM),
        "use_tls": os.getenv("SMTP_USE_TLS", "true").lower() == "true",
    }


def build_message(
    from_email: str, to_email: str, subject: str, html: str, text: Optional[str] = None
) -> EmailMessage:
    message = EmailMessage()
    message["Subject"] = subject
    message["From"] = from_email
    message["To"] = to_email
    message["Message-ID"] = make_msgid(domain="personalweb.com")
    message.set_content(text or subject)
    message.add_alternative(html, subtype="html")
    return message


class SmtpTransport:
    """Sends reminder mail over SMTP, configured from the environment."""

    def __init__(self, config: Optional[dict] = None) -> None:
        self._config = config or _smtp_config()

    def send(
        self, to_email: str, subject: str, html: str, text: Optional[str] = None
    ) -> SendResult:
        config = self._config
        if not config["host"]:
            logger.error("email_not_configured to=%s", to_email)
            return SendResult(
                success=False, error="SMTP is not configured. Set SMTP_HOST."
            )

        try:
            message = build_message(config["from_email"], to_email, subject, html, text)
            with smtplib.SMTP(config["host"], config["port"]) as server:
                if config["use_tls"]:
                    server.starttls()
                if config["user"]:
                    server.login(config["user"], config["password"])
                server.send_message(message)
        except (smtplib.SMTPException, OSError, ValueError) as exc:
            logger.error("email_send_failed to=%s error=%s", to_email, exc)
            return SendResult(success=False, error=str(exc))

        logger.info("email_sent to=%s message_id=%s", to_email, message["Message-ID"])
        return SendResult(success=True, message_id=message["Message-ID"])


def default_transport() -> SmtpTransport:
    return SmtpTransport()
