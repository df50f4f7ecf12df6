"""Outbound e-mail delivery over SMTP."""

from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from email.utils import make_msgid
from typing import List, Optional, Sequence, Union

from starlette.concurrency import run_in_threadpool

from meeting_notes.config import settings
from meeting_notes.exceptions import MailError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_SUBJECT = "Meeting Summary"


def normalize_recipients(to: Union[str, Sequence[str], None]) -> List[str]:
    """Turn ``to`` into a list of non-blank addresses.

    Accepts one address, a comma-separated string or a list of addresses.
    """
    if isinstance(to, str):
        candidates = to.split(",")
    elif to:
        candidates = list(to)
    else:
        candidates = []
    return [address.strip() for address in candidates if isinstance(address, str) and address.strip()]


def _has_line_break(value: str) -> bool:
    return "\r" in value or "\n" in value


def build_message(recipients: List[str], subject: Optional[str], body: str) -> EmailMessage:
    sender = settings.EMAIL_FROM
    message = EmailMessage()
    message["From"] = sender
    message["To"] = ", ".join(recipients)
    message["Subject"] = subject.strip() if subject and subject.strip() else DEFAULT_SUBJECT
    domain = sender.rpartition("@")[2] or None
    message["Message-ID"] = make_msgid(domain=domain)
    message.set_content(body)
    return message


def _deliver(message: EmailMessage) -> None:
    if settings.SMTP_USE_SSL:
        server = smtplib.SMTP_SSL(settings.SMTP_HOST, settings.SMTP_PORT)
    else:
        server = smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT)
    with server:
        if not settings.SMTP_USE_SSL:
            server.ehlo()
            if server.has_extn("starttls"):
                server.starttls()
                server.ehlo()
        if settings.SMTP_USER:
            server.login(settings.SMTP_USER, settings.SMTP_PASS)
        server.send_message(message)


async def send_email(
    to: Union[str, Sequence[str], None],
    subject: Optional[str],
    body: Optional[str],
) -> str:
    """Send ``body`` to ``to`` and return the generated Message-ID.

    Raises:
        ValidationError: missing recipients or body, or line breaks in a
            header field; checked before any
            connection is opened.
        MailError: SMTP not configured, or the submission failed.
    """
    recipients = normalize_recipients(to)
    if not recipients or not isinstance(body, str) or not body:
        raise ValidationError("Fields 'to' and 'content' are required.")
    if any(_has_line_break(value) for value in [*recipients, subject or ""]):
        raise ValidationError("Fields 'to' and 'subject' may not contain line breaks.")

    if not settings.SMTP_HOST:
        logger.error("SMTP_HOST is not configured. Cannot send e-mail.")
        raise MailError("E-mail delivery is not configured.")

    try:
        message = build_message(recipients, subject, body)
    except ValueError as e:
        raise ValidationError(f"Invalid e-mail header: {e}") from e
    logger.info(
        "Sending e-mail %s to %d recipient(s) via %s:%s",
        message["Message-ID"], len(recipients), settings.SMTP_HOST, settings.SMTP_PORT,
    )
    try:
        await run_in_threadpool(_deliver, message)
    except (smtplib.SMTPException, OSError) as e:
        logger.error("Mail error: %s", e, exc_info=True)
        raise MailError(str(e) or "Failed to send email") from e

    logger.info("E-mail %s accepted by %s", message["Message-ID"], settings.SMTP_HOST)
    return message["Message-ID"]
