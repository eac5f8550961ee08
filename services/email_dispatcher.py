# services/email_dispatcher.py
"""
Contact request email dispatch

Formats a plain-text notification from a validated submission and delivers it
to the business inbox over SMTP:
- Implicit TLS when the configured port is 465
- STARTTLS, verified against the configured host, on any other port
- One connection per message, no pooling and no retry
"""

import asyncio
import logging
from email.message import EmailMessage
from email.utils import formatdate, make_msgid

import aiosmtplib

from config.messages import (
    SITE_DOMAIN, EMAIL_SUBJECT, EMAIL_BANNER, EMAIL_DELIMITER, EMAIL_FOOTER,
)
from config.settings import Settings
from core.errors import MailConfigurationError, DeliveryError
from core.form_validator import Submission

logger = logging.getLogger(__name__)


def build_message_body(submission: Submission) -> str:
    """Render the fixed plain-text notification body"""
    lines = [
        EMAIL_BANNER,
        '',
        f"Customer Name: {submission.full_name}",
        f"Email Address: {submission.contact_email}",
    ]
    if submission.has_phone:
        lines.append(f"Phone Number: {submission.phone_number}")

    lines += [
        '',
        'Service Request Details:',
        EMAIL_DELIMITER,
        submission.request_details,
        EMAIL_DELIMITER,
        '',
        EMAIL_FOOTER,
    ]
    return '\n'.join(lines) + '\n'


def build_message(settings: Settings, submission: Submission) -> EmailMessage:
    """Create the outbound message; the submitter becomes the Reply-To"""
    msg = EmailMessage()
    if settings.mail_username:
        msg['From'] = settings.mail_username
    msg['To'] = settings.recipient_address
    msg['Reply-To'] = submission.contact_email
    msg['Subject'] = EMAIL_SUBJECT.format(name=submission.full_name)
    msg['Date'] = formatdate(localtime=True)
    msg['Message-ID'] = make_msgid(domain=SITE_DOMAIN)
    msg.set_content(build_message_body(submission))
    return msg


async def _async_send_smtp(msg: EmailMessage, settings: Settings) -> None:
    """Open a fresh SMTP session, authenticate and send one message"""
    smtp = aiosmtplib.SMTP(
        hostname=settings.mail_host,
        port=settings.mail_port,
        use_tls=settings.uses_implicit_tls,
        start_tls=False,
    )

    await smtp.connect()
    try:
        if not settings.uses_implicit_tls:
            await smtp.starttls(server_hostname=settings.mail_host)

        if settings.mail_username:
            await smtp.login(settings.mail_username, settings.mail_password)

        await smtp.send_message(msg)
        await smtp.quit()
    finally:
        if smtp.is_connected:
            smtp.close()


def dispatch_email(settings: Settings, submission: Submission) -> None:
    """
    Deliver one contact request email

    Args:
        settings: Runtime configuration with the mail server details
        submission: Already validated form submission

    Raises:
        MailConfigurationError: mail host or recipient is not configured,
            no connection is attempted
        DeliveryError: connection, TLS, authentication or send failure,
            including a message without a sender (SMTP_USER unset)
    """
    if not settings.mail_configured:
        raise MailConfigurationError("mail configuration incomplete")

    msg = build_message(settings, submission)

    # aiosmtplib raises ValueError when the message has no usable sender
    try:
        asyncio.run(_async_send_smtp(msg, settings))
    except (aiosmtplib.SMTPException, OSError, asyncio.TimeoutError, ValueError) as e:
        raise DeliveryError(f"email transmission error: {e}") from e

    logger.info(
        f"Service request email delivered from {submission.full_name} <{submission.contact_email}>"
    )
