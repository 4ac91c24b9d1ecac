"""
Email service — transactional notifications to doctors.

Emails are addressed by template name plus a data bag:

    await send_email("doctor_approved", {
        "subject": "...",
        "to": "doctor@example.com",
        "doctor_name": "Jane Banda",
    })

Templates live in admin_dashboard/templates/email/<name>.html and are
rendered with Jinja2 (autoescaped). Delivery goes over SMTP using the
standard library client, run in a worker thread so the event loop is not
blocked.

Delivery failures never fail the admin action that triggered them: they
are logged and reported back as ``False``. When SMTP_HOST is not configured
the rendered message is logged so it can be sent by hand.
"""

import logging
import smtplib
from datetime import datetime, timezone
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from pathlib import Path

from fastapi.concurrency import run_in_threadpool
from jinja2 import Environment, FileSystemLoader, select_autoescape

from admin_dashboard.config import settings
from admin_dashboard.models.user import User
from admin_dashboard.models.withdrawal import PaymentMethod

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates" / "email"

_env = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    autoescape=select_autoescape(["html"]),
)


def render_template(template: str, data: dict) -> str:
    """
    Render an email template to HTML.

    ``app_url`` and ``recipient`` are always available to templates.

    Raises:
        jinja2.TemplateNotFound: If no template has this name.
    """
    context = {"app_url": settings.MAIN_APP_URL, "recipient": data.get("to"), **data}
    return _env.get_template(f"{template}.html").render(**context)


def _build_message(to: str, subject: str, html: str) -> MIMEMultipart:
    message = MIMEMultipart("alternative")
    message["From"] = settings.EMAIL_FROM
    message["To"] = to
    message["Subject"] = subject
    message.attach(MIMEText(html, "html", "utf-8"))
    return message


def _deliver(message: MIMEMultipart) -> None:
    """Blocking SMTP send; runs in the threadpool."""
    with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=30) as smtp:
        if settings.SMTP_USE_TLS:
            smtp.starttls()
        if settings.SMTP_USERNAME and settings.SMTP_PASSWORD:
            smtp.login(settings.SMTP_USERNAME, settings.SMTP_PASSWORD)
        smtp.send_message(message)


async def send_email(template: str, data: dict) -> bool:
    """
    Render ``template`` with ``data`` and send it to ``data["to"]``.

    Args:
        template: Template name without extension (e.g. "doctor_approved").
        data: Must contain "subject" and "to"; other keys are template fields.

    Returns:
        True if the message was handed to the SMTP server, False otherwise.
    """
    to = data["to"]
    subject = data["subject"]
    html = render_template(template, data)

    if not settings.SMTP_HOST:
        logger.warning("SMTP is not configured; %s email to %s was not sent", template, to)
        logger.info("Unsent email\nTo: %s\nSubject: %s\n%s", to, subject, html)
        return False

    try:
        await run_in_threadpool(_deliver, _build_message(to, subject, html))
    except (smtplib.SMTPException, OSError):
        logger.exception("Failed to send %s email to %s", template, to)
        return False

    logger.info("Sent %s email to %s", template, to)
    return True


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------

async def send_doctor_approved_email(doctor: User) -> bool:
    return await send_email("doctor_approved", {
        "subject": "Welcome to DocAvailable - Your Application Has Been Approved!",
        "to": doctor.email,
        "doctor_name": doctor.name,
    })


async def send_doctor_rejected_email(doctor: User) -> bool:
    return await send_email("doctor_rejected", {
        "subject": "DocAvailable Application Update - Additional Information Required",
        "to": doctor.email,
        "doctor_name": doctor.name,
    })


async def send_withdrawal_completed_email(
    doctor_email: str,
    doctor_name: str,
    amount: float,
    payment_method: str,
    bank_name: str | None = None,
    account_holder_name: str | None = None,
    completed_at: datetime | None = None,
) -> bool:
    completed_at = completed_at or datetime.now(timezone.utc)
    return await send_email("withdrawal_completed", {
        "subject": "Your DocAvailable withdrawal has been processed",
        "to": doctor_email,
        "doctor_name": doctor_name,
        "amount": f"{amount:,.2f}",
        "payment_method": PaymentMethod.label(payment_method),
        "bank_name": bank_name,
        "account_holder_name": account_holder_name,
        "completed_at": completed_at.strftime("%d %B %Y, %H:%M UTC"),
    })
