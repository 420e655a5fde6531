"""Outbound mail. Delivery is best-effort: failures are logged and never raised."""

import html
import logging
import smtplib
from email.message import EmailMessage

from tasktracker.config import settings

logger = logging.getLogger(__name__)


def build_welcome_message(name: str, email: str, role: str, phone: str, plain_password: str) -> EmailMessage:
    app_url = settings.APP_BASE_URL
    sender = settings.MAIL_FROM or settings.SMTP_USER

    msg = EmailMessage()
    msg["Subject"] = f"Welcome to Task Tracker, {name}!"
    msg["From"] = f"Task Tracker <{sender}>"
    msg["To"] = email
    msg.set_content(
        f"Hello {name},\n\n"
        "Your account has been successfully created.\n\n"
        "Your Account Details:\n"
        f"Name: {name}\n"
        f"Email: {email}\n"
        f"Temporary password: {plain_password}\n"
        f"Role: {role}\n"
        f"Phone: {phone or '-'}\n\n"
        "Please change your password after your first login. "
        "You can set up a PIN for quick access in your account settings.\n\n"
        f"Sign in at: {app_url}\n"
    )
    esc = html.escape
    msg.add_alternative(
        "<html><body>"
        f"<h2>Welcome to Task Tracker</h2>"
        f"<p>Hello <strong>{esc(name)}</strong>, your account has been successfully created.</p>"
        "<ul>"
        f"<li>Email: {esc(email)}</li>"
        f"<li>Temporary password: <code>{esc(plain_password)}</code></li>"
        f"<li>Role: {esc(role)}</li>"
        f"<li>Phone: {esc(phone or '-')}</li>"
        "</ul>"
        "<p>Please change your password after your first login.</p>"
        f'<p><a href="{esc(app_url)}">Access your dashboard</a></p>'
        "</body></html>",
        subtype="html",
    )
    return msg


def send_message(msg: EmailMessage) -> None:
    with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=settings.MAIL_TIMEOUT_SECONDS) as smtp:
        smtp.starttls()
        if settings.SMTP_USER:
            smtp.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
        smtp.send_message(msg)


def send_welcome_email(name: str, email: str, role: str, phone: str, plain_password: str) -> bool:
    if not settings.MAIL_ENABLED:
        logger.info("[mail] disabled, skipped welcome email for %s", email)
        return False
    try:
        send_message(build_welcome_message(name, email, role, phone, plain_password))
    except (smtplib.SMTPException, OSError) as exc:
        logger.warning("[mail] failed to send welcome email to %s: %s", email, exc)
        return False
    logger.info("[mail] welcome email sent to %s", email)
    return True
