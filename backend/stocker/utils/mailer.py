import asyncio
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from stocker.config import get_settings
from stocker.utils.logger import get_logger

logger = get_logger("mailer")


class EmailDeliveryError(RuntimeError):
    pass


def _build_message(*, sender: str, to: str, subject: str, html: str, text: str) -> MIMEMultipart:
    msg = MIMEMultipart("alternative")
    msg["From"] = sender
    msg["To"] = to
    msg["Subject"] = subject
    msg.attach(MIMEText(text or "", "plain"))
    msg.attach(MIMEText(html, "html"))
    return msg


def _send_smtp(msg: MIMEMultipart) -> None:
    settings = get_settings()
    if not settings.SMTP_HOST:
        raise EmailDeliveryError("SMTP configuration is missing (SMTP_HOST)")

    try:
        with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=settings.SMTP_TIMEOUT) as client:
            client.ehlo()
            if settings.SMTP_USE_TLS:
                client.starttls()
                client.ehlo()
            if settings.SMTP_USER:
                client.login(settings.SMTP_USER, settings.SMTP_PASSWORD or "")
            client.send_message(msg)
    except (smtplib.SMTPException, OSError) as e:
        raise EmailDeliveryError(f"SMTP error: {e}") from e


async def send_email(*, to: str, subject: str, html: str, text: str = "") -> None:
    """
    Deliver one email with the configured provider.
    - console: log only, nothing leaves the process (dev).
    - smtp: blocking smtplib call pushed to a worker thread.
    Raises EmailDeliveryError on transport failure.
    """
    settings = get_settings()
    provider = (settings.EMAIL_PROVIDER or "console").lower()

    if provider == "console":
        logger.info(f"[EMAIL] to={to} subject={subject!r}\n{text}")
        return
    if provider != "smtp":
        raise EmailDeliveryError(f"Unknown EMAIL_PROVIDER: {settings.EMAIL_PROVIDER}")

    msg = _build_message(sender=settings.EMAIL_FROM, to=to, subject=subject, html=html, text=text)
    await asyncio.to_thread(_send_smtp, msg)
    logger.info(f"Email sent to {to}: {subject!r}")
