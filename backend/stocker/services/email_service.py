from stocker.config import get_settings
from stocker.utils.email_templates import render_otp_email, render_welcome_email
from stocker.utils.mailer import send_email


async def send_otp_email(*, email: str, otp: str) -> None:
    """Send the verification code. Raises EmailDeliveryError on transport failure."""
    settings = get_settings()
    subject, html, text = render_otp_email(otp=otp, email=email, minutes=settings.OTP_EXPIRE_MINUTES)
    await send_email(to=email, subject=subject, html=html, text=text)


async def send_welcome_email(*, email: str) -> None:
    settings = get_settings()
    subject, html, text = render_welcome_email(email=email, dashboard_url=settings.DASHBOARD_URL)
    await send_email(to=email, subject=subject, html=html, text=text)
