from fastapi import HTTPException

from stocker.models import User
from stocker.security import create_session_token
from stocker.services.email_service import send_otp_email, send_welcome_email
from stocker.services.otp_service import (
    consume_otp,
    create_otp_request,
    mark_user_verified,
    utcnow,
    verify_otp_or_raise,
)
from stocker.utils.logger import get_logger

logger = get_logger("auth_service")


async def request_otp(email: str | None) -> None:
    """Issue (or re-issue) an OTP for the email and mail it out."""
    if not email:
        raise HTTPException(status_code=400, detail="Email is required")

    try:
        code, _ = await create_otp_request(email=email)
        # the stored code stays valid if mailing fails; a resend overwrites it
        await send_otp_email(email=email, otp=code)
    except Exception as e:
        logger.error(f"Send OTP failed for {email}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to send OTP") from e
    logger.info(f"OTP issued for {email}")


async def verify_otp_and_login(*, email: str | None, otp: str | None) -> str:
    """Verify the OTP, mark the user verified, consume the code and return a session token.

    The welcome email is best-effort: its failure is logged and never turns a
    successful verification into an error.
    """
    if not email or not otp:
        raise HTTPException(status_code=400, detail="Email and OTP are required")

    try:
        await verify_otp_or_raise(email=email, otp=otp)
        await mark_user_verified(email=email)
        await consume_otp(email=email)
        token = create_session_token(email, utcnow())
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Verify OTP failed for {email}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to verify OTP") from e

    try:
        await send_welcome_email(email=email)
    except Exception as e:
        logger.warning(f"Welcome email to {email} failed: {e}")

    logger.info(f"OTP verified for {email}")
    return token


async def get_user_or_401(email: str) -> User:
    user = await User.find_one(User.email == email)
    if not user:
        raise HTTPException(status_code=401, detail="Could not validate credentials")
    return user
