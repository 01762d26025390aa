import secrets
from datetime import datetime, timedelta, timezone

from beanie.operators import Set
from fastapi import HTTPException

from stocker.config import get_settings
from stocker.models import OTPCode, User


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # Mongo hands datetimes back naive (UTC)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def generate_otp_code() -> str:
    # 6-digit numeric, never a leading zero
    return str(100_000 + secrets.randbelow(900_000))


async def create_otp_request(*, email: str) -> tuple[str, datetime]:
    """
    Generate + upsert the OTP for this email; returns (code, expires_at).
    Any code issued earlier for the same email is overwritten.
    """
    settings = get_settings()
    code = generate_otp_code()
    now = utcnow()
    expires = now + timedelta(minutes=settings.OTP_EXPIRE_MINUTES or 10)

    await OTPCode.find_one(OTPCode.email == email).upsert(
        Set({OTPCode.otp: code, OTPCode.expires_at: expires, OTPCode.created_at: now}),
        on_insert=OTPCode(email=email, otp=code, expires_at=expires, created_at=now),
    )
    return code, expires


async def verify_otp_or_raise(*, email: str, otp: str) -> OTPCode:
    """
    Check the stored OTP for email, in order:
    - record exists
    - not expired (an expired record is left in place)
    - code matches (a mismatch leaves the record untouched)
    Does not consume the code; see consume_otp.
    """
    record = await OTPCode.find_one(OTPCode.email == email)
    if not record:
        raise HTTPException(status_code=400, detail="OTP not found")

    if utcnow() > _as_utc(record.expires_at):
        raise HTTPException(status_code=400, detail="OTP has expired")

    if record.otp != otp:
        raise HTTPException(status_code=400, detail="Invalid OTP")

    return record


async def mark_user_verified(*, email: str) -> None:
    """Create or refresh the user as verified (upsert by email)."""
    now = utcnow()
    await User.find_one(User.email == email).upsert(
        Set({User.verified: True, User.last_login: now}),
        on_insert=User(email=email, verified=True, last_login=now),
    )


async def consume_otp(*, email: str) -> None:
    await OTPCode.find_one(OTPCode.email == email).delete()
