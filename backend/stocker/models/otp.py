from beanie import Document, Indexed
from pydantic import Field
from datetime import datetime, timezone


class OTPCode(Document):
    """Live one-time code for an email; at most one per address (upserted on every issue)."""
    email: Indexed(str, unique=True)
    otp: str
    expires_at: datetime
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Settings:
        name = "otps"
