from beanie import Document, Indexed
from pydantic import Field
from datetime import datetime, timezone


class User(Document):
    """Dashboard user.

    There is no signup step: the record is upserted the first time an OTP
    for the address is verified, and `last_login` is refreshed on every
    later verification.
    """

    email: Indexed(str, unique=True)
    verified: bool = False
    last_login: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Settings:
        name = "users"
