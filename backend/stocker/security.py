import base64
import binascii
from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from stocker.utils.logger import get_logger

logger = get_logger("security")

# auto_error=False so a missing header becomes our 401, not FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)

# ------------------------ Session token helpers ------------------------
#
# The session token is base64("<email>:<epoch-millis>"). It is NOT signed:
# anyone holding it can read the email back, and nothing is stored server
# side. The format is kept as-is for compatibility with existing clients.


def create_session_token(email: str, issued_at: Optional[datetime] = None) -> str:
    """Encode email + issuance time (epoch millis) as an opaque token."""
    issued = issued_at or datetime.now(timezone.utc)
    millis = int(issued.timestamp() * 1000)
    return base64.b64encode(f"{email}:{millis}".encode("utf-8")).decode("ascii")


def decode_session_token(token: str | None) -> tuple[str, datetime] | None:
    """Return (email, issued_at), or None when the token cannot be decoded."""
    if not token:
        return None
    try:
        raw = base64.b64decode(token.strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return None

    email, sep, millis = raw.rpartition(":")
    if not sep or not email or not millis.isdigit():
        return None
    try:
        issued_at = datetime.fromtimestamp(int(millis) / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None
    return email, issued_at


async def get_current_email(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """Email carried by the bearer token; 401 when absent or undecodable."""
    decoded = decode_session_token(credentials.credentials if credentials else None)
    if decoded is None:
        logger.debug("Rejected request with missing or malformed session token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return decoded[0]
