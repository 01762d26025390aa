import base64
from datetime import datetime, timezone

import pytest

from stocker.security import create_session_token, decode_session_token


def _b64(raw: str) -> str:
    return base64.b64encode(raw.encode()).decode()


def test_token_is_base64_of_email_and_millis():
    issued = datetime(2024, 5, 23, 8, 56, 21, tzinfo=timezone.utc)
    token = create_session_token("owner@example.com", issued)
    assert base64.b64decode(token).decode() == f"owner@example.com:{int(issued.timestamp() * 1000)}"

    email, issued_at = decode_session_token(token)
    assert email == "owner@example.com"
    assert issued_at == issued


def test_email_may_contain_colon():
    token = _b64("odd:name@example.com:1700000000000")
    assert decode_session_token(token)[0] == "odd:name@example.com"


@pytest.mark.parametrize(
    "token",
    [None, "", "not base64!", _b64("no-separator"), _b64("a@b.com:abc"), _b64(":1700000000000")],
)
def test_undecodable_tokens(token):
    assert decode_session_token(token) is None
