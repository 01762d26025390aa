from stocker.security import create_session_token, decode_session_token
from stocker.services import auth_service

EMAIL = "owner@example.com"


async def test_send_otp_requires_email(client):
    resp = await client.post("/auth/send-otp", json={})
    assert resp.status_code == 400
    assert resp.json() == {"message": "Email is required", "status_code": 400}


async def test_send_otp(client, mail):
    resp = await client.post("/auth/send-otp", json={"email": EMAIL})
    assert resp.status_code == 200
    assert resp.json() == {"message": "OTP sent successfully"}
    assert mail.last_code(EMAIL) is not None


async def test_send_otp_mail_failure(client, mail):
    mail.fail_otp = True
    resp = await client.post("/auth/send-otp", json={"email": EMAIL})
    assert resp.status_code == 500
    assert resp.json()["message"] == "Failed to send OTP"


async def test_malformed_body_is_400(client):
    resp = await client.post(
        "/auth/send-otp", content="not json", headers={"Content-Type": "application/json"}
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid request"


async def test_verify_otp_flow(client, mail):
    await client.post("/auth/send-otp", json={"email": EMAIL})

    resp = await client.post("/auth/verify-otp", json={"email": EMAIL})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Email and OTP are required"

    code = mail.last_code(EMAIL)
    wrong = "100000" if code != "100000" else "100001"
    resp = await client.post("/auth/verify-otp", json={"email": EMAIL, "otp": wrong})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid OTP"

    resp = await client.post("/auth/verify-otp", json={"email": EMAIL, "otp": code})
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "OTP verified successfully"
    assert decode_session_token(body["token"])[0] == EMAIL

    resp = await client.post("/auth/verify-otp", json={"email": EMAIL, "otp": code})
    assert resp.status_code == 400
    assert resp.json()["message"] == "OTP not found"


async def test_me(client, auth_headers):
    resp = await client.get("/auth/me", headers=auth_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["email"] == EMAIL
    assert body["verified"] is True
    assert body["last_login"]


async def test_me_requires_token(client):
    resp = await client.get("/auth/me")
    assert resp.status_code == 401
    assert resp.json()["message"] == "Could not validate credentials"
    assert resp.headers["www-authenticate"] == "Bearer"

    resp = await client.get("/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert resp.status_code == 401


async def test_me_unknown_user(client):
    token = create_session_token("ghost@example.com")
    resp = await client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401


async def test_healthz(client):
    resp = await client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


async def test_readyz_without_database(client):
    resp = await client.get("/readyz")
    assert resp.status_code == 503
    assert resp.json()["message"] == "Database not ready"


async def test_verify_otp_store_failure(client, mail, monkeypatch):
    await client.post("/auth/send-otp", json={"email": EMAIL})

    async def store_down(*, email):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(auth_service, "consume_otp", store_down)
    resp = await client.post("/auth/verify-otp", json={"email": EMAIL, "otp": mail.last_code(EMAIL)})
    assert resp.status_code == 500
    assert resp.json() == {"message": "Failed to verify OTP", "status_code": 500}
    assert "token" not in resp.json()
