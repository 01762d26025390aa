from stocker.constants import ToastVariant
from stocker.services.notification_service import TOAST_LIMIT, NotificationBus


def test_newest_first_and_limited():
    bus = NotificationBus()
    for i in range(5):
        bus.notify(f"toast {i}")
    assert len(bus.toasts) == TOAST_LIMIT
    assert [t.title for t in bus.toasts] == ["toast 4", "toast 3", "toast 2"]


def test_listeners_get_snapshots_until_unsubscribed():
    bus = NotificationBus()
    received = []
    unsubscribe = bus.subscribe(received.append)

    bus.notify("first")
    bus.notify("second", "details", ToastVariant.DESTRUCTIVE)
    assert [len(s) for s in received] == [1, 2]
    assert received[-1][0].variant == ToastVariant.DESTRUCTIVE

    unsubscribe()
    bus.notify("third")
    assert len(received) == 2


def test_failing_listener_does_not_break_others():
    bus = NotificationBus()
    received = []

    def broken(toasts):
        raise RuntimeError("listener bug")

    bus.subscribe(broken)
    bus.subscribe(received.append)
    bus.notify("hello")
    assert len(received) == 1


def test_update_dismiss_remove():
    bus = NotificationBus()
    first = bus.notify("first")
    second = bus.notify("second")

    assert bus.update(first.id, title="renamed").title == "renamed"
    assert bus.update("missing", title="x") is None

    closed = bus.dismiss(first.id)
    assert [t.id for t in closed] == [first.id]
    assert {t.id: t.open for t in bus.toasts} == {first.id: False, second.id: True}

    assert len(bus.dismiss()) == 2
    assert all(not t.open for t in bus.toasts)

    bus.remove(second.id)
    assert [t.id for t in bus.toasts] == [first.id]
    bus.remove()
    assert bus.toasts == []


async def test_notifications_require_token(client):
    await client.post("/auth/send-otp", json={"email": "victim@example.com"})

    resp = await client.get("/notifications")
    assert resp.status_code == 401
    resp = await client.delete("/notifications/1")
    assert resp.status_code == 401


async def test_toasts_never_carry_email(client, auth_headers):
    await client.post("/auth/send-otp", json={"email": "victim@example.com"})

    resp = await client.get("/notifications", headers=auth_headers)
    assert resp.status_code == 200
    toasts = resp.json()
    assert toasts[0]["title"] == "OTP sent"
    assert "@" not in resp.text


async def test_dismiss_drops_toast(client, auth_headers):
    toasts = (await client.get("/notifications", headers=auth_headers)).json()
    assert [t["title"] for t in toasts] == ["Verified", "OTP sent"]
    assert toasts[0]["open"] is True

    resp = await client.delete(f"/notifications/{toasts[0]['id']}", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["open"] is False

    remaining = (await client.get("/notifications", headers=auth_headers)).json()
    assert [t["title"] for t in remaining] == ["OTP sent"]

    resp = await client.delete("/notifications/does-not-exist", headers=auth_headers)
    assert resp.status_code == 404
    assert resp.json()["message"] == "Notification not found"
