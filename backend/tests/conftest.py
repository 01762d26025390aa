import os
import tempfile

# Logger creates LOG_DIR at import time, so env must be set before any stocker import
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="stocker-logs-"))
os.environ["PRODUCT_SOURCE"] = "static"
os.environ["EMAIL_PROVIDER"] = "console"
os.environ["MONGODB_URI"] = "mongodb://localhost:27017/stocker_test"

import pytest
from beanie import init_beanie
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from stocker.main import app
from stocker.models import OTPCode, User
from stocker.schemas import Product
from stocker.services import auth_service
from stocker.services.notification_service import bus
from stocker.services.product_source import (
    BUNDLED_PRODUCTS_FILE,
    StaticProductSource,
    get_product_source,
)


class MailRecorder:
    """Stands in for the outbound mail functions of auth_service."""

    def __init__(self):
        self.otp_sent = []  # (email, code)
        self.welcomed = []
        self.fail_otp = False
        self.fail_welcome = False

    async def send_otp_email(self, *, email, otp):
        if self.fail_otp:
            raise RuntimeError("smtp down")
        self.otp_sent.append((email, otp))

    async def send_welcome_email(self, *, email):
        if self.fail_welcome:
            raise RuntimeError("smtp down")
        self.welcomed.append(email)

    def last_code(self, email):
        codes = [code for to, code in self.otp_sent if to == email]
        return codes[-1] if codes else None


@pytest.fixture
async def db():
    client = AsyncMongoMockClient()
    database = client["stocker_test"]
    await init_beanie(database=database, document_models=[OTPCode, User])
    yield database


@pytest.fixture
def mail(monkeypatch):
    recorder = MailRecorder()
    monkeypatch.setattr(auth_service, "send_otp_email", recorder.send_otp_email)
    monkeypatch.setattr(auth_service, "send_welcome_email", recorder.send_welcome_email)
    return recorder


@pytest.fixture(autouse=True)
def clear_toasts():
    bus.remove()
    yield
    bus.remove()


@pytest.fixture
def static_source():
    return StaticProductSource(BUNDLED_PRODUCTS_FILE)


@pytest.fixture
async def client(db, mail, static_source):
    app.dependency_overrides[get_product_source] = lambda: static_source
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def auth_headers(client, mail):
    email = "owner@example.com"
    await client.post("/auth/send-otp", json={"email": email})
    resp = await client.post("/auth/verify-otp", json={"email": email, "otp": mail.last_code(email)})
    return {"Authorization": f"Bearer {resp.json()['token']}"}


def _product(id, **fields) -> Product:
    data = {
        "title": f"Product {id}",
        "category": "beauty",
        "price": 10.0,
        "stock": 50,
        "rating": 4.0,
        "brand": "Acme",
        "sku": f"SKU{id:04d}",
        "availabilityStatus": "In Stock",
    }
    data.update(fields)
    return Product(id=id, **data)


@pytest.fixture
def make_product():
    return _product
