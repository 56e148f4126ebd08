"""
Shared fixtures: a fixed "now", the static catalog, recording notifiers and
an API client backed by fakeredis.
"""
from datetime import datetime
from zoneinfo import ZoneInfo

import fakeredis.aioredis
import httpx
import pytest
import pytest_asyncio

from bakery.api.orders import get_now
from bakery.core.config import Settings
from bakery.core.redis_client import set_redis
from bakery.main import app
from bakery.services.cart import Cart
from bakery.services.catalog import get_catalog
from bakery.services.notifiers import NotificationConfigError, NotificationError, get_email_notifier, get_sms_notifier

BAKERY_TZ = ZoneInfo("America/Los_Angeles")
SESSION_ID = "test-session-0001"


class RecordingEmail:
    def __init__(self):
        self.sent: list[dict] = []
        self.fail = False
        self.unconfigured = False

    async def send(self, template_id: str, params: dict[str, str], to_email: str) -> str:
        if self.unconfigured:
            raise NotificationConfigError("Email credentials not configured")
        if self.fail:
            raise NotificationError("EmailJS unreachable: connection refused")
        self.sent.append({"template_id": template_id, "params": params, "to": to_email})
        return f"email-{len(self.sent)}"

    def templates(self) -> list[str]:
        return [m["template_id"] for m in self.sent]


class RecordingSms:
    def __init__(self):
        self.sent: list[dict] = []
        self.fail = False
        self.unconfigured = False

    async def send(self, to: str, body: str, send_at: datetime | None = None) -> str:
        if self.unconfigured:
            raise NotificationConfigError("Twilio credentials not configured")
        if self.fail:
            raise NotificationError("Twilio rejected message (400)")
        self.sent.append({"to": to, "body": body, "send_at": send_at})
        return f"SM{len(self.sent):032d}"


@pytest.fixture
def now() -> datetime:
    # Monday morning
    return datetime(2026, 10, 19, 10, 0, tzinfo=BAKERY_TZ)


@pytest.fixture
def settings() -> Settings:
    return Settings(BAKERY_TIMEZONE="America/Los_Angeles")


@pytest.fixture
def catalog():
    return get_catalog()


@pytest.fixture
def cart(catalog) -> Cart:
    return Cart(catalog)


@pytest.fixture
def email() -> RecordingEmail:
    return RecordingEmail()


@pytest.fixture
def sms() -> RecordingSms:
    return RecordingSms()


@pytest_asyncio.fixture
async def redis_client():
    client = fakeredis.aioredis.FakeRedis(decode_responses=True)
    set_redis(client)
    yield client
    set_redis(None)
    await client.aclose()


@pytest_asyncio.fixture
async def client(redis_client, email, sms, now):
    app.dependency_overrides[get_email_notifier] = lambda: email
    app.dependency_overrides[get_sms_notifier] = lambda: sms
    app.dependency_overrides[get_now] = lambda: now
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://bakery.test",
        headers={"X-Session-Id": SESSION_ID},
    ) as c:
        yield c
    app.dependency_overrides.clear()
