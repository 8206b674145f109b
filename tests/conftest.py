import os

os.environ.setdefault("BOT_TOKEN", "test:token")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("RATE_LIMIT", "3/minute")

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import AsyncClient, ASGITransport

from tamapet import clock, main, validate
from tamapet.config import GameRules
from tamapet.service import PetService

INTERVAL = 3600


class FakeClock:
    def __init__(self, t: int = 0):
        self.t = t

    def __call__(self) -> int:
        return self.t

    def advance(self, seconds: int) -> int:
        self.t += seconds
        return self.t


# ─── fixture: fresh in-memory service per test ─────────────────────────
@pytest.fixture
def rules():
    return GameRules(decay_interval=INTERVAL)


@pytest.fixture
def service(rules):
    return PetService(rules, xp_per_level=50)


@pytest.fixture
def events(service):
    seen = []
    service.bus.subscribe(seen.append)
    return seen


@pytest.fixture(autouse=True)
def stub_service(monkeypatch, service):
    monkeypatch.setattr(main, "pets", service)
    yield service


# ─── fixture: pin the clock ────────────────────────────────────────────
@pytest.fixture(autouse=True)
def fake_clock(monkeypatch):
    fc = FakeClock(1_000_000)
    monkeypatch.setattr(clock, "now", fc)
    yield fc


# ─── sync TestClient (simple) ──────────────────────────────────────────
@pytest.fixture
def client():
    return TestClient(main.app)


# ─── async client ──────────────────────────────────────────────────────
@pytest_asyncio.fixture
async def async_client():
    transport = ASGITransport(app=main.app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture(autouse=True)
def bypass_init_data(monkeypatch):
    """
    Replace tamapet.validate.caller_id with a stub that
    trusts whatever comes in and uses the raw initData as the user id.
    """

    def fake_caller_id(raw: str, bot_token: str, *, lifetime: int = 3600):
        return raw

    monkeypatch.setattr(validate, "caller_id", fake_caller_id)
    yield
