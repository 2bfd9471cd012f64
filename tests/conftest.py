from __future__ import annotations

import sys
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Make the storefront package importable when running from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from storefront.app import create_app  # noqa: E402
from storefront.core.config import Settings  # noqa: E402
from storefront.core.rate_limiter import RateLimiter  # noqa: E402
from storefront.db.session import create_engine_for_url  # noqa: E402
from storefront.repositories.memory_storage import MemoryStorage  # noqa: E402
from storefront.repositories.seed import seed_storage  # noqa: E402
from storefront.repositories.sql_repository import SQLStorage  # noqa: E402

ADMIN_USERNAME = "admin@example.com"
ADMIN_PASSWORD = "s3nha-forte"


class StepClock:
    """Deterministic UTC clock: every call is one second after the previous one."""

    def __init__(self) -> None:
        self.current = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


class ManualClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now


def make_settings(**overrides) -> Settings:
    base = Settings(
        app_env="test",
        storage_backend="memory",
        database_url="",
        session_cookie_name="session",
        session_ttl_seconds=3600,
        login_rate_limit=5,
        login_rate_window_seconds=900,
        admin_username=ADMIN_USERNAME,
        admin_password=ADMIN_PASSWORD,
        seed_demo_data=True,
        cors_origins=(),
        trust_proxy_headers=False,
        log_level="WARNING",
    )
    return replace(base, **overrides)


@pytest.fixture(params=["memory", "sql"])
def storage(request, tmp_path):
    """Each contract test runs once per backend."""
    if request.param == "memory":
        yield MemoryStorage(clock=StepClock())
        return
    engine = create_engine_for_url(f"sqlite:///{tmp_path / 'test.db'}")
    sql_storage = SQLStorage(engine, clock=StepClock())
    sql_storage.create_schema()
    yield sql_storage
    engine.dispose()


@pytest.fixture()
def settings() -> Settings:
    return make_settings()


@pytest.fixture()
def limiter_clock() -> ManualClock:
    return ManualClock()


@pytest.fixture()
def app(storage, settings, limiter_clock):
    seed_storage(storage, settings)
    limiter = RateLimiter(settings.login_rate_limit, settings.login_rate_window_seconds, clock=limiter_clock)
    return create_app(settings=settings, storage=storage, login_limiter=limiter)


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def admin_client(client):
    resp = client.post("/api/auth/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200, resp.text
    return client
