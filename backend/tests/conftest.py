"""
pytest configuration and shared fixtures for the AttackDash tests.

Key concern: tests must not reach Loki, Yahoo or SMHI.
We achieve this by:
  1. Handing every service a FakeHttp transport (tests/fakes.py) that
     answers from a handler function and records each call.
  2. Giving caches a ManualClock so TTL expiry is driven by the test.
  3. Overriding the FastAPI service dependencies for API tests.
"""

import os
from zoneinfo import ZoneInfo

import pytest
from httpx import ASGITransport, AsyncClient

# Set env vars BEFORE importing the app so Settings picks them up correctly
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOKI_BASE_URL", "http://loki.test:3100")

from attackdash.services.cache import MemoryCache  # noqa: E402
from fakes import ManualClock  # noqa: E402


@pytest.fixture()
def clock():
    return ManualClock()


@pytest.fixture()
def cache(clock):
    return MemoryCache(clock=clock)


@pytest.fixture()
def utc():
    return ZoneInfo("UTC")


@pytest.fixture()
async def api_client():
    """
    HTTPX async test client wired to the FastAPI app.

    Tests set app.dependency_overrides themselves; they are cleared
    afterwards.
    """
    from attackdash.main import app

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
