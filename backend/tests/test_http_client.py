"""
Tests for the shared JSON client, using a fake aiohttp session so no
request leaves the process.
"""

import asyncio
from decimal import Decimal

import aiohttp
import pytest

from attackdash.services.base import ExternalAPIError, PayloadError
from attackdash.services.http_client import JsonHttpClient
from attackdash.services.telemetry import AttackTelemetryService


class FakeResponse:
    def __init__(self, status: int, body):
        self.status = status
        self._body = body

    async def text(self) -> str:
        if isinstance(self._body, bytes):
            return self._body.decode("utf-8")
        return self._body

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


class FakeSession:
    """Answers every GET with one canned response, or raises."""

    closed = False

    def __init__(self, status: int = 200, body: str = "{}", error: Exception = None):
        self.status = status
        self.body = body
        self.error = error
        self.requests = []

    def get(self, url, params=None):
        self.requests.append((url, params))
        if self.error is not None:
            raise self.error
        return FakeResponse(self.status, self.body)

    async def close(self):
        self.closed = True


def client_with(session: FakeSession) -> JsonHttpClient:
    client = JsonHttpClient(timeout=1)
    client._session = session
    return client


@pytest.mark.asyncio
class TestJsonHttpClient:
    async def test_decodes_numbers_as_decimal(self):
        session = FakeSession(body='{"price": 101.55, "volume": 1200}')
        doc = await client_with(session).get_json("https://x.test/q", params={"a": "1"})

        assert doc == {"price": Decimal("101.55"), "volume": 1200}
        assert isinstance(doc["price"], Decimal)
        assert session.requests == [("https://x.test/q", {"a": "1"})]

    async def test_non_2xx_is_none(self):
        assert await client_with(FakeSession(status=503, body="down")).get_json("https://x.test") is None

    async def test_non_2xx_error_details(self):
        client = client_with(FakeSession(status=404, body="x" * 500))

        with pytest.raises(ExternalAPIError) as exc_info:
            await client.fetch_json("https://x.test", source="Yahoo Finance")

        assert exc_info.value.details["status"] == 404
        assert len(exc_info.value.details["body"]) == 200
        assert "Yahoo Finance" in str(exc_info.value)

    async def test_invalid_json(self):
        client = client_with(FakeSession(body="<html>"))

        with pytest.raises(PayloadError):
            await client.fetch_json("https://x.test")
        assert await client.get_json("https://x.test") is None

    async def test_undecodable_body(self):
        client = client_with(FakeSession(body=b'{"data": "\xff\xfe"}'))

        with pytest.raises(PayloadError):
            await client.fetch_json("https://x.test")
        assert await client.get_json("https://x.test") is None

    async def test_deeply_nested_json(self):
        depth = 200_000
        client = client_with(FakeSession(body="[" * depth + "]" * depth))

        with pytest.raises(PayloadError):
            await client.fetch_json("https://x.test")
        assert await client.get_json("https://x.test") is None

    async def test_undecodable_body_leaves_recent_attacks_empty(self):
        client = client_with(FakeSession(body=b'{"data": "\xff\xfe"}'))
        service = AttackTelemetryService(client, base_url="http://loki.test:3100")

        assert await service.get_recent_attacks(5) == []

    async def test_transport_error_is_none(self):
        session = FakeSession(error=aiohttp.ClientConnectionError("refused"))
        assert await client_with(session).get_json("https://x.test") is None

    async def test_timeout_is_none(self):
        session = FakeSession(error=asyncio.TimeoutError())
        assert await client_with(session).get_json("https://x.test") is None

    async def test_ping(self):
        assert await client_with(FakeSession(status=200)).ping("https://x.test/ready")
        assert not await client_with(FakeSession(status=503)).ping("https://x.test/ready")
        session = FakeSession(error=aiohttp.ClientConnectionError("refused"))
        assert not await client_with(session).ping("https://x.test/ready")

    async def test_close(self):
        session = FakeSession()
        client = client_with(session)

        await client.close()

        assert session.closed
        assert client._session is None
