"""
Shared JSON-over-HTTP client for all upstream providers.

One aiohttp session per process with a fixed total timeout. Numbers in
response bodies are decoded as Decimal so prices and temperatures keep
their exact upstream representation.
"""

import asyncio
import json
import logging
from decimal import Decimal
from typing import Any, Optional

import aiohttp

from attackdash.core.config import settings
from attackdash.services.base import ExternalAPIError, PayloadError

logger = logging.getLogger(__name__)

BODY_PREVIEW_CHARS = 200


class JsonHttpClient:
    """
    Thin GET-only JSON client.

    fetch_json() raises ServiceError subclasses; get_json() is the pipeline
    boundary that logs them and returns None instead.
    """

    def __init__(
        self,
        timeout: float = None,
        headers: Optional[dict] = None,
    ):
        self._session: Optional[aiohttp.ClientSession] = None
        self._timeout = timeout or settings.http_timeout_seconds
        self._headers = headers or {"User-Agent": settings.http_user_agent}

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure we have an active HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout),
                headers=self._headers,
            )
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def fetch_json(
        self,
        url: str,
        params: Optional[dict] = None,
        source: str = "upstream",
    ) -> Any:
        """
        GET a URL and decode its JSON body.

        Raises:
            ExternalAPIError: transport failure, timeout or non-2xx status
            PayloadError: body is not valid text or not valid JSON
        """
        session = await self._ensure_session()

        try:
            async with session.get(url, params=params) as response:
                status = response.status
                content = await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ExternalAPIError(
                source,
                f"request to {url} failed: {e!r}",
                {"url": url},
            ) from e
        except UnicodeDecodeError as e:
            raise PayloadError(
                source,
                f"undecodable body: {e}",
                {"url": url, "status": status, "body": ""},
            ) from e

        logger.info(f"{source} response: {status}, content length: {len(content)}")

        if not 200 <= status < 300:
            raise ExternalAPIError(
                source,
                f"returned {status}",
                {"url": url, "status": status, "body": content[:BODY_PREVIEW_CHARS]},
            )

        try:
            return json.loads(content, parse_float=Decimal)
        except (ValueError, RecursionError) as e:
            raise PayloadError(
                source,
                f"invalid JSON: {e}",
                {"url": url, "status": status, "body": content[:BODY_PREVIEW_CHARS]},
            ) from e

    async def get_json(
        self,
        url: str,
        params: Optional[dict] = None,
        source: str = "upstream",
    ) -> Optional[Any]:
        """GET a URL and decode its JSON body, or None on any failure."""
        try:
            return await self.fetch_json(url, params=params, source=source)
        except ExternalAPIError as e:
            if "status" in e.details:
                logger.warning(f"{e}, response: {e.details['body']}")
            else:
                logger.error(str(e))
        except PayloadError as e:
            logger.error(f"{e}, response: {e.details['body']}")
        return None

    async def ping(self, url: str, source: str = "upstream") -> bool:
        """Check that a URL answers with a 2xx status."""
        session = await self._ensure_session()

        try:
            async with session.get(url) as response:
                return 200 <= response.status < 300
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"{source} ping failed: {e!r}")
            return False


# Singleton instance
_http_client: Optional[JsonHttpClient] = None


def get_http_client() -> JsonHttpClient:
    """Get the shared HTTP client singleton."""
    global _http_client
    if _http_client is None:
        _http_client = JsonHttpClient()
    return _http_client


async def close_http_client() -> None:
    """
    Close the shared HTTP session. Called on application shutdown.

    The client object itself is kept, services hold a reference to it and
    it reopens its session on next use.
    """
    if _http_client is not None:
        await _http_client.close()
