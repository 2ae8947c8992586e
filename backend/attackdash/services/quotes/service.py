"""
Quote Service Implementation

Fetches intraday quotes from Yahoo Finance with a 5 minute cache per
symbol. A failed fetch yields no quote; it is logged and retried on the
next poll.
"""

import logging
from typing import Optional
from zoneinfo import ZoneInfo

from attackdash.core.clock import now_local
from attackdash.core.config import settings
from attackdash.schemas.quotes import StockQuote
from attackdash.services.cache import MemoryCache, get_memory_cache
from attackdash.services.fanout import gather_guarded
from attackdash.services.http_client import JsonHttpClient, get_http_client
from attackdash.services.quotes.interface import QuoteServiceInterface
from attackdash.services.quotes.parsing import parse_chart
from attackdash.services.quotes.symbols import INDICES, STOCKS

logger = logging.getLogger(__name__)

CHART_PARAMS = {"range": "1d", "interval": "5m"}


class QuoteService(QuoteServiceInterface):
    """Yahoo Finance quotes for the dashboard tickers."""

    def __init__(
        self,
        http: JsonHttpClient,
        cache: MemoryCache,
        chart_url: str = None,
        cache_ttl: int = None,
        tz: Optional[ZoneInfo] = None,
    ):
        self._http = http
        self._cache = cache
        self._chart_url = (chart_url or settings.yahoo_chart_url).rstrip("/")
        self._cache_ttl = cache_ttl if cache_ttl is not None else settings.quote_cache_ttl
        self._tz = tz

    @staticmethod
    def _cache_key(symbol: str) -> str:
        return f"quote:{symbol}"

    async def get_quote(self, symbol: str, name: str) -> Optional[StockQuote]:
        """
        Get a quote for one symbol.

        Served from cache for cache_ttl seconds after a successful fetch.
        Failures are not cached.
        """
        key = self._cache_key(symbol)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        doc = await self._http.get_json(
            f"{self._chart_url}/{symbol}",
            params=CHART_PARAMS,
            source=f"Yahoo Finance ({symbol})",
        )
        if doc is None:
            return None

        quote = parse_chart(doc, symbol, name, now_local(self._tz), self._tz)
        if quote is None:
            return None

        logger.debug(f"Got {symbol}: {quote.price} {quote.currency}, {len(quote.intraday_data)} candles")
        self._cache.set(key, quote, self._cache_ttl)
        return quote

    async def _get_many(self, table: dict[str, str]) -> list[StockQuote]:
        """
        Fetch all symbols of a table concurrently.

        Missing quotes are dropped; the rest keep table order.
        """
        results = await gather_guarded(
            *((f"quote {symbol}", self.get_quote(symbol, name), None) for symbol, name in table.items())
        )
        return [q for q in results if q is not None]

    async def get_indices(self) -> list[StockQuote]:
        return await self._get_many(INDICES)

    async def get_stocks(self) -> list[StockQuote]:
        return await self._get_many(STOCKS)

    async def health_check(self) -> bool:
        symbol, name = next(iter(INDICES.items()))
        return await self.get_quote(symbol, name) is not None


# Singleton instance
_quote_service: Optional[QuoteService] = None


def get_quote_service() -> QuoteService:
    """Get the quote service singleton."""
    global _quote_service
    if _quote_service is None:
        _quote_service = QuoteService(get_http_client(), get_memory_cache())
    return _quote_service
