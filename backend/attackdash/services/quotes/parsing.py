"""
Yahoo Finance chart response parsing.

Response shape:
    {chart: {result: [{meta: {regularMarketPrice, chartPreviousClose, currency},
                       timestamp: [...],
                       indicators: {quote: [{open, high, low, close, volume}]}}]}}
"""

import logging
from datetime import datetime
from typing import Any, Optional
from zoneinfo import ZoneInfo

from attackdash.core.clock import from_unix_seconds
from attackdash.schemas.quotes import StockCandle, StockQuote
from attackdash.services.decoding import as_decimal, as_int, as_list, as_str, dig

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = "USD"


def parse_candles(result: Any, tz: Optional[ZoneInfo] = None) -> list[StockCandle]:
    """
    Zip the parallel timestamp/OHLCV arrays into candles.

    Entries without a close are dropped, not zero-filled; other missing
    values default to 0.
    """
    timestamps = as_list(dig(result, "timestamp"))
    quote = dig(result, "indicators", "quote", 0)

    opens = as_list(dig(quote, "open"))
    highs = as_list(dig(quote, "high"))
    lows = as_list(dig(quote, "low"))
    closes = as_list(dig(quote, "close"))
    volumes = as_list(dig(quote, "volume"))

    candles = []
    for i, raw_ts in enumerate(timestamps):
        close = as_decimal(dig(closes, i), default=None)
        seconds = as_int(raw_ts, default=None)
        if close is None or seconds is None:
            continue
        try:
            timestamp = from_unix_seconds(seconds, tz)
        except (OverflowError, OSError, ValueError):
            continue

        candles.append(
            StockCandle(
                timestamp=timestamp,
                open=as_decimal(dig(opens, i)),
                high=as_decimal(dig(highs, i)),
                low=as_decimal(dig(lows, i)),
                close=close,
                volume=max(as_int(dig(volumes, i)), 0),
            )
        )
    return candles


def parse_chart(
    doc: Any,
    symbol: str,
    name: str,
    last_updated: datetime,
    tz: Optional[ZoneInfo] = None,
) -> Optional[StockQuote]:
    """
    Build a quote from a chart response.

    Returns None when the current price or previous close is missing.
    """
    result = dig(doc, "chart", "result", 0)
    meta = dig(result, "meta")

    price = as_decimal(dig(meta, "regularMarketPrice"), default=None)
    previous_close = as_decimal(dig(meta, "chartPreviousClose"), default=None)
    if price is None or previous_close is None:
        error = dig(doc, "chart", "error", "description")
        logger.warning(f"No price in Yahoo chart for {symbol}" + (f": {error}" if error else ""))
        return None

    return StockQuote(
        symbol=symbol,
        name=name,
        price=price,
        previous_close=previous_close,
        currency=as_str(dig(meta, "currency"), DEFAULT_CURRENCY),
        last_updated=last_updated,
        intraday_data=parse_candles(result, tz),
    )
