"""
Quote Service

SOURCE: Yahoo Finance chart API

RESPONSIBILITIES:
    - Fetch 1 day / 5 minute charts per symbol
    - Parse price, previous close and intraday candles
    - Cache quotes per symbol for 5 minutes
    - Fan out over the index and stock tables
"""

from attackdash.services.quotes.interface import QuoteServiceInterface
from attackdash.services.quotes.service import (
    QuoteService,
    get_quote_service,
)
from attackdash.services.quotes.symbols import INDICES, STOCKS, get_display_name

__all__ = [
    "QuoteServiceInterface",
    "QuoteService",
    "get_quote_service",
    "INDICES",
    "STOCKS",
    "get_display_name",
]
