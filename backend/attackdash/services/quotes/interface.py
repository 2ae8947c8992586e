"""
Quote Service Interface

Defines the contract for the market quote pipeline.
"""

from abc import abstractmethod
from typing import Optional

from attackdash.services.base import BaseService
from attackdash.schemas.quotes import StockQuote


class QuoteServiceInterface(BaseService):
    """
    Quote Service Contract.

    SOURCE: Yahoo Finance chart API (1 day, 5 minute candles)

    OUTPUT:
        - StockQuote for one symbol, or None when it cannot be fetched
        - StockQuote lists for the fixed index and stock tables
    """

    @property
    def name(self) -> str:
        return "QuoteService"

    @abstractmethod
    async def get_quote(self, symbol: str, name: str) -> Optional[StockQuote]:
        """Get a quote with intraday candles, None on failure."""
        pass

    @abstractmethod
    async def get_indices(self) -> list[StockQuote]:
        pass

    @abstractmethod
    async def get_stocks(self) -> list[StockQuote]:
        pass
