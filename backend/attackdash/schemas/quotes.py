"""
CONTRACT 2: Market Quotes

Output of the quote pipeline, built from the Yahoo Finance chart API.
Prices are Decimal so change values carry no float rounding drift.
"""

from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field, computed_field


class StockCandle(BaseModel):
    """Single intraday candlestick."""

    timestamp: datetime
    open: Decimal = Decimal(0)
    high: Decimal = Decimal(0)
    low: Decimal = Decimal(0)
    close: Decimal
    volume: int = Field(default=0, ge=0)


class StockQuote(BaseModel):
    """Current quote with intraday candles for one symbol."""

    symbol: str
    name: str
    price: Decimal
    previous_close: Decimal
    currency: str = "USD"
    last_updated: datetime
    intraday_data: list[StockCandle] = Field(default_factory=list)

    @computed_field
    @property
    def change(self) -> Decimal:
        return self.price - self.previous_close

    @computed_field
    @property
    def change_percent(self) -> Decimal:
        if self.previous_close == 0:
            return Decimal(0)
        return self.change / self.previous_close * 100

    @computed_field
    @property
    def is_positive(self) -> bool:
        return self.change >= 0
