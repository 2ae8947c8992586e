"""
Market Data API Endpoints

Index and stock quotes with intraday candles.
"""

from fastapi import APIRouter, Depends, HTTPException

from attackdash.schemas.quotes import StockQuote
from attackdash.services.quotes import (
    QuoteService,
    get_display_name,
    get_quote_service,
)

router = APIRouter()


@router.get("/indices", response_model=list[StockQuote])
async def get_indices(service: QuoteService = Depends(get_quote_service)):
    """Get quotes for the dashboard indices."""
    return await service.get_indices()


@router.get("/stocks", response_model=list[StockQuote])
async def get_stocks(service: QuoteService = Depends(get_quote_service)):
    """Get quotes for the dashboard stocks."""
    return await service.get_stocks()


@router.get("/quote/{symbol}", response_model=StockQuote)
async def get_quote(symbol: str, service: QuoteService = Depends(get_quote_service)):
    """
    Get quote for a single Yahoo symbol.

    Example: `/markets/quote/ERIC-B.ST`
    """
    symbol = symbol.upper().strip()
    quote = await service.get_quote(symbol, get_display_name(symbol))

    if quote is None:
        raise HTTPException(status_code=404, detail=f"Quote not found for {symbol}")

    return quote
