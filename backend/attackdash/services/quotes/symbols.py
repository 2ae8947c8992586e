"""
Symbols shown on the dashboard, Yahoo ticker → display name.
"""

INDICES = {
    "^GDAXI": "DAX",
    "^OMX": "OMX30",
    "^GSPC": "S&P 500",
    "^IXIC": "NASDAQ",
}

STOCKS = {
    "ELUX-B.ST": "Electrolux B",
    "VOLCAR-B.ST": "Volvo Cars B",
    "ERIC-B.ST": "Ericsson B",
    "HM-B.ST": "H&M B",
    "ATCO-A.ST": "Atlas Copco A",
}


def get_display_name(symbol: str) -> str:
    """Display name for a known symbol, else the symbol itself."""
    symbol = symbol.upper().strip()
    return INDICES.get(symbol) or STOCKS.get(symbol) or symbol
