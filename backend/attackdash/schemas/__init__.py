"""
AttackDash Schema Contracts

View models returned by the three data pipelines.
These are the authoritative interfaces between the services and the API.
"""

from attackdash.schemas.attacks import (
    AttackStats,
    CountryAttackCount,
    MapMarker,
    RecentAttack,
    TelemetryDiagnostics,
)
from attackdash.schemas.quotes import (
    StockCandle,
    StockQuote,
)
from attackdash.schemas.weather import (
    CurrentWeather,
    DailyForecast,
    HourlyForecast,
    SunData,
    TemperatureExtremes,
    WeatherForecast,
)

__all__ = [
    # Attacks
    "AttackStats",
    "CountryAttackCount",
    "MapMarker",
    "RecentAttack",
    "TelemetryDiagnostics",
    # Quotes
    "StockCandle",
    "StockQuote",
    # Weather
    "CurrentWeather",
    "DailyForecast",
    "HourlyForecast",
    "SunData",
    "TemperatureExtremes",
    "WeatherForecast",
]
