"""
Forecast Service

SOURCES: SMHI point forecast, SMHI observations, sunrise-sunset.org

RESPONSIBILITIES:
    - Parse hourly steps and derive current conditions
    - Summarize steps into daily forecasts
    - Find the nationwide warmest and coldest stations
    - Cache the composed forecast for 30 minutes
"""

from attackdash.services.weather.interface import ForecastServiceInterface
from attackdash.services.weather.service import (
    ForecastService,
    get_forecast_service,
)

__all__ = [
    "ForecastServiceInterface",
    "ForecastService",
    "get_forecast_service",
]
