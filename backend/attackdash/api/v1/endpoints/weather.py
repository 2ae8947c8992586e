"""
Weather API Endpoints
"""

from fastapi import APIRouter, Depends

from attackdash.schemas.weather import WeatherForecast
from attackdash.services.weather import ForecastService, get_forecast_service

router = APIRouter()


@router.get("/forecast", response_model=WeatherForecast)
async def get_forecast(service: ForecastService = Depends(get_forecast_service)):
    """
    Get current conditions, 48h hourly and 7 day forecast.

    Includes sunrise/sunset and the nationwide temperature extremes.
    """
    return await service.get_forecast()
