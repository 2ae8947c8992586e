"""
Forecast Service Implementation

Combines three independent weather sources into one forecast, cached for
30 minutes. The nationwide temperature extremes have their own 1 hour
cache and outlive several forecast refreshes.
"""

import logging
from typing import Optional
from zoneinfo import ZoneInfo

from attackdash.core.clock import now_local
from attackdash.core.config import settings
from attackdash.schemas.weather import SunData, TemperatureExtremes, WeatherForecast
from attackdash.services.cache import MemoryCache, get_memory_cache
from attackdash.services.fanout import gather_guarded
from attackdash.services.http_client import JsonHttpClient, get_http_client
from attackdash.services.weather.interface import ForecastServiceInterface
from attackdash.services.weather.parsing import (
    PointForecast,
    find_temperature_extremes,
    parse_point_forecast,
    parse_sun_data,
)

logger = logging.getLogger(__name__)

FORECAST_CACHE_KEY = "weather_forecast"
EXTREMES_CACHE_KEY = "temperature_extremes"


class ForecastService(ForecastServiceInterface):
    """Weather for the configured site."""

    def __init__(
        self,
        http: JsonHttpClient,
        cache: MemoryCache,
        latitude: float = None,
        longitude: float = None,
        tz: Optional[ZoneInfo] = None,
    ):
        self._http = http
        self._cache = cache
        self._latitude = latitude if latitude is not None else settings.latitude
        self._longitude = longitude if longitude is not None else settings.longitude
        self._tz = tz

    async def get_forecast(self) -> WeatherForecast:
        """
        Get the site forecast.

        On a cache miss the point forecast, sun data and extremes are
        fetched concurrently and composed into a new forecast object.
        """
        cached = self._cache.get(FORECAST_CACHE_KEY)
        if cached is not None:
            return cached

        last_updated = now_local(self._tz)
        point, sun, extremes = await gather_guarded(
            ("SMHI forecast", self._fetch_point_forecast(), PointForecast()),
            ("sunrise/sunset", self._fetch_sun_data(), SunData()),
            ("temperature extremes", self._fetch_temperature_extremes(), None),
        )

        forecast = WeatherForecast(
            current=point.current,
            hourly_forecasts=point.hourly,
            daily_forecasts=point.daily,
            sun=sun,
            temperature_extremes=extremes,
            last_updated=last_updated,
        )

        self._cache.set(FORECAST_CACHE_KEY, forecast, settings.forecast_cache_ttl)
        return forecast

    async def _fetch_point_forecast(self) -> PointForecast:
        url = settings.smhi_forecast_url.format(lon=self._longitude, lat=self._latitude)
        doc = await self._http.get_json(url, source="SMHI forecast")
        if doc is None:
            return PointForecast()
        return parse_point_forecast(doc, self._tz)

    async def _fetch_sun_data(self) -> SunData:
        doc = await self._http.get_json(
            settings.sun_api_url,
            params={"lat": str(self._latitude), "lng": str(self._longitude), "formatted": "0"},
            source="sunrise-sunset",
        )
        if doc is None:
            return SunData()
        return parse_sun_data(doc, self._tz)

    async def _fetch_temperature_extremes(self) -> Optional[TemperatureExtremes]:
        cached = self._cache.get(EXTREMES_CACHE_KEY)
        if cached is not None:
            return cached

        doc = await self._http.get_json(settings.smhi_observations_url, source="SMHI observations")
        extremes = find_temperature_extremes(doc)
        if extremes is None:
            return None

        logger.info(
            f"Temperature extremes: {extremes.warmest_station} {extremes.warmest_temp}, "
            f"{extremes.coldest_station} {extremes.coldest_temp}"
        )
        self._cache.set(EXTREMES_CACHE_KEY, extremes, settings.extremes_cache_ttl)
        return extremes

    async def health_check(self) -> bool:
        sun = await self._fetch_sun_data()
        return sun.sunrise is not None


# Singleton instance
_forecast_service: Optional[ForecastService] = None


def get_forecast_service() -> ForecastService:
    """Get the forecast service singleton."""
    global _forecast_service
    if _forecast_service is None:
        _forecast_service = ForecastService(get_http_client(), get_memory_cache())
    return _forecast_service
