"""
Forecast Service Interface

Defines the contract for the weather forecast pipeline.
"""

from abc import abstractmethod

from attackdash.services.base import BaseService
from attackdash.schemas.weather import WeatherForecast


class ForecastServiceInterface(BaseService):
    """
    Forecast Service Contract.

    SOURCES:
        - SMHI point forecast (hourly steps for the site)
        - sunrise-sunset.org (today's sunrise and sunset)
        - SMHI observations (latest temperature at every station)

    OUTPUT: WeatherForecast, always complete; a failed source leaves its
    part at the default value.
    """

    @property
    def name(self) -> str:
        return "ForecastService"

    @abstractmethod
    async def get_forecast(self) -> WeatherForecast:
        pass
