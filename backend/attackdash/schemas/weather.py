"""
CONTRACT 3: Weather Forecast

Output of the forecast pipeline, built from SMHI and sunrise-sunset.org.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, computed_field


class CurrentWeather(BaseModel):
    """Conditions at the first forecast step."""

    temperature: Decimal = Decimal(0)
    wind_speed: Decimal = Decimal(0)
    humidity: int = 0
    description: str = ""
    icon: str = ""
    precipitation: Decimal = Decimal(0)
    cloud_cover: int = Field(default=0, description="Percent")


class HourlyForecast(BaseModel):
    time: datetime
    temperature: Decimal = Decimal(0)
    precipitation: Decimal = Decimal(0)
    wind_speed: Decimal = Decimal(0)
    cloud_cover: int = Field(default=0, description="Eighths (octas)")
    weather_symbol: int = 0


class DailyForecast(BaseModel):
    date: date
    min_temp: Decimal
    max_temp: Decimal
    total_precipitation: Decimal
    avg_wind_speed: int
    icon: str
    description: str


class SunData(BaseModel):
    sunrise: Optional[datetime] = None
    sunset: Optional[datetime] = None

    @computed_field
    @property
    def day_length(self) -> Optional[timedelta]:
        if self.sunrise is None or self.sunset is None:
            return None
        return self.sunset - self.sunrise


class TemperatureExtremes(BaseModel):
    """Warmest and coldest reporting stations nationwide."""

    warmest_station: str = ""
    warmest_temp: Decimal = Decimal(0)
    coldest_station: str = ""
    coldest_temp: Decimal = Decimal(0)


class WeatherForecast(BaseModel):
    current: CurrentWeather = Field(default_factory=CurrentWeather)
    hourly_forecasts: list[HourlyForecast] = Field(default_factory=list)
    daily_forecasts: list[DailyForecast] = Field(default_factory=list)
    sun: SunData = Field(default_factory=SunData)
    temperature_extremes: Optional[TemperatureExtremes] = None
    last_updated: datetime
