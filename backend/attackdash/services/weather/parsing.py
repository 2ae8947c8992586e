"""
SMHI and sunrise-sunset.org response parsing.

Point forecast:  {timeSeries: [{validTime, parameters: [{name, values: [...]}]}]}
Sun data:        {results: {sunrise, sunset}}
Observations:    {station: [{name, value: [{value: "<temp>"}]}]}
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Optional
from zoneinfo import ZoneInfo

from attackdash.core.clock import parse_utc_instant
from attackdash.schemas.weather import (
    CurrentWeather,
    DailyForecast,
    HourlyForecast,
    SunData,
    TemperatureExtremes,
)
from attackdash.services.decoding import as_decimal, as_int, as_list, as_str, dig
from attackdash.services.weather.conditions import (
    describe_weather,
    dominant_weather,
    weather_icon,
)

logger = logging.getLogger(__name__)

MAX_HOURLY = 48
MAX_DAILY = 7
OCTAS = Decimal(8)


@dataclass
class PointForecast:
    """Everything derived from one point-forecast response."""

    current: CurrentWeather = field(default_factory=CurrentWeather)
    hourly: list[HourlyForecast] = field(default_factory=list)
    daily: list[DailyForecast] = field(default_factory=list)


def _parameters(entry: Any) -> dict[str, Decimal]:
    """First value of each named parameter in a time step."""
    values = {}
    for param in as_list(dig(entry, "parameters")):
        name = as_str(dig(param, "name"), None)
        value = as_decimal(dig(param, "values", 0), default=None)
        if name is not None and value is not None:
            values[name] = value
    return values


def parse_time_series(doc: Any, tz: Optional[ZoneInfo] = None) -> tuple[list[HourlyForecast], int]:
    """
    Parse every forecast step in order.

    Returns the steps and the relative humidity of the first step. Steps
    without a parseable validTime are skipped.
    """
    hourly = []
    humidity = 0

    for entry in as_list(dig(doc, "timeSeries")):
        time = parse_utc_instant(as_str(dig(entry, "validTime")), tz)
        if time is None:
            continue

        params = _parameters(entry)
        if not hourly:
            humidity = as_int(params.get("r"))

        hourly.append(
            HourlyForecast(
                time=time,
                temperature=params.get("t", Decimal(0)),
                wind_speed=params.get("ws", Decimal(0)),
                precipitation=params.get("pmean", Decimal(0)),
                cloud_cover=as_int(params.get("tcc_mean")),
                weather_symbol=as_int(params.get("Wsymb2")),
            )
        )

    return hourly, humidity


def current_conditions(first: HourlyForecast, humidity: int) -> CurrentWeather:
    """Current weather from the first forecast step, cloud cover in percent."""
    return CurrentWeather(
        temperature=first.temperature,
        wind_speed=first.wind_speed,
        humidity=humidity,
        precipitation=first.precipitation,
        cloud_cover=int(first.cloud_cover / OCTAS * 100),
        description=describe_weather(first.weather_symbol),
        icon=weather_icon(first.weather_symbol),
    )


def build_daily(hourly: list[HourlyForecast]) -> list[DailyForecast]:
    """
    Group steps by local calendar date and summarize each day.

    Days keep first-seen order; only the first MAX_DAILY are returned.
    """
    days: dict = {}
    for step in hourly:
        days.setdefault(step.time.date(), []).append(step)

    daily = []
    for day, steps in list(days.items())[:MAX_DAILY]:
        code = dominant_weather(steps)
        temperatures = [s.temperature for s in steps]
        daily.append(
            DailyForecast(
                date=day,
                min_temp=min(temperatures),
                max_temp=max(temperatures),
                total_precipitation=sum((s.precipitation for s in steps), Decimal(0)),
                avg_wind_speed=int(sum(s.wind_speed for s in steps) / len(steps)),
                icon=weather_icon(code),
                description=describe_weather(code),
            )
        )
    return daily


def parse_point_forecast(doc: Any, tz: Optional[ZoneInfo] = None) -> PointForecast:
    """
    Current conditions, hourly steps and daily summaries from one response.

    Current conditions come from the first step as sent. The hourly list
    is time-ascending and capped at MAX_HOURLY; days are grouped from the
    unsorted steps in first-seen order.
    """
    hourly, humidity = parse_time_series(doc, tz)
    if not hourly:
        logger.warning("SMHI forecast contained no usable time steps")
        return PointForecast()

    return PointForecast(
        current=current_conditions(hourly[0], humidity),
        hourly=sorted(hourly, key=lambda h: h.time)[:MAX_HOURLY],
        daily=build_daily(hourly),
    )


def parse_sun_data(doc: Any, tz: Optional[ZoneInfo] = None) -> SunData:
    results = dig(doc, "results")
    return SunData(
        sunrise=parse_utc_instant(as_str(dig(results, "sunrise")), tz),
        sunset=parse_utc_instant(as_str(dig(results, "sunset")), tz),
    )


def find_temperature_extremes(doc: Any) -> Optional[TemperatureExtremes]:
    """
    Warmest and coldest station at the latest observation.

    Stations without a parseable latest value are skipped. Returns None
    when no station reported.
    """
    warmest: Optional[tuple[str, Decimal]] = None
    coldest: Optional[tuple[str, Decimal]] = None

    for station in as_list(dig(doc, "station")):
        name = as_str(dig(station, "name"))
        temp = as_decimal(dig(station, "value", -1, "value"), default=None)
        if temp is None:
            continue

        if warmest is None or temp > warmest[1]:
            warmest = (name, temp)
        if coldest is None or temp < coldest[1]:
            coldest = (name, temp)

    if warmest is None:
        return None

    return TemperatureExtremes(
        warmest_station=warmest[0],
        warmest_temp=warmest[1],
        coldest_station=coldest[0],
        coldest_temp=coldest[1],
    )
