"""
Tests for the weather pipeline: SMHI symbol table, daily summary,
point-forecast parsing, sun data, station extremes and the caching
forecast service.
"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from attackdash.schemas.weather import HourlyForecast, SunData
from attackdash.services.weather import ForecastService
from attackdash.services.weather.conditions import (
    FALLBACK_ICON,
    RAIN,
    SUN,
    describe_weather,
    dominant_weather,
    weather_icon,
)
from attackdash.services.weather.parsing import (
    MAX_DAILY,
    MAX_HOURLY,
    find_temperature_extremes,
    parse_point_forecast,
    parse_sun_data,
    parse_time_series,
)
from fakes import FakeHttp

START = datetime(2024, 6, 10, 12, 0, tzinfo=timezone.utc)


def step(time, t="15.2", ws="3", pmean="0", tcc=4, symbol=3, r=70):
    """One SMHI time step; numbers are Decimal or int as the HTTP client decodes them."""
    return {
        "validTime": time.strftime("%Y-%m-%dT%H:%M:%SZ"),
        "parameters": [
            {"name": "t", "levelType": "hl", "level": 2, "unit": "Cel", "values": [Decimal(t)]},
            {"name": "ws", "values": [Decimal(ws)]},
            {"name": "pmean", "values": [Decimal(pmean)]},
            {"name": "tcc_mean", "values": [tcc]},
            {"name": "Wsymb2", "values": [symbol]},
            {"name": "r", "values": [r]},
        ],
    }


def series(*steps):
    return {"approvedTime": "2024-06-10T11:00:00Z", "timeSeries": list(steps)}


def hours(*cloud, precipitation="0"):
    return [
        HourlyForecast(time=START, cloud_cover=c, precipitation=Decimal(precipitation))
        for c in cloud
    ]


def observations(*stations):
    return {"station": [{"name": name, "value": values} for name, values in stations]}


SUN_DOC = {
    "results": {
        "sunrise": "2024-06-10T01:35:12+00:00",
        "sunset": "2024-06-10T20:01:40+00:00",
    },
    "status": "OK",
}


class TestConditions:
    def test_known_codes(self):
        assert describe_weather(1) == "Clear sky"
        assert weather_icon(1) == SUN
        assert describe_weather(21) == "Thunder"
        assert weather_icon(18) == RAIN

    def test_unknown_code_falls_back(self):
        assert describe_weather(0) == "Unknown"
        assert describe_weather(99) == "Unknown"
        assert weather_icon(99) == FALLBACK_ICON

    def test_rain_wins_regardless_of_cloud(self):
        day = hours(0, 0, 0) + hours(0, precipitation="1.1")
        assert dominant_weather(day) == 8

    def test_exactly_one_mm_is_not_rain(self):
        assert dominant_weather(hours(0, precipitation="1")) == 1

    def test_cloud_cover_thresholds(self):
        assert dominant_weather(hours(0, 0)) == 1
        assert dominant_weather(hours(4, 4)) == 3
        assert dominant_weather(hours(7, 7)) == 6

    def test_thresholds_are_strict(self):
        assert dominant_weather(hours(3, 3)) == 1
        assert dominant_weather(hours(6, 6)) == 3
        assert dominant_weather(hours(6, 7)) == 6


class TestParseTimeSeries:
    def test_steps_in_source_order(self, utc):
        later = START + timedelta(hours=1)
        hourly, humidity = parse_time_series(series(step(START, t="15.2"), step(later, t="-1.5", r=40)), utc)

        assert [h.time for h in hourly] == [START, later]
        assert hourly[0].temperature == Decimal("15.2")
        assert hourly[1].temperature == Decimal("-1.5")
        assert hourly[0].cloud_cover == 4
        assert hourly[0].weather_symbol == 3
        assert humidity == 70

    def test_unparseable_time_is_skipped(self, utc):
        bad = step(START)
        bad["validTime"] = "not a time"
        hourly, _ = parse_time_series(series(bad, step(START)), utc)
        assert len(hourly) == 1

    def test_missing_parameters_default(self, utc):
        hourly, humidity = parse_time_series(
            series({"validTime": "2024-06-10T12:00:00Z", "parameters": []}), utc
        )
        assert hourly[0].temperature == 0
        assert hourly[0].weather_symbol == 0
        assert humidity == 0

    def test_empty_document(self):
        assert parse_time_series({}) == ([], 0)


class TestParsePointForecast:
    def test_current_from_first_step(self, utc):
        doc = series(
            step(START, t="18.4", ws="5.2", pmean="0.3", tcc=5, symbol=3, r=65),
            step(START + timedelta(hours=1), tcc=8, symbol=6, r=90),
        )
        current = parse_point_forecast(doc, utc).current

        assert current.temperature == Decimal("18.4")
        assert current.wind_speed == Decimal("5.2")
        assert current.precipitation == Decimal("0.3")
        assert current.cloud_cover == 62
        assert current.humidity == 65
        assert current.description == "Partly cloudy"

    def test_hourly_and_daily_caps(self, utc):
        steps = [step(START + timedelta(hours=4 * i)) for i in range(60)]
        forecast = parse_point_forecast(series(*steps), utc)

        assert len(forecast.hourly) == MAX_HOURLY
        assert len(forecast.daily) == MAX_DAILY
        assert forecast.daily[0].date == date(2024, 6, 10)

    def test_daily_summary(self, utc):
        doc = series(
            step(START, t="10", ws="3", pmean="0.5", tcc=1),
            step(START + timedelta(hours=1), t="14", ws="4", pmean="0.25", tcc=1),
        )
        day = parse_point_forecast(doc, utc).daily[0]

        assert day.min_temp == Decimal("10")
        assert day.max_temp == Decimal("14")
        assert day.total_precipitation == Decimal("0.75")
        assert day.avg_wind_speed == 3
        assert day.description == "Clear sky"

    def test_days_keep_first_seen_order(self, utc):
        tomorrow = START + timedelta(days=1)
        doc = series(step(tomorrow), step(START), step(tomorrow + timedelta(hours=1)))
        daily = parse_point_forecast(doc, utc).daily

        assert [d.date for d in daily] == [date(2024, 6, 11), date(2024, 6, 10)]

    def test_hourly_is_time_ascending(self, utc):
        tomorrow = START + timedelta(days=1)
        doc = series(step(tomorrow, t="20"), step(START, t="10"), step(START + timedelta(hours=1)))
        forecast = parse_point_forecast(doc, utc)

        times = [h.time for h in forecast.hourly]
        assert times == sorted(times)
        assert forecast.current.temperature == Decimal("20")
        assert [d.date for d in forecast.daily] == [date(2024, 6, 11), date(2024, 6, 10)]

    def test_days_group_by_local_date(self):
        late = datetime(2024, 6, 10, 22, 30, tzinfo=timezone.utc)
        daily = parse_point_forecast(series(step(late)), ZoneInfo("Europe/Stockholm")).daily
        assert daily[0].date == date(2024, 6, 11)

    def test_no_steps_is_empty_forecast(self, utc):
        forecast = parse_point_forecast({"timeSeries": []}, utc)
        assert forecast.hourly == []
        assert forecast.daily == []
        assert forecast.current.temperature == 0


class TestSunData:
    def test_parse(self, utc):
        sun = parse_sun_data(SUN_DOC, utc)
        assert sun.sunrise == datetime(2024, 6, 10, 1, 35, 12, tzinfo=timezone.utc)
        assert sun.day_length == timedelta(hours=18, minutes=26, seconds=28)

    def test_missing_values(self):
        sun = parse_sun_data({"results": {"sunrise": "garbage"}})
        assert sun.sunrise is None
        assert sun.day_length is None


class TestTemperatureExtremes:
    def test_latest_value_per_station(self):
        doc = observations(
            ("Stockholm-Observatoriekullen A", [{"date": 1, "value": "30.0"}, {"date": 2, "value": "18.4"}]),
            ("Kiruna Flygplats", [{"date": 2, "value": "3.1"}]),
            ("Lund", [{"date": 2, "value": "24.9"}]),
        )
        extremes = find_temperature_extremes(doc)

        assert extremes.warmest_station == "Lund"
        assert extremes.warmest_temp == Decimal("24.9")
        assert extremes.coldest_station == "Kiruna Flygplats"
        assert extremes.coldest_temp == Decimal("3.1")

    def test_bad_stations_are_skipped(self):
        doc = observations(
            ("No data", []),
            ("Broken", [{"value": "n/a"}]),
            ("Null", None),
            ("Only", [{"value": "-4.5"}]),
        )
        extremes = find_temperature_extremes(doc)
        assert extremes.warmest_station == extremes.coldest_station == "Only"

    def test_no_stations(self):
        assert find_temperature_extremes({"station": []}) is None
        assert find_temperature_extremes(None) is None


def weather_handler(forecast=None, sun=None, obs=None):
    def handler(url, params):
        if "metfcst" in url:
            return forecast
        if "metobs" in url:
            return obs
        if "sunrise" in url:
            return sun
        raise AssertionError(f"unexpected url {url}")

    return handler


@pytest.mark.asyncio
class TestForecastService:
    async def test_composes_all_sources(self, cache, utc):
        http = FakeHttp(
            weather_handler(
                forecast=series(step(START)),
                sun=SUN_DOC,
                obs=observations(("Lund", [{"value": "24.9"}])),
            )
        )
        service = ForecastService(http, cache, latitude=59.44, longitude=18.07, tz=utc)

        forecast = await service.get_forecast()

        assert len(forecast.hourly_forecasts) == 1
        assert forecast.sun.sunrise is not None
        assert forecast.temperature_extremes.warmest_station == "Lund"
        assert forecast.last_updated.tzinfo is not None

        forecast_url = next(url for url, _ in http.calls if "metfcst" in url)
        assert "/lon/18.07/lat/59.44/" in forecast_url
        sun_params = next(params for url, params in http.calls if "sunrise" in url)
        assert sun_params == {"lat": "59.44", "lng": "18.07", "formatted": "0"}

    async def test_failed_sources_use_defaults(self, cache, utc):
        service = ForecastService(FakeHttp(), cache, tz=utc)

        forecast = await service.get_forecast()

        assert forecast.hourly_forecasts == []
        assert forecast.daily_forecasts == []
        assert forecast.sun == SunData()
        assert forecast.temperature_extremes is None

    async def test_one_raising_source_does_not_sink_the_rest(self, cache, utc):
        def handler(url, params):
            if "sunrise" in url:
                raise RuntimeError("boom")
            return weather_handler(forecast=series(step(START)))(url, params)

        forecast = await ForecastService(FakeHttp(handler), cache, tz=utc).get_forecast()

        assert len(forecast.hourly_forecasts) == 1
        assert forecast.sun.sunrise is None

    async def test_forecast_is_cached(self, cache, clock, utc):
        http = FakeHttp(weather_handler(forecast=series(step(START)), sun=SUN_DOC))
        service = ForecastService(http, cache, tz=utc)

        first = await service.get_forecast()
        clock.advance(1799)
        second = await service.get_forecast()

        assert first is second
        assert len(http.calls) == 3

    async def test_extremes_outlive_forecast_refresh(self, cache, clock, utc):
        http = FakeHttp(
            weather_handler(
                forecast=series(step(START)),
                sun=SUN_DOC,
                obs=observations(("Lund", [{"value": "24.9"}])),
            )
        )
        service = ForecastService(http, cache, tz=utc)

        await service.get_forecast()
        clock.advance(1801)
        refreshed = await service.get_forecast()

        observation_calls = [url for url, _ in http.calls if "metobs" in url]
        assert len(observation_calls) == 1
        assert refreshed.temperature_extremes.warmest_station == "Lund"
        assert len([url for url, _ in http.calls if "metfcst" in url]) == 2

    async def test_missing_extremes_are_not_cached(self, cache, clock, utc):
        http = FakeHttp(weather_handler(obs={"station": []}))
        service = ForecastService(http, cache, tz=utc)

        await service.get_forecast()
        clock.advance(1801)
        await service.get_forecast()

        assert len([url for url, _ in http.calls if "metobs" in url]) == 2

    async def test_health_check(self, cache, utc):
        assert await ForecastService(FakeHttp(weather_handler(sun=SUN_DOC)), cache, tz=utc).health_check()
        assert not await ForecastService(FakeHttp(), cache, tz=utc).health_check()
