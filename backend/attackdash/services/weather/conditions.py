"""
SMHI weather symbols (Wsymb2) and the daily summary heuristic.

The thresholds in dominant_weather() drive which icon a day shows; they
are strict greater-than comparisons and must stay that way.
"""

from decimal import Decimal

from attackdash.schemas.weather import HourlyForecast

SUN = "☀️"
PARTLY_CLOUDY = "⛅"
CLOUD = "☁️"
FOG = "🌫️"
RAIN = "🌧️"
THUNDER = "⛈️"
SLEET = "🌨️"
SNOW = "❄️"
FALLBACK_ICON = "🌤️"

UNKNOWN_DESCRIPTION = "Unknown"

# Wsymb2 → (description, icon)
WEATHER_CODES: dict[int, tuple[str, str]] = {
    1: ("Clear sky", SUN),
    2: ("Nearly clear", SUN),
    3: ("Partly cloudy", PARTLY_CLOUDY),
    4: ("Partly cloudy", PARTLY_CLOUDY),
    5: ("Cloudy", CLOUD),
    6: ("Overcast", CLOUD),
    7: ("Fog", FOG),
    8: ("Light rain", RAIN),
    9: ("Moderate rain", RAIN),
    10: ("Heavy rain", RAIN),
    11: ("Thunderstorm", THUNDER),
    12: ("Light sleet", SLEET),
    13: ("Moderate sleet", SLEET),
    14: ("Heavy sleet", SLEET),
    15: ("Light snow", SNOW),
    16: ("Moderate snow", SNOW),
    17: ("Heavy snow", SNOW),
    18: ("Light rain", RAIN),
    19: ("Moderate rain", RAIN),
    20: ("Heavy rain", RAIN),
    21: ("Thunder", THUNDER),
    22: ("Light sleet", SLEET),
    23: ("Moderate sleet", SLEET),
    24: ("Heavy sleet", SLEET),
    25: ("Light snow", SNOW),
    26: ("Moderate snow", SNOW),
    27: ("Heavy snow", SNOW),
}

# Daily summary codes
CODE_CLEAR = 1
CODE_PARTLY_CLOUDY = 3
CODE_OVERCAST = 6
CODE_RAIN = 8

RAIN_THRESHOLD = Decimal(1)
OVERCAST_OCTAS = 6
PARTLY_CLOUDY_OCTAS = 3


def describe_weather(code: int) -> str:
    return WEATHER_CODES.get(code, (UNKNOWN_DESCRIPTION, FALLBACK_ICON))[0]


def weather_icon(code: int) -> str:
    return WEATHER_CODES.get(code, (UNKNOWN_DESCRIPTION, FALLBACK_ICON))[1]


def dominant_weather(hours: list[HourlyForecast]) -> int:
    """
    Summarize a day's steps into a single weather code.

    Any step with precipitation above 1 makes the day rainy. Otherwise
    mean cloud cover (octas) decides: above 6 overcast, above 3 partly
    cloudy, else clear. This is a lossy summary, not the per-step code.
    """
    if any(h.precipitation > RAIN_THRESHOLD for h in hours):
        return CODE_RAIN
    if not hours:
        return CODE_CLEAR

    mean_cloud = sum(h.cloud_cover for h in hours) / len(hours)
    if mean_cloud > OVERCAST_OCTAS:
        return CODE_OVERCAST
    if mean_cloud > PARTLY_CLOUDY_OCTAS:
        return CODE_PARTLY_CLOUDY
    return CODE_CLEAR
