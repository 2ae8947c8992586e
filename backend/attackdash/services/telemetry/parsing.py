"""
Loki response parsing and attack aggregation.

Pure functions over decoded Loki JSON. Instant queries answer with
{data: {result: [{metric: {...}, value: [ts, "<count>"]}]}}, range
queries with {data: {result: [{stream: {...}, values: [[ts, line], ...]}]}}.
"""

import logging
import re
from typing import Any, Optional
from zoneinfo import ZoneInfo

from attackdash.core.clock import from_unix_nanos
from attackdash.schemas.attacks import (
    CountryAttackCount,
    MapMarker,
    RecentAttack,
)
from attackdash.services.decoding import as_float, as_int, as_list, as_str, dig

logger = logging.getLogger(__name__)

UNKNOWN_COUNTRY = "Unknown"
UNKNOWN_COUNTRY_CODE = "XX"

# iptables-style log fields
SOURCE_IP_RE = re.compile(r"SRC=(\d+\.\d+\.\d+\.\d+)")
DEST_PORT_RE = re.compile(r"DPT=(\d{1,5})\b")

# Map marker sizing
MIN_MARKER_RADIUS = 10
MAX_MARKER_RADIUS = 50
PULSE_THRESHOLD = 50


def _results(doc: Any) -> list:
    return as_list(dig(doc, "data", "result"))


def _location(labels: Any) -> dict:
    """Country and coordinates from a metric/stream label set."""
    country = as_str(dig(labels, "country"), UNKNOWN_COUNTRY)
    return {
        "country": country.replace("_", " "),
        "country_code": as_str(dig(labels, "country_code"), UNKNOWN_COUNTRY_CODE),
        "latitude": as_float(dig(labels, "latitude")),
        "longitude": as_float(dig(labels, "longitude")),
    }


def parse_country_breakdown(doc: Any) -> list[CountryAttackCount]:
    """City-level attack counts from a `sum by (country, ...)` query."""
    rows = []
    for item in _results(doc):
        count = as_int(dig(item, "value", 1))
        rows.append(
            CountryAttackCount(
                **_location(dig(item, "metric")),
                count=max(count, 0),
            )
        )
    return rows


def parse_total_count(doc: Any) -> int:
    """Scalar count from the first series of a `sum(...)` query."""
    return max(as_int(dig(_results(doc), 0, "value", 1)), 0)


def extract_source_ip(line: str) -> Optional[str]:
    match = SOURCE_IP_RE.search(line)
    return match.group(1) if match else None


def extract_destination_port(line: str) -> int:
    match = DEST_PORT_RE.search(line)
    return int(match.group(1)) if match else 0


def parse_recent_attacks(doc: Any, tz: Optional[ZoneInfo] = None) -> list[RecentAttack]:
    """
    Individual attacks from a range query, newest first.

    Loki timestamps are nanosecond epoch strings.
    """
    attacks = []
    for stream in _results(doc):
        location = _location(dig(stream, "stream"))

        for entry in as_list(dig(stream, "values")):
            line = as_str(dig(entry, 1))
            try:
                timestamp = from_unix_nanos(as_int(dig(entry, 0)), tz)
            except (OverflowError, OSError, ValueError):
                logger.debug(f"Skipping log entry with out-of-range timestamp: {dig(entry, 0)}")
                continue

            attacks.append(
                RecentAttack(
                    timestamp=timestamp,
                    source_ip=extract_source_ip(line),
                    destination_port=extract_destination_port(line),
                    **location,
                )
            )

    attacks.sort(key=lambda a: a.timestamp, reverse=True)
    return attacks


def aggregate_by_country(rows: list[CountryAttackCount]) -> list[CountryAttackCount]:
    """
    Merge city-level rows into one row per country code.

    Counts are summed. Coordinates come from the city with the largest
    count, the most representative location, not a centroid. The first
    row seen names the country. Group order is first-seen order.
    """
    groups: dict[str, list[CountryAttackCount]] = {}
    for row in rows:
        groups.setdefault(row.country_code, []).append(row)

    aggregated = []
    for code, members in groups.items():
        # max() keeps the first of equal counts
        busiest = max(members, key=lambda r: r.count)
        aggregated.append(
            CountryAttackCount(
                country=members[0].country,
                country_code=code,
                count=sum(r.count for r in members),
                latitude=busiest.latitude,
                longitude=busiest.longitude,
            )
        )
    return aggregated


def sort_by_count(rows: list[CountryAttackCount]) -> list[CountryAttackCount]:
    """Descending count; equal counts keep their input order."""
    return sorted(rows, key=lambda r: r.count, reverse=True)


def to_map_marker(row: CountryAttackCount) -> Optional[MapMarker]:
    """
    Size a city row for the attack map.

    Rows at latitude or longitude 0 carry no usable location and are
    not drawn.
    """
    if not row.latitude or not row.longitude:
        return None

    radius = min(max(row.count / 10, MIN_MARKER_RADIUS), MAX_MARKER_RADIUS)
    return MapMarker(
        lat=row.latitude,
        lng=row.longitude,
        country=row.country,
        count=row.count,
        radius=radius,
        pulse=row.count > PULSE_THRESHOLD,
    )
