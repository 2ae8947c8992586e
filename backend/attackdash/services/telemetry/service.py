"""
Attack Telemetry Service Implementation

Queries Loki for firewall drops and aggregates them for the dashboard.
Every query is independently fault-tolerant: a failure is logged and
degrades only the metric it feeds.
"""

import logging
from typing import Any, Optional
from zoneinfo import ZoneInfo

from attackdash.core.config import settings
from attackdash.schemas.attacks import (
    AttackStats,
    CountryAttackCount,
    MapMarker,
    RecentAttack,
)
from attackdash.services.fanout import gather_guarded, guarded
from attackdash.services.http_client import JsonHttpClient, get_http_client
from attackdash.services.telemetry.interface import AttackTelemetryServiceInterface
from attackdash.services.telemetry.parsing import (
    aggregate_by_country,
    parse_country_breakdown,
    parse_recent_attacks,
    parse_total_count,
    sort_by_count,
    to_map_marker,
)
from attackdash.services.telemetry.queries import (
    country_breakdown_query,
    is_valid_time_range,
    stream_selector,
    total_count_query,
)

logger = logging.getLogger(__name__)

QUERY_PATH = "/loki/api/v1/query"
QUERY_RANGE_PATH = "/loki/api/v1/query_range"
READY_PATH = "/ready"


class AttackTelemetryService(AttackTelemetryServiceInterface):
    """
    Attack telemetry from Loki.

    Never cached: every call reflects the live log stream.
    """

    def __init__(
        self,
        http: JsonHttpClient,
        base_url: str = None,
        job: str = None,
        tz: Optional[ZoneInfo] = None,
    ):
        self._http = http
        self._base_url = (base_url or settings.loki_base_url).rstrip("/")
        self._job = job or settings.loki_job
        self._tz = tz

    async def _query(self, query: str) -> Optional[Any]:
        """Run an instant query. Returns None on failure."""
        logger.info(f"Querying Loki: {self._base_url}{QUERY_PATH} {query}")
        return await self._http.get_json(
            f"{self._base_url}{QUERY_PATH}",
            params={"query": query},
            source="Loki",
        )

    async def _query_range(self, query: str, limit: int) -> Optional[Any]:
        return await self._http.get_json(
            f"{self._base_url}{QUERY_RANGE_PATH}",
            params={"query": query, "limit": str(limit)},
            source="Loki",
        )

    async def _fetch_breakdown(self, time_range: str) -> list[CountryAttackCount]:
        """City-level rows, not yet aggregated."""
        doc = await self._query(country_breakdown_query(self._job, time_range))
        return parse_country_breakdown(doc)

    async def _fetch_total(self, time_range: str, offset: str = None) -> int:
        doc = await self._query(total_count_query(self._job, time_range, offset))
        return parse_total_count(doc)

    async def get_attack_stats(self) -> AttackStats:
        """
        Build the dashboard summary from three concurrent queries.

        - last hour, by city (breakdown, markers, last-hour total)
        - previous hour total (trend)
        - last 24h total
        """
        city_rows, previous_hour, last_day = await gather_guarded(
            ("country breakdown", self._fetch_breakdown("1h"), []),
            ("previous hour total", self._fetch_total("1h", offset="1h"), 0),
            ("24h total", self._fetch_total("24h"), 0),
        )

        # Markers keep city granularity; the list shows one row per country
        markers = sort_by_count(city_rows)
        breakdown = sort_by_count(aggregate_by_country(city_rows))
        top = breakdown[0] if breakdown else None

        stats = AttackStats(
            total_attacks=last_day,
            total_countries=len(breakdown),
            attacks_last_hour=sum(row.count for row in breakdown),
            attacks_previous_hour=previous_hour,
            top_country=top.country if top else "",
            top_country_count=top.count if top else 0,
            country_breakdown=breakdown,
            map_markers=markers,
        )

        logger.info(
            f"Attack stats: {stats.attacks_last_hour} last hour from "
            f"{stats.total_countries} countries, {stats.total_attacks} in 24h"
        )
        return stats

    async def get_recent_attacks(self, limit: int = 10) -> list[RecentAttack]:
        """Newest attacks first, at most limit."""
        if limit <= 0:
            return []

        doc = await self._query_range(stream_selector(self._job), limit)
        return parse_recent_attacks(doc, self._tz)[:limit]

    async def get_attacks_by_country(self, time_range: str = "1h") -> list[CountryAttackCount]:
        """Aggregated country breakdown over any Loki duration."""
        if not is_valid_time_range(time_range):
            logger.warning(f"Rejected attack breakdown window: {time_range!r}")
            return []

        rows = await guarded(
            f"country breakdown ({time_range})",
            self._fetch_breakdown(time_range),
            [],
        )
        return sort_by_count(aggregate_by_country(rows))

    async def get_map_markers(self) -> list[MapMarker]:
        stats = await self.get_attack_stats()
        markers = (to_map_marker(row) for row in stats.map_markers)
        return [m for m in markers if m is not None]

    async def health_check(self) -> bool:
        return await self._http.ping(f"{self._base_url}{READY_PATH}", source="Loki")


# Singleton instance
_telemetry_service: Optional[AttackTelemetryService] = None


def get_attack_telemetry_service() -> AttackTelemetryService:
    """Get the attack telemetry service singleton."""
    global _telemetry_service
    if _telemetry_service is None:
        _telemetry_service = AttackTelemetryService(get_http_client())
    return _telemetry_service
