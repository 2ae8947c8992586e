"""
Attack Telemetry Service Interface

Defines the contract for the attack telemetry pipeline.
"""

from abc import abstractmethod

from attackdash.services.base import BaseService
from attackdash.schemas.attacks import (
    AttackStats,
    CountryAttackCount,
    MapMarker,
    RecentAttack,
)


class AttackTelemetryServiceInterface(BaseService):
    """
    Attack Telemetry Service Contract.

    SOURCE: Loki, firewall log stream labelled with GeoIP country and
    coordinates.

    OUTPUT:
        - AttackStats: hourly/daily totals, trend, country breakdown
        - RecentAttack list: newest individual attacks
        - CountryAttackCount list: breakdown over a caller-chosen window

    None of the operations raise on upstream failure; a failed query
    yields the zero value for its metric.
    """

    @property
    def name(self) -> str:
        return "AttackTelemetryService"

    @abstractmethod
    async def get_attack_stats(self) -> AttackStats:
        """Summary of the last hour, previous hour and last 24h."""
        pass

    @abstractmethod
    async def get_recent_attacks(self, limit: int = 10) -> list[RecentAttack]:
        """Newest attacks, at most limit."""
        pass

    @abstractmethod
    async def get_attacks_by_country(self, time_range: str = "1h") -> list[CountryAttackCount]:
        """Country breakdown over a Loki duration such as "1h" or "24h"."""
        pass

    @abstractmethod
    async def get_map_markers(self) -> list[MapMarker]:
        """Drawable city markers for the last hour."""
        pass
