"""
CONTRACT 1: Attack Telemetry

Output of the attack telemetry pipeline, built from Loki query results.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, computed_field


class CountryAttackCount(BaseModel):
    """
    Attack count for one location.

    Before aggregation there may be one row per city (source coordinate);
    after aggregation country_code is unique.
    """

    country: str = "Unknown"
    country_code: str = "XX"
    count: int = Field(default=0, ge=0)
    latitude: float = 0.0
    longitude: float = 0.0


class RecentAttack(BaseModel):
    """Single blocked connection taken from a firewall log line."""

    timestamp: datetime
    country: str = "Unknown"
    country_code: str = "XX"
    source_ip: Optional[str] = None
    destination_port: int = Field(default=0, ge=0)
    latitude: float = 0.0
    longitude: float = 0.0


class AttackStats(BaseModel):
    """
    Dashboard summary of attack activity.

    Trend fields are derived from the hourly counts and never stored.
    """

    total_attacks: int = Field(default=0, ge=0, description="Attacks in the last 24h")
    total_countries: int = Field(default=0, ge=0)
    attacks_last_hour: int = Field(default=0, ge=0)
    attacks_previous_hour: int = Field(default=0, ge=0)
    top_country: str = ""
    top_country_count: int = Field(default=0, ge=0)
    country_breakdown: list[CountryAttackCount] = Field(default_factory=list)
    map_markers: list[CountryAttackCount] = Field(
        default_factory=list,
        description="City-level rows, not aggregated",
    )

    @computed_field
    @property
    def trend_percentage(self) -> float:
        if self.attacks_previous_hour <= 0:
            return 0.0
        delta = self.attacks_last_hour - self.attacks_previous_hour
        return delta / self.attacks_previous_hour * 100

    @computed_field
    @property
    def trend_up(self) -> bool:
        return self.attacks_last_hour > self.attacks_previous_hour


class MapMarker(BaseModel):
    """Drawable map marker sized by attack count."""

    lat: float
    lng: float
    country: str
    count: int = Field(..., ge=0)
    radius: float = Field(..., ge=10, le=50)
    pulse: bool = False


class TelemetryDiagnostics(BaseModel):
    """Trimmed view of AttackStats for checking the Loki connection."""

    total_countries: int
    attacks_last_hour: int
    top_country: str
    countries: list[dict]
