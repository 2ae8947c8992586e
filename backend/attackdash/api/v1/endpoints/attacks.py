"""
Attack Telemetry API Endpoints

Attack statistics, recent attacks and map markers from Loki.
"""

from fastapi import APIRouter, Depends, Query

from attackdash.core.config import settings
from attackdash.schemas.attacks import (
    AttackStats,
    CountryAttackCount,
    MapMarker,
    RecentAttack,
)
from attackdash.services.telemetry import (
    AttackTelemetryService,
    get_attack_telemetry_service,
)
from attackdash.services.telemetry.queries import TIME_RANGE_RE

router = APIRouter()


@router.get("/stats", response_model=AttackStats)
async def get_attack_stats(
    service: AttackTelemetryService = Depends(get_attack_telemetry_service),
):
    """
    Get attack summary.

    Last hour breakdown by country, previous hour trend and 24h total.
    """
    return await service.get_attack_stats()


@router.get("/recent", response_model=list[RecentAttack])
async def get_recent_attacks(
    limit: int = Query(default=settings.recent_attacks_limit, ge=1, le=500),
    service: AttackTelemetryService = Depends(get_attack_telemetry_service),
):
    """Get the newest attacks with source IP and destination port."""
    return await service.get_recent_attacks(limit)


@router.get("/by-country", response_model=list[CountryAttackCount])
async def get_attacks_by_country(
    time_range: str = Query(
        default="1h",
        alias="range",
        pattern=TIME_RANGE_RE.pattern,
        description="Loki duration, e.g. 1h, 24h, 7d",
    ),
    service: AttackTelemetryService = Depends(get_attack_telemetry_service),
):
    """
    Get attack counts per country over a custom window.

    Example: `/attacks/by-country?range=24h`
    """
    return await service.get_attacks_by_country(time_range)


@router.get("/markers", response_model=list[MapMarker])
async def get_map_markers(
    service: AttackTelemetryService = Depends(get_attack_telemetry_service),
):
    """Get city-level map markers sized by attack count."""
    return await service.get_map_markers()
