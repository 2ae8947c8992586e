"""
Diagnostics API Endpoints

Read-only checks of the upstream connections.
"""

from fastapi import APIRouter, Depends

from attackdash.schemas.attacks import TelemetryDiagnostics
from attackdash.services.fanout import gather_guarded
from attackdash.services.quotes import QuoteService, get_quote_service
from attackdash.services.telemetry import (
    AttackTelemetryService,
    get_attack_telemetry_service,
)
from attackdash.services.weather import ForecastService, get_forecast_service

router = APIRouter()

TOP_COUNTRIES = 5


@router.get("/telemetry", response_model=TelemetryDiagnostics)
async def check_telemetry(
    service: AttackTelemetryService = Depends(get_attack_telemetry_service),
):
    """
    Verify the Loki connection.

    Returns a trimmed view of the attack stats: country count, last hour
    count, top country and the five largest countries.
    """
    stats = await service.get_attack_stats()
    return TelemetryDiagnostics(
        total_countries=stats.total_countries,
        attacks_last_hour=stats.attacks_last_hour,
        top_country=stats.top_country,
        countries=[
            {"country": row.country, "count": row.count}
            for row in stats.country_breakdown[:TOP_COUNTRIES]
        ],
    )


@router.get("/sources")
async def check_sources(
    telemetry: AttackTelemetryService = Depends(get_attack_telemetry_service),
    quotes: QuoteService = Depends(get_quote_service),
    weather: ForecastService = Depends(get_forecast_service),
):
    """Check whether each upstream provider answers."""
    services = (telemetry, quotes, weather)
    results = await gather_guarded(
        *((f"{s.name} health check", s.health_check(), False) for s in services)
    )
    return {s.name: healthy for s, healthy in zip(services, results)}
