"""
Dashboard API Endpoint

Everything the dashboard renders, in one call.
"""

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from attackdash.core.clock import now_local
from attackdash.core.config import settings
from attackdash.schemas.attacks import AttackStats, RecentAttack
from attackdash.schemas.quotes import StockQuote
from attackdash.schemas.weather import WeatherForecast
from attackdash.services.fanout import gather_guarded
from attackdash.services.quotes import QuoteService, get_quote_service
from attackdash.services.telemetry import (
    AttackTelemetryService,
    get_attack_telemetry_service,
)
from attackdash.services.weather import ForecastService, get_forecast_service

router = APIRouter()


class DashboardView(BaseModel):
    """Complete view model; degraded sources show up as empty parts."""

    attack_stats: AttackStats
    recent_attacks: list[RecentAttack]
    indices: list[StockQuote]
    stocks: list[StockQuote]
    forecast: WeatherForecast


@router.get("", response_model=DashboardView)
async def get_dashboard(
    recent_limit: int = Query(default=settings.recent_attacks_limit, ge=1, le=500),
    telemetry: AttackTelemetryService = Depends(get_attack_telemetry_service),
    quotes: QuoteService = Depends(get_quote_service),
    weather: ForecastService = Depends(get_forecast_service),
):
    """Fetch all dashboard sections concurrently."""
    stats, recent, indices, stocks, forecast = await gather_guarded(
        ("attack stats", telemetry.get_attack_stats(), AttackStats()),
        ("recent attacks", telemetry.get_recent_attacks(recent_limit), []),
        ("indices", quotes.get_indices(), []),
        ("stocks", quotes.get_stocks(), []),
        ("forecast", weather.get_forecast(), WeatherForecast(last_updated=now_local())),
    )

    return DashboardView(
        attack_stats=stats,
        recent_attacks=recent,
        indices=indices,
        stocks=stocks,
        forecast=forecast,
    )
