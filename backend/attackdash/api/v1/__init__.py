"""
API v1 Router

All API endpoints for the dashboard frontend.
"""

from fastapi import APIRouter

from attackdash.api.v1.endpoints import attacks, markets, weather, dashboard, diagnostics

router = APIRouter()

# Include all endpoint routers
router.include_router(attacks.router, prefix="/attacks", tags=["Attack Telemetry"])
router.include_router(markets.router, prefix="/markets", tags=["Market Data"])
router.include_router(weather.router, prefix="/weather", tags=["Weather"])
router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
router.include_router(diagnostics.router, prefix="/diagnostics", tags=["Diagnostics"])
