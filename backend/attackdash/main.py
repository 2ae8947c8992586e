"""
AttackDash Backend - FastAPI Application

Main entry point for the dashboard API.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from attackdash.core.config import settings
from attackdash.api.v1 import router as api_v1_router

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Loki URL: {settings.loki_base_url} (job={settings.loki_job})")

    yield

    # Shutdown
    logger.info("Shutting down...")
    from attackdash.services.http_client import close_http_client
    await close_http_client()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    AttackDash Dashboard API

    ## Sources
    - **Attack Telemetry**: firewall drops from Loki, aggregated by country
    - **Markets**: index and stock quotes from Yahoo Finance
    - **Weather**: SMHI forecast, sunrise/sunset and nationwide extremes

    ## Core Principles
    - A failing source degrades its own fields, never the whole response
    - Short in-memory caches absorb dashboard polling
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware - allow the dashboard frontend
cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
# Add any additional origins from settings
if settings.allowed_origins:
    cors_origins.extend([o for o in settings.allowed_origins if o not in cors_origins])

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "AttackDash Backend API",
        "docs": "/docs",
        "health": "/health",
    }
