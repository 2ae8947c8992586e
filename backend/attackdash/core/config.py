"""
Application Configuration

All settings loaded from environment variables.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "AttackDash Backend"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS (Frontend URL)
    allowed_origins: list[str] = ["http://localhost:3000"]

    # Outbound HTTP
    http_timeout_seconds: float = 10.0
    http_user_agent: str = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

    # Loki (attack telemetry)
    loki_base_url: str = "http://192.168.100.22:3100"
    loki_job: str = "unifi_wan"
    recent_attacks_limit: int = 10

    # Yahoo Finance
    yahoo_chart_url: str = "https://query1.finance.yahoo.com/v8/finance/chart"

    # SMHI + sunrise-sunset
    smhi_forecast_url: str = (
        "https://opendata-download-metfcst.smhi.se/api/category/pmp3g/version/2"
        "/geotype/point/lon/{lon}/lat/{lat}/data.json"
    )
    smhi_observations_url: str = (
        "https://opendata-download-metobs.smhi.se/api/version/1.0/parameter/1"
        "/station-set/all/period/latest-hour/data.json"
    )
    sun_api_url: str = "https://api.sunrise-sunset.org/json"

    # Site location (Täby, Stockholm)
    latitude: float = 59.44
    longitude: float = 18.07
    timezone: str = "Europe/Stockholm"

    # Cache TTLs (seconds)
    quote_cache_ttl: int = 300
    forecast_cache_ttl: int = 1800
    extremes_cache_ttl: int = 3600

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
