"""
Attack Telemetry Service

SOURCE: Loki log stream of firewall drops

RESPONSIBILITIES:
    - Build LogQL instant and range queries
    - Parse metric/stream results, tolerating missing fields
    - Aggregate city-level counts by country
    - Extract source IP and destination port from raw log lines
    - Derive hourly trend and top country
"""

from attackdash.services.telemetry.interface import AttackTelemetryServiceInterface
from attackdash.services.telemetry.service import (
    AttackTelemetryService,
    get_attack_telemetry_service,
)

__all__ = [
    "AttackTelemetryServiceInterface",
    "AttackTelemetryService",
    "get_attack_telemetry_service",
]
