"""
Base Service Interface

All data pipelines inherit from this base class.
"""

from abc import ABC, abstractmethod


class BaseService(ABC):
    """
    Base class for all data pipelines.

    Each service:
    - Talks to one upstream provider
    - Never raises upstream failures to its caller
    - Can check its health
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Service name for logging."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the upstream provider answers."""
        pass


class ServiceError(Exception):
    """Base exception for service errors."""

    def __init__(self, service_name: str, message: str, details: dict = None):
        self.service_name = service_name
        self.message = message
        self.details = details or {}
        super().__init__(f"[{service_name}] {message}")


class ExternalAPIError(ServiceError):
    """External API call failed (transport error, timeout or non-success status)."""
    pass


class PayloadError(ServiceError):
    """External API answered with a body that is not valid JSON."""
    pass
