"""
AttackDash Services

Service layer containing the three fetch-and-normalize pipelines.
Each service has a defined interface (contract) and implementation.
"""

from attackdash.services.base import BaseService

__all__ = ["BaseService"]
