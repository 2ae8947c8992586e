"""
Cache module for AttackDash.

Provides the in-memory TTL cache shared by all pipelines.
"""

from attackdash.services.cache.memory_cache import (
    MemoryCache,
    get_memory_cache,
)

__all__ = [
    "MemoryCache",
    "get_memory_cache",
]
