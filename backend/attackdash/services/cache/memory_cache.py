"""
In-memory TTL cache for upstream responses.

Absorbs repeated UI polling. Entries are replaced wholesale on write and
values are handed out by reference, so callers must not mutate them.
There is no single-flight: concurrent misses on one key both fetch.
"""

import logging
import time
from typing import Any, Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)


class MemoryCache:
    """
    Key → (value, expiry) store.

    Keys:
    - quote:{symbol} → StockQuote
    - weather_forecast → WeatherForecast
    - temperature_extremes → TemperatureExtremes
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: Dict[str, Tuple[Any, float]] = {}

    def get(self, key: str) -> Optional[Any]:
        """
        Get a cached value.
        Returns None if missing or expired.
        """
        entry = self._entries.get(key)
        if entry is None:
            return None

        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            logger.debug(f"Cache expired: {key}")
            return None
        return value

    def set(self, key: str, value: Any, ttl: float) -> None:
        """
        Store a value for ttl seconds, replacing any previous entry.

        Expired entries of other keys are dropped on every write.
        """
        now = self._clock()
        self._purge_expired(now)
        self._entries[key] = (value, now + ttl)

    def _purge_expired(self, now: float) -> None:
        expired = [k for k, (_, expires_at) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug(f"Cache purged {len(expired)} expired entries")

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


# Singleton instance
_memory_cache: Optional[MemoryCache] = None


def get_memory_cache() -> MemoryCache:
    """Get the process-wide cache singleton."""
    global _memory_cache
    if _memory_cache is None:
        _memory_cache = MemoryCache()
    return _memory_cache
