"""
Clock Utility

Local-timezone handling and epoch conversions for the dashboard.
Upstream sources report time as unix seconds (Yahoo), unix nanoseconds
(Loki) or ISO-8601 UTC strings (SMHI, sunrise-sunset).
"""

from datetime import datetime, timezone
from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo

from attackdash.core.config import settings

NANOS_PER_MILLI = 1_000_000


@lru_cache()
def get_local_tz() -> ZoneInfo:
    """Timezone the dashboard displays wall-clock times in."""
    return ZoneInfo(settings.timezone)


def now_local(tz: Optional[ZoneInfo] = None) -> datetime:
    """Get current local time."""
    return datetime.now(tz or get_local_tz())


def from_unix_seconds(seconds: int, tz: Optional[ZoneInfo] = None) -> datetime:
    return datetime.fromtimestamp(seconds, tz or get_local_tz())


def from_unix_nanos(nanos: int, tz: Optional[ZoneInfo] = None) -> datetime:
    """
    Convert a nanosecond epoch to local time.

    Precision is truncated to whole milliseconds first, the resolution the
    dashboard displays.
    """
    millis = nanos // NANOS_PER_MILLI
    return datetime.fromtimestamp(millis / 1000, tz or get_local_tz())


def parse_utc_instant(text: str, tz: Optional[ZoneInfo] = None) -> Optional[datetime]:
    """
    Parse an ISO-8601 instant and convert it to local time.

    Naive values are taken as UTC. Returns None if the text is not a
    valid timestamp.
    """
    if not isinstance(text, str) or not text:
        return None

    try:
        # fromisoformat() only accepts a trailing "Z" from Python 3.11
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(tz or get_local_tz())
