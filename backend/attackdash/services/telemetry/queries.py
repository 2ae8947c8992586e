"""
LogQL query builders for the firewall log stream.
"""

import re

# Loki duration syntax, e.g. "5m", "1h", "24h", "7d"
TIME_RANGE_RE = re.compile(r"^\d+[smhdwy]$")

BREAKDOWN_LABELS = ("country", "country_code", "latitude", "longitude")


def is_valid_time_range(time_range: str) -> bool:
    return bool(TIME_RANGE_RE.match(time_range or ""))


def stream_selector(job: str) -> str:
    return f'{{job="{job}"}}'


def country_breakdown_query(job: str, time_range: str = "1h") -> str:
    """Attack count per source location over the window."""
    labels = ", ".join(BREAKDOWN_LABELS)
    return f"sum by ({labels}) (count_over_time({stream_selector(job)} [{time_range}]))"


def total_count_query(job: str, time_range: str, offset: str = None) -> str:
    """Single attack total over the window, optionally shifted back by offset."""
    window = f"[{time_range}] offset {offset}" if offset else f"[{time_range}]"
    return f"sum(count_over_time({stream_selector(job)} {window}))"
