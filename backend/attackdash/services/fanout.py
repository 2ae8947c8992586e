"""
Concurrent sub-fetches with per-task failure isolation.

Each task's exception is caught at its own boundary and mapped to a
default before the join, so one failing task never cancels its siblings.
"""

import asyncio
import logging
from typing import Any, Awaitable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def guarded(label: str, awaitable: Awaitable[T], default: T) -> T:
    """Await a sub-fetch, returning default if it raises."""
    try:
        return await awaitable
    except Exception as e:
        logger.error(f"Error in {label}: {e!r}")
        return default


async def gather_guarded(*tasks: tuple[str, Awaitable[Any], Any]) -> list[Any]:
    """
    Run (label, awaitable, default) triples concurrently.

    Results come back in argument order.
    """
    return await asyncio.gather(
        *(guarded(label, awaitable, default) for label, awaitable, default in tasks)
    )
