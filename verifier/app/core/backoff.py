"""Backoff utilities.

`exponential_backoff` yields the delay that precedes the next attempt, then sleeps
for it. The first attempt runs immediately; the first retry waits `initial_delay`,
and each later retry waits `multiplier` times longer, capped at `max_delay`.
"""
import asyncio
from typing import AsyncIterator


async def exponential_backoff(
    initial_delay: float,
    max_delay: float,
    multiplier: float,
    max_attempts: int,
) -> AsyncIterator[float]:
    delay = min(initial_delay, max_delay)
    for attempt in range(1, max_attempts + 1):
        yield delay
        if attempt < max_attempts:
            await asyncio.sleep(delay)
            delay = min(delay * multiplier, max_delay)
