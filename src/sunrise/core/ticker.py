"""Fixed-interval ticker for the poll loop."""

from __future__ import annotations

import asyncio
import logging
import math
import time
from collections.abc import AsyncIterator, Awaitable, Callable

logger = logging.getLogger(__name__)


async def ticks(
    interval: float,
    *,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> AsyncIterator[int]:
    """Yield tick numbers every ``interval`` seconds, forever.

    The first tick comes one interval after the call. The generator only
    resumes once the consumer is done with the previous tick, so ticks never
    overlap. Ticks missed while the consumer was busy are dropped and the
    schedule stays on the original interval grid.
    """
    if interval <= 0:
        raise ValueError("interval must be > 0")

    n = 0
    next_at = clock() + interval
    while True:
        delay = next_at - clock()
        if delay > 0:
            await sleep(delay)
        n += 1
        yield n

        next_at += interval
        now = clock()
        if next_at <= now:
            missed = math.floor((now - next_at) / interval) + 1
            logger.debug("Tick overran; dropping %d missed tick(s)", missed)
            next_at += missed * interval
