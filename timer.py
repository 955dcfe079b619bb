# ─────────────────────────────────────────────────────────────────
# timer.py: Background Simulation Clock
#
# One asyncio task calls the engine's tick every `interval` seconds.
# asyncio.sleep() pauses only this coroutine, so the API keeps
# serving requests between ticks, and because everything runs on the
# one event loop a tick never interleaves with a request handler.
#
# Stopping the clock = cancelling the task. CancelledError is raised
# inside asyncio.sleep() and the loop exits quietly.
# ─────────────────────────────────────────────────────────────────

import asyncio
import logging
from typing import Callable

logger = logging.getLogger("timer")


async def run_ticker(on_tick: Callable[[], object], interval: float):
    """
    Call `on_tick` once per `interval` seconds until cancelled.

    The first tick fires one full interval after start. A tick always
    finishes before the next sleep begins, so ticks never overlap.
    """

    logger.info(f"⏱️  Simulation clock started, ticking every {interval}s")
    ticks = 0
    try:
        while True:
            await asyncio.sleep(interval)
            on_tick()
            ticks += 1

    except asyncio.CancelledError:
        logger.info(f"⏹️  Simulation clock stopped after {ticks} ticks")
        return


def start_ticker(on_tick: Callable[[], object], interval: float) -> "asyncio.Task":
    # Must be called from inside a running event loop
    if interval <= 0:
        raise ValueError("Tick interval must be greater than 0 seconds.")
    return asyncio.create_task(run_ticker(on_tick, interval))
