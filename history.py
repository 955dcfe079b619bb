# ─────────────────────────────────────────────────────────────────
# history.py: Historical Windows & Live Trend Buffer
#
# Two kinds of time series feed the dashboard charts:
#
# 1. generate(range): a synthetic history for a named window.
#    Every call draws a fresh, uncorrelated series. It does not look
#    at devices or live readings at all.
#
# 2. LiveHistoryBuffer: the last N live readings of one device,
#    appended once per tick, oldest dropped first.
# ─────────────────────────────────────────────────────────────────

import logging
import random
import time
from collections import deque
from datetime import datetime, timezone
from typing import Deque, Dict, List, NamedTuple, Optional

from models import HistoricalPoint, LiveHistoryEntry, MetricReading

logger = logging.getLogger("history")

HOUR_MS = 3_600_000
DAY_MS = 86_400_000

TEMPERATURE_RANGE = (15.0, 30.0)
HUMIDITY_RANGE = (30.0, 75.0)


class Window(NamedTuple):
    count: int
    step_ms: int
    label: str


WINDOWS: Dict[str, Window] = {
    "24h": Window(24, HOUR_MS, "Last 24 Hours"),
    "7d": Window(168, HOUR_MS, "Last 7 Days"),
    "3m": Window(90, DAY_MS, "Last 3 Months"),
}

DEFAULT_RANGE = "24h"


def resolve_range(range_key: Optional[str]) -> str:
    """Unknown or missing ranges fall back to the 24 hour window."""

    if range_key in WINDOWS:
        return range_key
    logger.debug(f"Unknown range '{range_key}', using '{DEFAULT_RANGE}'")
    return DEFAULT_RANGE


def now_ms() -> int:
    return int(time.time() * 1000)


def _hour_label(timestamp_ms: int) -> str:
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc).strftime("%H:%M")


def generate(
    range_key: Optional[str] = DEFAULT_RANGE,
    now: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> List[HistoricalPoint]:
    """
    Build the series for a window ending just before `now`.

    timestamp[i] = now - (count - i) * step, for i in 0..count-1
    so timestamps are strictly increasing and the last one is one
    step before now.
    """

    window = WINDOWS[resolve_range(range_key)]
    now = now_ms() if now is None else now
    rng = rng or random.Random()

    points: List[HistoricalPoint] = []
    for i in range(window.count):
        timestamp = now - (window.count - i) * window.step_ms
        points.append(HistoricalPoint(
            timestamp_ms=timestamp,
            time=_hour_label(timestamp),
            temperature_c=round(rng.uniform(*TEMPERATURE_RANGE), 1),
            humidity_pct=round(rng.uniform(*HUMIDITY_RANGE), 1),
        ))
    return points


class LiveHistoryBuffer:
    """
    Bounded FIFO of live readings for the trend chart.

    Appends go on the tail; once full, each append pushes the oldest
    entry off the head.
    """

    def __init__(self, capacity: int = 10):
        if capacity <= 0:
            raise ValueError("Live history capacity must be greater than 0")
        self._entries: Deque[LiveHistoryEntry] = deque(maxlen=capacity)

    def append(self, reading: MetricReading, at: Optional[datetime] = None) -> LiveHistoryEntry:
        at = at or datetime.now()
        entry = LiveHistoryEntry(
            time_label=at.strftime("%H:%M:%S"),
            temperature_c=reading.temperature_c,
            humidity_pct=reading.humidity_pct,
        )
        self._entries.append(entry)
        return entry

    def clear(self):
        self._entries.clear()

    def snapshot(self) -> List[LiveHistoryEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
