# ─────────────────────────────────────────────────────────────────
# telemetry.py: Simulated Sensor Values
#
# Each powered device drifts by a small random step every tick
# (a bounded random walk). The walk is clamped to a band around the
# alert thresholds so values can cross an alert limit but never run
# away from it.
#
# Unpowered devices keep their last value: the simulation is frozen
# for them, not reset to zero.
# ─────────────────────────────────────────────────────────────────

import logging
import random
from typing import Dict, Iterable, Optional

from models import Bounds, Device, MetricReading, ThresholdSet

logger = logging.getLogger("telemetry")

TEMPERATURE_BASELINE = 22.5
TEMPERATURE_JITTER = 2.5
TEMPERATURE_STEP = 0.5
TEMPERATURE_MARGIN = 5.0

HUMIDITY_BASELINE = 50.0
HUMIDITY_JITTER = 5.0
HUMIDITY_STEP = 1.0
HUMIDITY_MARGIN = 10.0

Readings = Dict[str, MetricReading]


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _walk(previous: float, step: float, bounds: Bounds, margin: float, rng: random.Random) -> float:
    moved = previous + rng.uniform(-step, step)
    return round(clamp(moved, bounds.min - margin, bounds.max + margin), 1)


def seed_readings(devices: Iterable[Device], rng: Optional[random.Random] = None) -> Readings:
    """
    Starting values for every device, before the first tick.

    baseline ± jitter, drawn independently per device. Thresholds play
    no part here.
    """

    rng = rng or random.Random()
    readings: Readings = {}
    for device in devices:
        readings[device.id] = MetricReading(
            temperature_c=round(TEMPERATURE_BASELINE + rng.uniform(-TEMPERATURE_JITTER, TEMPERATURE_JITTER), 1),
            humidity_pct=round(HUMIDITY_BASELINE + rng.uniform(-HUMIDITY_JITTER, HUMIDITY_JITTER), 1),
        )
    return readings


def tick(
    devices: Iterable[Device],
    thresholds: ThresholdSet,
    previous: Readings,
    rng: Optional[random.Random] = None,
) -> Readings:
    """
    Advance the simulation one step and return a NEW readings mapping.

    `previous` is never modified. The caller swaps the returned mapping
    in as a whole, so nobody observes a half-finished tick.

    The rounded value is the value of record: it is what the next tick
    walks from.
    """

    rng = rng or random.Random()
    readings: Readings = dict(previous)

    for device in devices:
        last = previous.get(device.id)
        if last is None:
            # Device added after seeding, start it from the baseline
            last = seed_readings([device], rng)[device.id]
            readings[device.id] = last

        if not device.powered:
            continue

        readings[device.id] = MetricReading(
            temperature_c=_walk(last.temperature_c, TEMPERATURE_STEP, thresholds.temperature, TEMPERATURE_MARGIN, rng),
            humidity_pct=_walk(last.humidity_pct, HUMIDITY_STEP, thresholds.humidity, HUMIDITY_MARGIN, rng),
        )

    return readings
