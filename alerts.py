# ─────────────────────────────────────────────────────────────────
# alerts.py: Logging Setup & Threshold Alerts
#
# All alerting logic lives here:
#   - evaluate()        → is a reading outside the configured limits?
#   - current_reading() → the card the dashboard draws for one device
#   - report_changes()  → log every alert that starts or clears on a tick
#
# Alert state is never stored. It is recomputed from the reading and
# the active thresholds every time somebody asks.
# ─────────────────────────────────────────────────────────────────

import logging
from typing import Dict, Optional

from models import AlertState, CurrentReading, Device, MetricReading, ThresholdSet
from settings import settings

# ── LOGGING CONFIGURATION ─────────────────────────────────────────
# One format for every named logger in the app:
# "2026-03-01 10:34:22 | WARNING | [alerts] | ..."
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)s | [%(name)s] | %(message)s"
)

logger = logging.getLogger("alerts")


def evaluate(reading: MetricReading, thresholds: ThresholdSet) -> AlertState:
    """
    A metric alerts only when it is strictly outside [min, max].
    A value sitting exactly on a limit is still safe.
    """

    return AlertState(
        temperature_alert=not thresholds.temperature.contains(reading.temperature_c),
        humidity_alert=not thresholds.humidity.contains(reading.humidity_pct),
    )


def current_reading(
    device: Optional[Device],
    reading: Optional[MetricReading],
    thresholds: ThresholdSet,
) -> CurrentReading:
    # Not registered or not seeded yet: a neutral, renderable card
    if device is None or reading is None:
        return CurrentReading()

    state = evaluate(reading, thresholds)
    return CurrentReading(
        temperature_c=reading.temperature_c,
        humidity_pct=reading.humidity_pct,
        powered=device.powered,
        temperature_alert=state.temperature_alert,
        humidity_alert=state.humidity_alert,
    )


def fire_alert(device: Device, metric: str, value: float, low: float, high: float):
    unit = "°C" if metric == "temperature" else "%"
    logger.warning(
        f"🚨 {metric.upper()} ALERT: '{device.name}' ({device.id}) at {device.location} "
        f"reads {value}{unit}, outside {low}{unit} to {high}{unit}"
    )


def clear_alert(device: Device, metric: str, value: float):
    logger.info(f"✅ {metric.capitalize()} back in range for '{device.id}': {value}")


def report_changes(
    devices: Dict[str, Device],
    before: Dict[str, MetricReading],
    after: Dict[str, MetricReading],
    thresholds: ThresholdSet,
) -> int:
    """
    Compare alert state before and after a tick and log each change.

    Returns how many alerts were raised on this tick.
    """

    raised = 0
    for device_id, new in after.items():
        device = devices.get(device_id)
        old = before.get(device_id)
        if device is None or old is None:
            continue

        was = evaluate(old, thresholds)
        now = evaluate(new, thresholds)

        checks = (
            ("temperature", was.temperature_alert, now.temperature_alert, new.temperature_c, thresholds.temperature),
            ("humidity", was.humidity_alert, now.humidity_alert, new.humidity_pct, thresholds.humidity),
        )
        for metric, was_alerting, is_alerting, value, bounds in checks:
            if is_alerting and not was_alerting:
                fire_alert(device, metric, value, bounds.min, bounds.max)
                raised += 1
            elif was_alerting and not is_alerting:
                clear_alert(device, metric, value)

    return raised
