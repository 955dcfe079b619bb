# ─────────────────────────────────────────────────────────────────
# models.py: Data Models (Pydantic Schemas)
#
# All data shapes live here: the simulated devices, their readings,
# the global alert thresholds and the time series the dashboard
# charts and exports. Request bodies are validated at the door,
# before anything reaches the engine.
#
# Field names are snake_case on the wire, e.g. a current reading is
# {"temperature_c": 22.4, "humidity_pct": 51.0, "powered": true, ...}
# ─────────────────────────────────────────────────────────────────

from typing import List, Optional

from pydantic import BaseModel


class Device(BaseModel):
    """
    A monitored device from the static registry.

    `powered` is the only field that changes after startup.
    """

    id: str
    name: str
    location: str
    powered: bool = True


class MetricReading(BaseModel):
    temperature_c: float
    humidity_pct: float


class Bounds(BaseModel):
    min: float
    max: float

    def contains(self, value: float) -> bool:
        # Both ends belong to the safe range
        return self.min <= value <= self.max


class ThresholdSet(BaseModel):
    """
    The one process-wide set of alert limits.

    Shape on disk and on the wire:
    {
        "temperature": {"min": 18, "max": 25},
        "humidity":    {"min": 40, "max": 60}
    }

    min < max is checked by ThresholdStore when a set is written,
    not here, so that an invalid candidate can still be described
    back to the caller.
    """

    temperature: Bounds
    humidity: Bounds


class AlertState(BaseModel):
    temperature_alert: bool = False
    humidity_alert: bool = False


class CurrentReading(BaseModel):
    """What the dashboard card for one device shows."""

    temperature_c: float = 0.0
    humidity_pct: float = 0.0
    powered: bool = False
    temperature_alert: bool = False
    humidity_alert: bool = False


class DeviceStatus(BaseModel):
    device: Device
    reading: CurrentReading


class HistoricalPoint(BaseModel):
    timestamp_ms: int
    time: str                # display label, HH:MM
    temperature_c: float
    humidity_pct: float


class HistoricalSeries(BaseModel):
    range: str
    label: str
    points: List[HistoricalPoint]


class LiveHistoryEntry(BaseModel):
    time_label: str          # HH:MM:SS
    temperature_c: float
    humidity_pct: float


class LiveHistory(BaseModel):
    device_id: Optional[str]
    entries: List[LiveHistoryEntry]
