# ─────────────────────────────────────────────────────────────────
# engine.py: The Telemetry Engine
#
# Owns every piece of mutable state in the app:
#   - the device registry (only `powered` ever changes)
#   - the readings mapping (replaced whole, once per tick)
#   - the threshold store
#   - the live trend buffer and the current historical series
#   - the background clock task
#
# State changes go through exactly four doors: tick(),
# toggle_status(), set_thresholds() and select_live_device().
# Everything else is a read that returns a snapshot.
# ─────────────────────────────────────────────────────────────────

import asyncio
import logging
import random
from typing import Dict, Iterable, List, Optional

import history
import telemetry
from alerts import current_reading, report_changes
from database import DEFAULT_DEVICES, DeviceRegistry, SettingsFile, ThresholdStore
from export import serialize
from models import (
    CurrentReading,
    Device,
    DeviceStatus,
    HistoricalPoint,
    LiveHistory,
    MetricReading,
    ThresholdSet,
)
from settings import settings
from timer import start_ticker

logger = logging.getLogger("engine")


class TelemetryEngine:
    def __init__(
        self,
        devices: Optional[Iterable[Device]] = None,
        threshold_store: Optional[ThresholdStore] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        tick_interval: float = settings.tick_interval_seconds,
        live_history_size: int = settings.live_history_size,
    ):
        self.rng = rng or random.Random(seed)
        self.tick_interval = tick_interval

        self.registry = DeviceRegistry(DEFAULT_DEVICES if devices is None else devices)
        self.thresholds = threshold_store or ThresholdStore(SettingsFile(settings.settings_path))

        self._readings: Dict[str, MetricReading] = telemetry.seed_readings(self.registry.all(), self.rng)
        self.live_history = history.LiveHistoryBuffer(live_history_size)
        self._selected_id: Optional[str] = None
        self._buffer_device_id: Optional[str] = None

        self._series_range = history.DEFAULT_RANGE
        self._series: List[HistoricalPoint] = history.generate(self._series_range, rng=self.rng)

        self._task: Optional[asyncio.Task] = None

    # ── LIFECYCLE ─────────────────────────────────────────────────

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        """Start the periodic tick. Calling it twice keeps the first clock."""

        if not self.running:
            self._task = start_ticker(self.tick, self.tick_interval)
        return self._task

    def stop(self) -> Optional[asyncio.Task]:
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
        return task

    async def shutdown(self):
        task = self.stop()
        if task is not None:
            await task

    # ── MUTATIONS ─────────────────────────────────────────────────

    def tick(self) -> Dict[str, MetricReading]:
        devices = self.registry.all()
        thresholds = self.thresholds.active
        before = self._readings

        after = telemetry.tick(devices, thresholds, before, self.rng)
        self._readings = after

        report_changes({d.id: d for d in devices}, before, after, thresholds)
        self._record_live(after)
        return dict(after)

    def _record_live(self, readings: Dict[str, MetricReading]):
        device_id = self.live_device_id
        if device_id != self._buffer_device_id:
            self.live_history.clear()
            self._buffer_device_id = device_id
        if device_id is not None and device_id in readings:
            self.live_history.append(readings[device_id])

    def toggle_status(self, device_id: str) -> CurrentReading:
        # Unknown id: nothing changes, caller gets the neutral reading
        self.registry.toggle(device_id)
        return self.get_current_reading(device_id)

    def set_thresholds(self, candidate: ThresholdSet) -> ThresholdSet:
        return self.thresholds.commit(candidate)

    def select_live_device(self, device_id: Optional[str]) -> Optional[str]:
        """
        Pin the live trend chart to a device; None goes back to
        following the first powered device. Unknown ids are ignored.
        """

        if device_id is not None and device_id not in self.registry:
            logger.debug(f"Live selection ignored for unknown device '{device_id}'")
            return self.live_device_id

        self._selected_id = device_id
        if self.live_device_id != self._buffer_device_id:
            self.live_history.clear()
            self._buffer_device_id = self.live_device_id
        return self.live_device_id

    # ── READS ─────────────────────────────────────────────────────

    @property
    def readings(self) -> Dict[str, MetricReading]:
        return dict(self._readings)

    def get_current_reading(self, device_id: str) -> CurrentReading:
        return current_reading(
            self.registry.get(device_id),
            self._readings.get(device_id),
            self.thresholds.active,
        )

    def list_devices(self) -> List[DeviceStatus]:
        return [
            DeviceStatus(device=device, reading=self.get_current_reading(device.id))
            for device in self.registry.all()
        ]

    @property
    def live_device_id(self) -> Optional[str]:
        if self._selected_id is not None:
            return self._selected_id

        devices = self.registry.all()
        for device in devices:
            if device.powered:
                return device.id
        return devices[0].id if devices else None

    def get_live_history(self) -> LiveHistory:
        device_id = self.live_device_id
        # Buffer still holds the previous device until the next tick clears it
        entries = self.live_history.snapshot() if device_id == self._buffer_device_id else []
        return LiveHistory(device_id=device_id, entries=entries)

    def get_historical_series(self, range_key: Optional[str] = history.DEFAULT_RANGE) -> List[HistoricalPoint]:
        """
        Draw a fresh series for the range and make it the current one,
        the series a chart shows and an export writes out.
        """

        self._series_range = history.resolve_range(range_key)
        self._series = history.generate(self._series_range, rng=self.rng)
        return list(self._series)

    @property
    def series_range(self) -> str:
        return self._series_range

    @property
    def current_series(self) -> List[HistoricalPoint]:
        return list(self._series)

    def export_series(self, sequence: Optional[Iterable[HistoricalPoint]] = None) -> str:
        return serialize(self._series if sequence is None else sequence)
