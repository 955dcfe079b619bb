# ─────────────────────────────────────────────────────────────────
# database.py: Device Registry & Persisted Settings
#
# This file owns all storage for the application:
#   - DeviceRegistry  → the fixed, ordered list of simulated devices
#   - SettingsFile    → a tiny JSON key-value file on disk
#   - ThresholdStore  → the active alert limits, kept in SettingsFile
#
# Readings are NOT stored here. They are produced fresh every tick
# and owned by the engine.
# ─────────────────────────────────────────────────────────────────

import json
import logging
import math
import os
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from errors import InvalidRange
from models import Bounds, Device, ThresholdSet

logger = logging.getLogger("database")


DEFAULT_DEVICES = [
    Device(id="dev-001", name="Server Rack 1", location="Data Center A", powered=True),
    Device(id="dev-002", name="HVAC Unit 3", location="Warehouse 2", powered=True),
    Device(id="dev-003", name="Cold Storage A", location="Processing Plant", powered=False),
]

DEFAULT_THRESHOLDS = ThresholdSet(
    temperature=Bounds(min=18, max=25),
    humidity=Bounds(min=40, max=60),
)

THRESHOLDS_KEY = "iotThresholds"


class DeviceRegistry:
    """
    Devices keyed by id, in the order they were supplied.

    Identity (id, name, location) never changes. toggle() swaps in a
    copy of the device with `powered` flipped.
    """

    def __init__(self, devices: Iterable[Device]):
        self._devices: Dict[str, Device] = {}
        for device in devices:
            if device.id in self._devices:
                raise ValueError(f"Duplicate device id '{device.id}'")
            self._devices[device.id] = device.model_copy()

    def all(self) -> List[Device]:
        return list(self._devices.values())

    def get(self, device_id: str) -> Optional[Device]:
        return self._devices.get(device_id)

    def __contains__(self, device_id: str) -> bool:
        return device_id in self._devices

    def __len__(self) -> int:
        return len(self._devices)

    def toggle(self, device_id: str) -> Optional[Device]:
        device = self._devices.get(device_id)
        if device is None:
            logger.debug(f"Toggle ignored for unknown device '{device_id}'")
            return None

        updated = device.model_copy(update={"powered": not device.powered})
        self._devices[device_id] = updated
        logger.info(f"🔌 Device '{device_id}' powered {'on' if updated.powered else 'off'}")
        return updated


class SettingsFile:
    """JSON object on disk, read and written one key at a time."""

    def __init__(self, path: str):
        self.path = path

    def _read_all(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read settings file '{self.path}': {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Settings file '{self.path}' does not hold a JSON object, ignoring it")
            return {}
        return data

    def get(self, key: str, default: Any = None) -> Any:
        return self._read_all().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._read_all()
        data[key] = value

        # Write beside the target then rename over it, so a reader
        # never sees half a file
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=2)
        os.replace(tmp_path, self.path)


class ThresholdStore:
    """
    Holds the single active ThresholdSet.

    A candidate is either committed whole (validated, persisted, then
    swapped in) or rejected with InvalidRange and the active set stays
    as it was.
    """

    def __init__(self, settings_file: SettingsFile, default: ThresholdSet = DEFAULT_THRESHOLDS):
        self._file = settings_file
        self._active = self._load(default)

    @property
    def active(self) -> ThresholdSet:
        return self._active

    def _load(self, default: ThresholdSet) -> ThresholdSet:
        saved = self._file.get(THRESHOLDS_KEY)
        if saved is None:
            return default.model_copy(deep=True)

        try:
            return self.validate(ThresholdSet.model_validate(saved))
        except (ValidationError, InvalidRange) as e:
            logger.warning(f"Ignoring persisted thresholds, using defaults: {e}")
            return default.model_copy(deep=True)

    @staticmethod
    def validate(candidate: ThresholdSet) -> ThresholdSet:
        for metric in ("temperature", "humidity"):
            bounds: Bounds = getattr(candidate, metric)
            # NaN compares false both ways, so test for the valid case
            if not (math.isfinite(bounds.min) and math.isfinite(bounds.max) and bounds.min < bounds.max):
                raise InvalidRange(metric, bounds.min, bounds.max)
        return candidate

    def commit(self, candidate: ThresholdSet) -> ThresholdSet:
        validated = self.validate(candidate).model_copy(deep=True)

        # Persist first: if the write fails the active set is untouched
        self._file.set(THRESHOLDS_KEY, validated.model_dump())
        self._active = validated

        logger.info(
            f"🎚️  Thresholds saved | temperature {validated.temperature.min} to {validated.temperature.max}°C"
            f" | humidity {validated.humidity.min} to {validated.humidity.max}%"
        )
        return validated
