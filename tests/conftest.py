"""Pytest configuration and shared fixtures."""

import random
import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from database import SettingsFile, ThresholdStore  # noqa: E402
from engine import TelemetryEngine  # noqa: E402
from models import Bounds, Device, ThresholdSet  # noqa: E402


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def devices():
    return [
        Device(id="dev-001", name="Server Rack 1", location="Data Center A", powered=True),
        Device(id="dev-002", name="HVAC Unit 3", location="Warehouse 2", powered=True),
        Device(id="dev-003", name="Cold Storage A", location="Processing Plant", powered=False),
    ]


@pytest.fixture
def thresholds():
    return ThresholdSet(
        temperature=Bounds(min=18, max=25),
        humidity=Bounds(min=40, max=60),
    )


@pytest.fixture
def settings_file(tmp_path):
    return SettingsFile(str(tmp_path / "settings.json"))


@pytest.fixture
def store(settings_file):
    return ThresholdStore(settings_file)


@pytest.fixture
def engine(devices, store):
    return TelemetryEngine(devices=devices, threshold_store=store, seed=42, tick_interval=0.01)
