# ─────────────────────────────────────────────────────────────────
# routes/devices.py: Device Cards & Power Toggle
#
# This file owns the HTTP side of the live monitor:
#   GET  /devices                   → every device with its reading
#   GET  /devices/{device_id}       → one device's current reading
#   POST /devices/{device_id}/toggle → flip a device's power
#
# An unknown device id is not an error here. The dashboard asks for
# cards before the simulation knows about a device, so it gets the
# neutral reading (zeros, powered off, no alerts) instead of a 404.
# ─────────────────────────────────────────────────────────────────

import logging
from typing import List

from fastapi import APIRouter, Depends

from engine import TelemetryEngine
from models import CurrentReading, DeviceStatus
from routes.deps import get_engine

logger = logging.getLogger("routes")

router = APIRouter(
    prefix="/devices",
    tags=["Devices"]
)


@router.get("", response_model=List[DeviceStatus])
async def list_devices(engine: TelemetryEngine = Depends(get_engine)):
    """
    All registered devices in registry order, each with its latest
    reading and alert flags.
    """

    return engine.list_devices()


@router.get("/{device_id}", response_model=CurrentReading)
async def get_device_reading(device_id: str, engine: TelemetryEngine = Depends(get_engine)):
    return engine.get_current_reading(device_id)


@router.post("/{device_id}/toggle", response_model=CurrentReading)
async def toggle_device(device_id: str, engine: TelemetryEngine = Depends(get_engine)):
    """
    Power a device on or off.

    A powered-off device keeps showing its last reading; the
    simulation just stops moving it.
    """

    reading = engine.toggle_status(device_id)
    if device_id not in engine.registry:
        logger.info(f"Toggle requested for unknown device '{device_id}', nothing changed")
    return reading
