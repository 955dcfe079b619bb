# ─────────────────────────────────────────────────────────────────
# routes/thresholds.py: Global Alert Limits
#
#   GET /thresholds → the active limits
#   PUT /thresholds → replace them (all four numbers at once)
#
# A rejected update leaves the active limits exactly as they were
# and the 400 response names the metric that failed.
# ─────────────────────────────────────────────────────────────────

import logging

from fastapi import APIRouter, Depends, HTTPException

from engine import TelemetryEngine
from errors import InvalidRange
from models import ThresholdSet
from routes.deps import get_engine

logger = logging.getLogger("routes")

router = APIRouter(
    prefix="/thresholds",
    tags=["Thresholds"]
)


@router.get("", response_model=ThresholdSet)
async def get_thresholds(engine: TelemetryEngine = Depends(get_engine)):
    return engine.thresholds.active


@router.put("", response_model=ThresholdSet)
async def update_thresholds(candidate: ThresholdSet, engine: TelemetryEngine = Depends(get_engine)):
    """
    Validate and save a new threshold set.

    Body:
    {
        "temperature": {"min": 18, "max": 25},
        "humidity":    {"min": 40, "max": 60}
    }
    """

    try:
        return engine.set_thresholds(candidate)
    except InvalidRange as e:
        logger.info(f"Rejected threshold update: {e}")
        raise HTTPException(
            status_code=400,
            detail={"metric": e.metric, "message": str(e)}
        )
