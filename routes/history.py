# ─────────────────────────────────────────────────────────────────
# routes/history.py: Trend Charts & CSV Export
#
#   GET  /live                → last readings of the live-chart device
#   POST /live/{device_id}    → choose which device the live chart follows
#   GET  /history?range=7d    → a fresh historical series for a window
#   GET  /history/export      → the current historical series as CSV
#
# Valid ranges are 24h, 7d and 3m. Anything else is served as 24h.
# ─────────────────────────────────────────────────────────────────

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

import history
from engine import TelemetryEngine
from export import export_filename
from models import HistoricalSeries, LiveHistory
from routes.deps import get_engine

logger = logging.getLogger("routes")

router = APIRouter(tags=["History"])


@router.get("/live", response_model=LiveHistory)
async def get_live_history(engine: TelemetryEngine = Depends(get_engine)):
    return engine.get_live_history()


@router.post("/live/{device_id}", response_model=LiveHistory)
async def select_live_device(device_id: str, engine: TelemetryEngine = Depends(get_engine)):
    engine.select_live_device(device_id)
    return engine.get_live_history()


@router.get("/history", response_model=HistoricalSeries)
async def get_history(
    range_key: str = Query(history.DEFAULT_RANGE, alias="range"),
    engine: TelemetryEngine = Depends(get_engine),
):
    """
    Every call draws a new synthetic series, even for the same range.
    The new series also becomes what /history/export downloads.
    """

    points = engine.get_historical_series(range_key)
    key = engine.series_range
    return HistoricalSeries(range=key, label=history.WINDOWS[key].label, points=points)


@router.get("/history/export")
async def export_history(engine: TelemetryEngine = Depends(get_engine)):
    filename = export_filename()
    content = engine.export_series()

    logger.info(f"📥 Exporting {len(engine.current_series)} records ({engine.series_range}) as {filename}")

    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )
