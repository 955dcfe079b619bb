# ─────────────────────────────────────────────────────────────────
# routes/deps.py: Shared Route Dependencies
#
# The engine lives on app.state. Routes receive it through
# Depends(get_engine) instead of importing a module-level global.
#
# Every handler that touches the engine is `async def`, so it runs on
# the event loop next to the simulation clock, never in FastAPI's
# worker threadpool.
# ─────────────────────────────────────────────────────────────────

from fastapi import Request

from engine import TelemetryEngine


async def get_engine(request: Request) -> TelemetryEngine:
    return request.app.state.engine
