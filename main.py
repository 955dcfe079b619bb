# ─────────────────────────────────────────────────────────────────
# main.py: App Setup
#
# Builds the FastAPI app, attaches one TelemetryEngine to it and
# ties the engine's simulation clock to the app's lifetime:
#   startup  → engine.start()    (tick every TICK_INTERVAL_SECONDS)
#   shutdown → engine.shutdown() (cancel the clock task)
#
# Run with:  uvicorn main:app --reload
# ─────────────────────────────────────────────────────────────────

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from engine import TelemetryEngine
from routes import devices, history, thresholds
from settings import settings

logger = logging.getLogger("main")

VERSION = "1.0.0"


def create_app(engine: Optional[TelemetryEngine] = None) -> FastAPI:
    engine = engine or TelemetryEngine(seed=settings.simulation_seed)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.engine.start()
        logger.info(f"🚀 {settings.app_title} v{VERSION} monitoring {len(app.state.engine.registry)} devices")
        try:
            yield
        finally:
            await app.state.engine.shutdown()

    app = FastAPI(
        title=settings.app_title,
        description="Simulated IoT sensor telemetry with threshold alerts and historical trends",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.engine = engine

    app.include_router(devices.router)
    app.include_router(thresholds.router)
    app.include_router(history.router)

    @app.get("/")
    def root():
        return {
            "message": f"{settings.app_title} is running",
            "version": VERSION,
            "docs": "/docs"
        }

    return app


app = create_app()
