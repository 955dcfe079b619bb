# ─────────────────────────────────────────────────────────────────
# settings.py: Runtime Configuration
#
# Every tunable value is read from the environment once at import.
# Other modules import the `settings` object and never call
# os.getenv themselves.
# ─────────────────────────────────────────────────────────────────

import os
from typing import Optional

from pydantic import BaseModel


def _optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    return int(raw) if raw else None


class Settings(BaseModel):
    app_title: str = os.getenv("APP_TITLE", "IoT Monitor API")

    # Simulation clock: one tick advances every powered device
    tick_interval_seconds: float = float(os.getenv("TICK_INTERVAL_SECONDS", "5"))
    live_history_size: int = int(os.getenv("LIVE_HISTORY_SIZE", "10"))
    simulation_seed: Optional[int] = _optional_int("SIMULATION_SEED")

    # Key-value settings file (thresholds are stored under one key)
    settings_path: str = os.getenv("SETTINGS_PATH", "iot_settings.json")

    log_level: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
