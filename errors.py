# ─────────────────────────────────────────────────────────────────
# errors.py: Engine Errors
#
# Only one condition in the engine is rejected outright: a threshold
# set whose limits are not finite numbers with max above min.
# Unknown devices and unknown ranges are defaulted where they are
# looked up, never raised.
# ─────────────────────────────────────────────────────────────────

import math


class InvalidRange(ValueError):
    """A threshold limit is not finite, or its max is not above its min."""

    def __init__(self, metric: str, min_value: float, max_value: float):
        self.metric = metric
        self.min_value = min_value
        self.max_value = max_value

        if math.isfinite(min_value) and math.isfinite(max_value):
            message = f"{metric.capitalize()} max limit must be greater than min limit"
        else:
            message = f"{metric.capitalize()} limits must be finite numbers"
        super().__init__(f"{message} (min={min_value}, max={max_value}).")
