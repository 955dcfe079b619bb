# ─────────────────────────────────────────────────────────────────
# export.py: CSV Export
#
# Turns a series of {timestamp_ms, temperature_c, humidity_pct} into
# the text of a CSV download:
#
#   Timestamp,Temperature,Humidity
#   1970-01-01T00:00:00.000Z,20,50
#
# Numbers are written with whatever precision the series carries.
# Saving the file is the caller's job.
# ─────────────────────────────────────────────────────────────────

import math
import re
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Iterable, Optional, Union

from models import HistoricalPoint

HEADER = ("Timestamp", "Temperature", "Humidity")

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def iso_utc(timestamp_ms: int) -> str:
    """Millisecond precision, 'Z' suffix: 2026-03-01T10:34:22.120Z"""

    moment = _EPOCH + timedelta(milliseconds=timestamp_ms)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def format_number(value: Union[int, float]) -> str:
    """
    Render a number the way the dashboard prints it: shortest digits
    that round-trip, positional notation from 1e-6 up to 1e21.

    20.0 → "20", 22.5 → "22.5", 1e-05 → "0.00001", 1e-07 → "1e-7"
    """

    if not isinstance(value, float):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    text = repr(value)
    if 1e-6 <= abs(value) < 1e21:
        text = format(Decimal(text), "f")
        return text.rstrip("0").rstrip(".") if "." in text else text
    return re.sub(r"e([+-])0*(\d)", r"e\1\2", text)


def _field(row, name: str):
    if isinstance(row, dict):
        return row[name]
    return getattr(row, name)


def serialize(rows: Iterable[Union[HistoricalPoint, dict]]) -> str:
    """
    No rows means no header either: an empty series exports as "".
    """

    rows = list(rows)
    if not rows:
        return ""

    lines = [",".join(HEADER)]
    for row in rows:
        lines.append(",".join((
            iso_utc(_field(row, "timestamp_ms")),
            format_number(_field(row, "temperature_c")),
            format_number(_field(row, "humidity_pct")),
        )))
    return "\n".join(lines) + "\n"


def export_filename(exported_at: Optional[datetime] = None) -> str:
    exported_at = exported_at or datetime.now(timezone.utc)
    if exported_at.tzinfo is None:
        exported_at = exported_at.replace(tzinfo=timezone.utc)
    timestamp_ms = int((exported_at - _EPOCH) / timedelta(milliseconds=1))
    return f"iot_data_{iso_utc(timestamp_ms)}.csv"
