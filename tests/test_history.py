"""Tests for historical windows and the live trend buffer."""

from datetime import datetime

import pytest

from history import (
    DAY_MS,
    HOUR_MS,
    WINDOWS,
    LiveHistoryBuffer,
    generate,
    resolve_range,
)
from models import MetricReading

NOW = 1_760_000_000_000


def _steps(points):
    return {b.timestamp_ms - a.timestamp_ms for a, b in zip(points, points[1:])}


class TestGenerate:
    @pytest.mark.parametrize("range_key, count, step", [
        ("24h", 24, HOUR_MS),
        ("7d", 168, HOUR_MS),
        ("3m", 90, DAY_MS),
    ])
    def test_window_shape(self, rng, range_key, count, step):
        points = generate(range_key, now=NOW, rng=rng)
        assert len(points) == count
        assert _steps(points) == {step}

    def test_series_ends_one_step_before_now(self, rng):
        points = generate("24h", now=NOW, rng=rng)
        assert points[0].timestamp_ms == NOW - 24 * HOUR_MS
        assert points[-1].timestamp_ms == NOW - HOUR_MS

    @pytest.mark.parametrize("range_key", ["1y", "", None, "24H"])
    def test_unknown_range_behaves_like_24h(self, rng, range_key):
        points = generate(range_key, now=NOW, rng=rng)
        assert len(points) == 24
        assert _steps(points) == {HOUR_MS}

    def test_values_within_synthetic_ranges(self, rng):
        for point in generate("7d", now=NOW, rng=rng):
            assert 15.0 <= point.temperature_c <= 30.0
            assert 30.0 <= point.humidity_pct <= 75.0
            assert point.temperature_c == round(point.temperature_c, 1)
            assert point.humidity_pct == round(point.humidity_pct, 1)

    def test_regenerating_gives_a_new_series(self, rng):
        first = generate("24h", now=NOW, rng=rng)
        second = generate("24h", now=NOW, rng=rng)
        assert [p.timestamp_ms for p in first] == [p.timestamp_ms for p in second]
        assert [p.temperature_c for p in first] != [p.temperature_c for p in second]

    def test_points_carry_hour_label(self, rng):
        point = generate("24h", now=0 + 25 * HOUR_MS, rng=rng)[0]
        assert point.time == "01:00"

    def test_uses_wall_clock_by_default(self):
        points = generate("24h")
        assert len(points) == 24


class TestResolveRange:
    def test_known_ranges(self):
        for key in WINDOWS:
            assert resolve_range(key) == key

    def test_fallback(self):
        assert resolve_range("forever") == "24h"

    def test_labels(self):
        assert WINDOWS["24h"].label == "Last 24 Hours"
        assert WINDOWS["7d"].label == "Last 7 Days"
        assert WINDOWS["3m"].label == "Last 3 Months"


class TestLiveHistoryBuffer:
    def test_never_exceeds_capacity(self):
        buffer = LiveHistoryBuffer(10)
        for i in range(25):
            buffer.append(MetricReading(temperature_c=float(i), humidity_pct=50.0))
            assert len(buffer) <= 10

    def test_oldest_entry_evicted_first(self):
        buffer = LiveHistoryBuffer(10)
        for i in range(11):
            buffer.append(MetricReading(temperature_c=float(i), humidity_pct=50.0))

        temps = [e.temperature_c for e in buffer.snapshot()]
        assert 0.0 not in temps
        assert temps == [float(i) for i in range(1, 11)]

    def test_time_label(self):
        buffer = LiveHistoryBuffer()
        entry = buffer.append(
            MetricReading(temperature_c=21.0, humidity_pct=48.5),
            at=datetime(2026, 3, 1, 10, 34, 22),
        )
        assert entry.time_label == "10:34:22"
        assert entry.humidity_pct == 48.5

    def test_clear(self):
        buffer = LiveHistoryBuffer()
        buffer.append(MetricReading(temperature_c=21.0, humidity_pct=48.5))
        buffer.clear()
        assert buffer.snapshot() == []

    def test_snapshot_is_a_copy(self):
        buffer = LiveHistoryBuffer()
        buffer.append(MetricReading(temperature_c=21.0, humidity_pct=48.5))
        buffer.snapshot().clear()
        assert len(buffer) == 1

    def test_rejects_zero_capacity(self):
        with pytest.raises(ValueError):
            LiveHistoryBuffer(0)
