"""Tests for CSV export."""

from datetime import datetime, timezone

from export import export_filename, format_number, iso_utc, serialize
from models import HistoricalPoint


class TestSerialize:
    def test_empty_series_is_empty_string(self):
        assert serialize([]) == ""

    def test_single_row(self):
        rows = [{"timestamp_ms": 0, "temperature_c": 20.0, "humidity_pct": 50.0}]
        assert serialize(rows) == "Timestamp,Temperature,Humidity\n1970-01-01T00:00:00.000Z,20,50\n"

    def test_accepts_historical_points(self):
        points = [
            HistoricalPoint(timestamp_ms=1_000, time="00:00", temperature_c=21.3, humidity_pct=44.8),
            HistoricalPoint(timestamp_ms=3_601_000, time="01:00", temperature_c=22.0, humidity_pct=45.1),
        ]
        assert serialize(points).splitlines() == [
            "Timestamp,Temperature,Humidity",
            "1970-01-01T00:00:01.000Z,21.3,44.8",
            "1970-01-01T01:00:01.000Z,22,45.1",
        ]

    def test_precision_is_not_rounded(self):
        rows = [{"timestamp_ms": 0, "temperature_c": 20.123456, "humidity_pct": 50.5}]
        assert serialize(rows).splitlines()[1] == "1970-01-01T00:00:00.000Z,20.123456,50.5"

    def test_every_row_ends_with_newline(self):
        rows = [{"timestamp_ms": i, "temperature_c": 1.5, "humidity_pct": 2.5} for i in range(3)]
        text = serialize(rows)
        assert text.endswith("\n")
        assert text.count("\n") == 4


class TestFormatting:
    def test_iso_utc_milliseconds(self):
        assert iso_utc(1_772_361_262_120) == "2026-03-01T10:34:22.120Z"

    def test_format_number(self):
        assert format_number(20.0) == "20"
        assert format_number(22.5) == "22.5"
        assert format_number(-3.0) == "-3"
        assert format_number(7) == "7"

    def test_export_filename(self):
        at = datetime(2026, 3, 1, 10, 34, 22, 120000, tzinfo=timezone.utc)
        assert export_filename(at) == "iot_data_2026-03-01T10:34:22.120Z.csv"

    def test_export_filename_defaults_to_now(self):
        name = export_filename()
        assert name.startswith("iot_data_")
        assert name.endswith("Z.csv")


class TestNumberNotation:
    def test_small_values_are_positional(self):
        assert format_number(1e-05) == "0.00001"
        assert format_number(0.000001) == "0.000001"

    def test_tiny_values_use_short_exponent(self):
        assert format_number(1e-07) == "1e-7"
        assert format_number(2.5e-10) == "2.5e-10"

    def test_large_values(self):
        assert format_number(1e16) == "10000000000000000"
        assert format_number(1.5e21) == "1.5e+21"

    def test_zero_and_non_finite(self):
        assert format_number(0.0) == "0"
        assert format_number(-0.0) == "0"
        assert format_number(float("nan")) == "NaN"
        assert format_number(float("inf")) == "Infinity"
        assert format_number(float("-inf")) == "-Infinity"

    def test_row_with_small_value(self):
        rows = [{"timestamp_ms": 0, "temperature_c": 1e-05, "humidity_pct": 50.25}]
        assert serialize(rows).splitlines()[1] == "1970-01-01T00:00:00.000Z,0.00001,50.25"
