"""Tests for the path extraction primitive and scalar coercion helpers."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from pybluelink.ingestion.normalize import (
    extract,
    extract_bool,
    extract_float,
    extract_int,
    extract_str,
    parse_compact_timestamp,
    parse_timestamp,
    safe_float,
    safe_int,
    to_enum,
)
from pybluelink.models.status import ChargingState

TREE = {
    "Drivetrain": {
        "Odometer": 12345.6,
        "FuelSystem": {"FuelLevel": "42", "DTE": {"Total": None}},
    },
    "Cabin": {"Door": {"Row1": {"Driver": {"Lock": 1, "Open": False}}}},
    "Date": "20240915140000",
    "Flag": True,
    "List": [1, 2, 3],
}


class TestExtract:
    def test_walks_nested_path(self) -> None:
        assert extract_float(TREE, "Drivetrain", "Odometer") == pytest.approx(12345.6)

    def test_missing_intermediate_is_none(self) -> None:
        assert extract_float(TREE, "Green", "BatteryManagement", "Ratio") is None

    def test_null_terminal_is_none(self) -> None:
        assert extract_float(TREE, "Drivetrain", "FuelSystem", "DTE", "Total") is None

    def test_non_object_intermediate_is_none(self) -> None:
        assert extract_float(TREE, "Date", "Year") is None
        assert extract_int(TREE, "List", "0") is None

    def test_non_mapping_tree_is_none(self) -> None:
        assert extract_float(None, "a") is None
        assert extract_float([1, 2], "a") is None
        assert extract_float("text", "a") is None

    def test_empty_path_is_none(self) -> None:
        assert extract(TREE, coerce=safe_float) is None

    def test_numeric_string_coerces_to_float(self) -> None:
        assert extract_float(TREE, "Drivetrain", "FuelSystem", "FuelLevel") == 42.0

    def test_custom_coercion(self) -> None:
        assert extract(TREE, "List", coerce=len) == 3


class TestTypedExtractors:
    def test_float_rejects_bool(self) -> None:
        assert extract_float(TREE, "Flag") is None

    def test_float_rejects_nan(self) -> None:
        assert extract_float({"v": float("nan")}, "v") is None
        assert extract_float({"v": "NaN"}, "v") is None

    def test_float_rejects_garbage(self) -> None:
        assert extract_float({"v": "OFF"}, "v") is None
        assert extract_float({"v": {"nested": 1}}, "v") is None

    def test_int_truncates(self) -> None:
        assert extract_int({"v": 45.9}, "v") == 45
        assert extract_int({"v": "12"}, "v") == 12

    def test_int_truncates_numeric_strings(self) -> None:
        # Same as the number it spells, not treated as absent.
        assert extract_int({"v": "45.7"}, "v") == 45
        assert extract_int({"v": "-2.5"}, "v") == -2

    def test_bool_accepts_numbers(self) -> None:
        assert extract_bool(TREE, "Cabin", "Door", "Row1", "Driver", "Lock") is True
        assert extract_bool({"v": 0}, "v") is False
        assert extract_bool({"v": 2}, "v") is True

    def test_bool_accepts_bools(self) -> None:
        assert extract_bool(TREE, "Cabin", "Door", "Row1", "Driver", "Open") is False

    def test_bool_rejects_strings(self) -> None:
        assert extract_bool({"v": "true"}, "v") is None

    def test_str_renders_numbers(self) -> None:
        assert extract_str({"v": 20240915140000}, "v") == "20240915140000"
        assert extract_str({"v": "OFF"}, "v") == "OFF"

    def test_str_rejects_bool_and_containers(self) -> None:
        assert extract_str({"v": True}, "v") is None
        assert extract_str({"v": [1]}, "v") is None
        assert extract_str({"v": {"a": 1}}, "v") is None


class TestScalarHelpers:
    @pytest.mark.parametrize("value", [None, "", "--", "abc", True, False])
    def test_safe_float_rejects(self, value: object) -> None:
        assert safe_float(value) is None

    @pytest.mark.parametrize("value", [10**400, -(10**400), "1e400", "inf", "-Infinity", "nan", float("inf")])
    def test_non_finite_rejected(self, value: object) -> None:
        assert safe_float(value) is None
        assert safe_int(value) is None

    def test_to_enum_known_member(self) -> None:
        assert to_enum(ChargingState, "1") is ChargingState.CHARGING

    def test_to_enum_keeps_unknown_raw_value(self) -> None:
        assert to_enum(ChargingState, 7) == 7

    def test_to_enum_default(self) -> None:
        assert to_enum(ChargingState, None, ChargingState.IDLE) is ChargingState.IDLE


class TestTimestamps:
    def test_compact_timestamp(self) -> None:
        assert parse_compact_timestamp("20240915140000") == datetime(2024, 9, 15, 14, 0, tzinfo=UTC)

    def test_compact_timestamp_too_short(self) -> None:
        assert parse_compact_timestamp("2024091514") is None

    def test_compact_timestamp_invalid(self) -> None:
        assert parse_compact_timestamp("20241345140000") is None
        assert parse_compact_timestamp(None) is None

    def test_iso_timestamp(self) -> None:
        assert parse_timestamp("2024-09-15T14:00:00Z") == datetime(2024, 9, 15, 14, 0, tzinfo=UTC)

    def test_naive_iso_timestamp_is_utc(self) -> None:
        assert parse_timestamp("2024-09-15T14:00:00") == datetime(2024, 9, 15, 14, 0, tzinfo=UTC)

    def test_compact_digits(self) -> None:
        assert parse_timestamp("20240915140000") == datetime(2024, 9, 15, 14, 0, tzinfo=UTC)

    def test_epoch_seconds(self) -> None:
        assert parse_timestamp(1726408800) == datetime(2024, 9, 15, 14, 0, tzinfo=UTC)

    def test_epoch_millis(self) -> None:
        assert parse_timestamp("1726408800000") == datetime(2024, 9, 15, 14, 0, tzinfo=UTC)

    @pytest.mark.parametrize(
        "value", [None, "", "   ", "yesterday", 0, -5, True, [1], 10**400, float("inf"), "9" * 5000]
    )
    def test_unparseable(self, value: object) -> None:
        assert parse_timestamp(value) is None
