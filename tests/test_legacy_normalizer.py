from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import pytest

from pybluelink.ingestion.legacy import (
    coerce_distance,
    coerce_flag,
    coerce_loose_int,
    normalize_legacy_status,
    summarise_positions,
    unwrap_status_envelope,
)
from pybluelink.ingestion.status import normalize_vehicle_status
from pybluelink.models.status import ChargingState, DistanceUnit

EV_DOCUMENT: dict[str, Any] = {
    "resMsg": {
        "vehicleStatus": {
            "airCtrlOn": True,
            "doorLock": True,
            "acc": False,
            "engine": False,
            "time": "20240915140000",
            "evStatus": {
                "batteryStatus": 77,
                "batteryCharge": True,
                "batteryPlugin": 1,
                "remainTime2": {"atc": {"value": 120, "unit": 1}},
                "drvDistance": [
                    {
                        "type": 2,
                        "rangeByFuel": {
                            "evModeRange": {"value": 310, "unit": 1},
                            "totalAvailableRange": {"value": 310, "unit": 1},
                        },
                    }
                ],
                "targetSOC": [
                    {"plugType": 0, "targetSOClevel": 90},
                    {"plugType": 1, "targetSOClevel": 80},
                ],
            },
        }
    }
}


def test_ev_document_through_envelope() -> None:
    status = normalize_legacy_status("KNAVIN", EV_DOCUMENT)

    assert status.vin == "KNAVIN"
    assert status.battery_level == 77
    assert status.range == 310
    assert status.range_unit is DistanceUnit.KILOMETERS
    assert status.ev_mode_range == 310
    assert status.ev_mode_range_unit is DistanceUnit.KILOMETERS
    assert status.remaining_charge_time_minutes == 120
    assert status.connector_fastened is True
    assert status.charging is True
    assert status.charging_state is ChargingState.CHARGING
    assert status.charge_limit_ac == 80
    assert status.charge_limit_dc is None
    assert status.climate_on is True
    assert status.doors_locked is True
    assert status.acc is False
    assert status.engine_on is False
    assert status.minor_warnings == "OK"
    assert status.latitude is None
    assert status.last_updated == datetime(2024, 9, 15, 14, tzinfo=UTC)


def test_non_mapping_yields_only_vin() -> None:
    status = normalize_legacy_status("VIN", "<html>")
    assert status.model_dump(exclude_none=True) == {"vin": "VIN"}


def test_last_updated_is_never_invented() -> None:
    status = normalize_legacy_status("VIN", {"airCtrlOn": False})
    assert status.last_updated is None
    assert status.climate_on is False


def test_iso_last_updated_preferred() -> None:
    status = normalize_legacy_status(
        "VIN", {"lastUpdated": "2024-09-15T14:00:00Z", "time": "20200101000000"}
    )
    assert status.last_updated == datetime(2024, 9, 15, 14, tzinfo=UTC)


def test_epoch_millis_fallback_timestamp() -> None:
    status = normalize_legacy_status("VIN", {"timestamp": 1726408800000})
    assert status.last_updated == datetime(2024, 9, 15, 14, tzinfo=UTC)


class TestEnvelope:
    def test_descends_all_wrappers(self) -> None:
        tree = {"payload": {"vehicleStatusInfo": {"vehicle": {"Vehicle": {"airCtrlOn": 1}}}}}
        assert unwrap_status_envelope(tree) == {"airCtrlOn": 1}

    def test_bare_document_is_its_own_node(self) -> None:
        tree = {"airCtrlOn": 1}
        assert unwrap_status_envelope(tree) is tree

    def test_non_object_wrappers_are_skipped(self) -> None:
        tree = {"resMsg": "error", "vehicleStatus": {"airCtrlOn": 0}}
        assert unwrap_status_envelope(tree) == {"airCtrlOn": 0}

    def test_root_fields_are_visible_below_the_envelope(self) -> None:
        tree = {"vehicleStatus": {"airCtrlOn": True}, "odometer": 1500}
        status = normalize_legacy_status("VIN", tree)
        assert status.odometer == 1500
        assert status.odometer_unit is DistanceUnit.KILOMETERS

    def test_root_level_ev_status(self) -> None:
        tree = {"vehicleStatus": {"airCtrlOn": True}, "evStatus": {"batteryStatus": 55}}
        assert normalize_legacy_status("VIN", tree).battery_level == 55


class TestDistances:
    def test_kilometers_beat_miles(self) -> None:
        tree = {"evModeRange": [{"value": 100, "unit": 0}, {"value": 90, "unit": 1}]}
        status = normalize_legacy_status("VIN", tree)
        assert status.ev_mode_range == 90
        assert status.ev_mode_range_unit is DistanceUnit.KILOMETERS

    def test_larger_value_wins_with_same_unit(self) -> None:
        tree = {"gasModeRange": [{"value": 100, "unit": 1}, {"value": 150, "unit": 1}]}
        status = normalize_legacy_status("VIN", tree)
        assert status.gas_mode_range == 150

    def test_range_km(self) -> None:
        status = normalize_legacy_status("VIN", {"rangeKm": 420})
        assert status.range == 420
        assert status.range_unit is DistanceUnit.KILOMETERS

    def test_odometer_in_miles(self) -> None:
        status = normalize_legacy_status("VIN", {"odometer": {"value": 12000, "unit": 3}})
        assert status.odometer == 12000
        assert status.odometer_unit is DistanceUnit.MILES

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (250, (250.0, DistanceUnit.KILOMETERS)),
            ("250.5", (250.5, DistanceUnit.KILOMETERS)),
            ({"value": 10, "unit": 2}, (10.0, DistanceUnit.MILES)),
            ({"distance": {"value": 7}}, (7.0, DistanceUnit.KILOMETERS)),
        ],
    )
    def test_coerce_distance(self, value: Any, expected: tuple[float, DistanceUnit]) -> None:
        assert tuple(coerce_distance(value)) == expected

    @pytest.mark.parametrize("value", [None, True, "--", {"unit": 1}])
    def test_coerce_distance_rejects(self, value: Any) -> None:
        assert coerce_distance(value) is None


class TestCharging:
    @staticmethod
    def _ev(**ev_status: Any) -> dict[str, Any]:
        return {"evStatus": ev_status}

    def test_remain_time2_plug_one(self) -> None:
        tree = self._ev(batteryCharge=False, batteryPlugin=1, remainTime2={"etc1": {"value": 400}})
        assert normalize_legacy_status("VIN", tree).remaining_charge_time_minutes == 400

    def test_remain_time2_plug_two(self) -> None:
        tree = self._ev(
            batteryCharge=False, batteryPlugin=2, remainTime2={"etc2": {"value": 300}, "etc3": {"value": 45}}
        )
        status = normalize_legacy_status("VIN", tree)
        assert status.remaining_charge_time_minutes == 300
        assert status.charging is False
        assert status.charging_state is ChargingState.IDLE
        assert status.connector_fastened is True

    def test_remain_time2_unplugged_is_zero(self) -> None:
        tree = self._ev(batteryCharge=False, batteryPlugin=0, remainTime2={"atc": {"value": 90}})
        status = normalize_legacy_status("VIN", tree)
        assert status.remaining_charge_time_minutes == 0
        assert status.connector_fastened is False

    def test_direct_remaining_time_object(self) -> None:
        tree = {"remainTime": {"hours": 1, "minutes": 30}}
        assert normalize_legacy_status("VIN", tree).remaining_charge_time_minutes == 90

    def test_unknown_charging_state_kept_raw(self) -> None:
        status = normalize_legacy_status("VIN", {"chargingState": 5})
        assert status.charging_state == 5
        assert not isinstance(status.charging_state, ChargingState)

    def test_target_soc_object_form(self) -> None:
        status = normalize_legacy_status("VIN", self._ev(targetSOC={"ac": 80, "dc": 90}))
        assert status.charge_limit_ac == 80
        assert status.charge_limit_dc == 90

    def test_target_soc_ignores_zero_levels(self) -> None:
        tree = self._ev(targetSOC=[{"plugType": 2, "targetSOClevel": 0}, {"plugType": 2, "targetSOClevel": 95}])
        assert normalize_legacy_status("VIN", tree).charge_limit_dc == 95

    def test_connector_from_nested_object(self) -> None:
        status = normalize_legacy_status("VIN", {"connectorFastening": {"state": 1}})
        assert status.connector_fastened is True


class TestBodyAndDiagnostics:
    def test_door_summary_includes_trunk(self) -> None:
        tree = {"doorStatus": {"frontLeft": 0, "frontRight": 1}, "trunkOpen": False}
        status = normalize_legacy_status("VIN", tree)
        assert status.door_status_summary == "frontLeft=CLOSED, frontRight=OPEN, trunk=CLOSED"
        assert status.trunk_open is False

    def test_window_summary(self) -> None:
        status = normalize_legacy_status("VIN", {"windowStatus": {"frontLeft": "OPEN", "rearLeft": False}})
        assert status.window_status_summary == "frontLeft=OPEN, rearLeft=CLOSED"

    def test_no_doors_leaves_summary_absent(self) -> None:
        assert normalize_legacy_status("VIN", {"airCtrlOn": False}).door_status_summary is None

    def test_active_warnings_listed_in_order(self) -> None:
        tree = {"hazardStatus": 1, "tailLampStatus": 0, "systemCutOffAlert": "false", "sleepModeCheck": True}
        assert normalize_legacy_status("VIN", tree).minor_warnings == "hazardStatus, sleepModeCheck"

    def test_no_active_warnings_reads_ok(self) -> None:
        assert normalize_legacy_status("VIN", {}).minor_warnings == "OK"

    def test_auxiliary_battery(self) -> None:
        assert normalize_legacy_status("VIN", {"battery": {"batSoc": 83}}).auxiliary_battery_level == 83

    def test_location_beside_status(self) -> None:
        tree = {
            "vehicleStatus": {"airCtrlOn": False},
            "vehicleLocation": {"coord": {"lat": 37.5, "lon": 127.0}},
        }
        status = normalize_legacy_status("VIN", tree)
        assert status.latitude == pytest.approx(37.5)
        assert status.longitude == pytest.approx(127.0)

    def test_location_at_origin_is_no_fix(self) -> None:
        status = normalize_legacy_status("VIN", {"lat": 0, "lon": 0})
        assert status.latitude is None
        assert status.longitude is None

    def test_single_zero_axis_is_a_fix(self) -> None:
        status = normalize_legacy_status("VIN", {"lat": 0, "lon": 5.5})
        assert status.latitude == 0
        assert status.longitude == pytest.approx(5.5)


class TestCoercion:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (2.5, 3),
            ("12.5", 13),
            ("7", 7),
            ({"value": "7"}, 7),
            ({"hours": 1, "minutes": 30}, 90),
            ({"minutes": 15}, 15),
            ([None, "x", 4], 4),
            (True, None),
            ("", None),
        ],
    )
    def test_coerce_loose_int(self, value: Any, expected: int | None) -> None:
        assert coerce_loose_int(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("Open", True),
            (" closed ", False),
            ("ON", True),
            ("maybe", None),
            (2, True),
            (0.0, False),
            ({"status": "on"}, True),
            ({"open": 0}, False),
            ([1], None),
        ],
    )
    def test_coerce_flag(self, value: Any, expected: bool | None) -> None:
        assert coerce_flag(value) is expected

    def test_summarise_positions_dumps_unknown_values(self) -> None:
        assert summarise_positions({"sunroof": {"open": True}, "odd": [1, 2]}) == "sunroof=OPEN, odd=[1,2]"

    def test_summarise_positions_empty(self) -> None:
        assert summarise_positions({}) is None


def _nested(depth: int, key: str = "a", leaf: Any = 1) -> Any:
    tree = leaf
    for _ in range(depth):
        tree = {key: tree}
    return tree


def _listed(depth: int, leaf: Any = 1) -> Any:
    tree = leaf
    for _ in range(depth):
        tree = [tree]
    return tree


class TestHostileInput:
    @pytest.mark.parametrize("normalize", [normalize_legacy_status, normalize_vehicle_status])
    @pytest.mark.parametrize(
        "tree",
        [
            {"batteryLevel": 10**400, "odometer": 10**400, "remainTime": -(10**400)},
            {"evStatus": {"batteryStatus": 10**400, "remainTime": 10**400, "batteryPlugin": 10**400}},
            {"lat": "nan", "lon": "inf", "lastUpdated": 10**400},
            {"doorStatus": {"frontLeft": 10**400, "sunroof": _nested(2000)}},
            {"evStatus": {"drvDistance": _nested(2000, key="rangeByFuel"), "remainTime": _nested(2000, key="value")}},
            {"evStatus": {"remainTime": _listed(2000), "connectorFastening": _nested(2000, key="status")}},
            {"coord": _nested(2000, key="gpsDetail"), "extra": _nested(2000)},
            _nested(2000, key="resMsg", leaf={"batteryLevel": 40}),
        ],
    )
    def test_never_raises(self, normalize: Any, tree: Any) -> None:
        status = normalize("VIN", tree)
        assert status.vin == "VIN"

    def test_huge_numbers_are_absent(self) -> None:
        status = normalize_legacy_status(
            "VIN",
            {
                "batteryLevel": 10**400,
                "odometer": 10**400,
                "evStatus": {"batteryStatus": 10**400, "remainTime": 10**400},
            },
        )
        assert status.battery_level is None
        assert status.odometer is None
        assert status.remaining_charge_time_minutes is None

    def test_non_finite_coordinates_are_absent(self) -> None:
        status = normalize_legacy_status("VIN", {"lat": "nan", "lon": 13.4})
        assert status.latitude is None
        assert status.longitude is None

    def test_deep_nesting_stops_searching(self) -> None:
        assert coerce_loose_int(_nested(2000, key="value", leaf=7)) is None
        assert coerce_loose_int(_nested(3, key="value", leaf=7)) == 7
        assert coerce_flag(_nested(2000, key="status", leaf=True)) is None
        assert coerce_distance(_nested(2000, key="distance", leaf=12)) is None

    def test_deep_door_value_is_still_summarised(self) -> None:
        status = normalize_legacy_status("VIN", {"doorStatus": {"frontLeft": 0, "sunroof": _nested(2000)}})
        assert status.door_status_summary is not None
        assert status.door_status_summary.startswith("frontLeft=CLOSED, sunroof=")

    def test_deep_envelope_is_unwrapped(self) -> None:
        status = normalize_vehicle_status("VIN", _nested(2000, key="resMsg", leaf={"batteryLevel": 40}))
        assert status.battery_level == 40
