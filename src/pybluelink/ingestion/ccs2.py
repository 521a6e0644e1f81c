"""CCS2 telemetry normalization.

Maps the nested ``ccs2/carstatus/latest`` document (``Drivetrain``,
``Green``, ``Cabin``, ``Body`` ... sections) into a :class:`VehicleStatus`.

Every field is extracted independently through
:func:`pybluelink.ingestion.normalize.extract`, so a missing or oddly
typed branch only drops the fields below it.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pybluelink._constants import CLOSED_SUMMARY, LOW_TIRE_PRESSURE_LABEL
from pybluelink.ingestion.normalize import (
    extract_bool,
    extract_float,
    extract_int,
    extract_str,
    parse_compact_timestamp,
)
from pybluelink.models.status import ChargingState, VehicleStatus

_logger = logging.getLogger(__name__)

# (label, path) pairs in the order they appear in summaries.
_DOOR_NODES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Front Left", ("Cabin", "Door", "Row1", "Driver")),
    ("Front Right", ("Cabin", "Door", "Row1", "Passenger")),
    ("Rear Left", ("Cabin", "Door", "Row2", "Left")),
    ("Rear Right", ("Cabin", "Door", "Row2", "Right")),
)
_WINDOW_NODES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Front Left", ("Cabin", "Window", "Row1", "Driver")),
    ("Front Right", ("Cabin", "Window", "Row1", "Passenger")),
    ("Rear Left", ("Cabin", "Window", "Row2", "Left")),
    ("Rear Right", ("Cabin", "Window", "Row2", "Right")),
    ("Sunroof", ("Body", "Sunroof", "Glass")),
)
_TIRE_NODES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Front Left", ("Chassis", "Axle", "Row1", "Left", "Tire")),
    ("Front Right", ("Chassis", "Axle", "Row1", "Right", "Tire")),
    ("Rear Left", ("Chassis", "Axle", "Row2", "Left", "Tire")),
    ("Rear Right", ("Chassis", "Axle", "Row2", "Right", "Tire")),
)

_HVAC_TEMPERATURE = ("Cabin", "HVAC", "Row1", "Driver", "Temperature", "Value")
_CHARGING_INFO = ("Green", "ChargingInformation")


def _open_labels(tree: Mapping[str, Any], nodes: tuple[tuple[str, tuple[str, ...]], ...]) -> list[str]:
    return [label for label, path in nodes if extract_bool(tree, *path, "Open") is True]


def _summary(labels: list[str]) -> str:
    return ", ".join(labels) if labels else CLOSED_SUMMARY


def _energy_fields(tree: Mapping[str, Any], fields: dict[str, Any]) -> None:
    odometer = extract_float(tree, "Drivetrain", "Odometer")
    if odometer is not None:
        fields["odometer"] = odometer

    fuel_level = extract_float(tree, "Drivetrain", "FuelSystem", "FuelLevel")
    if fuel_level is not None:
        fields["fuel_level"] = fuel_level

    total_range = extract_float(tree, "Drivetrain", "FuelSystem", "DTE", "Total")
    if total_range is not None:
        fields["range"] = total_range
        fields["ev_mode_range"] = total_range

    # EV target-SoC range wins over the fuel-system total whenever present.
    ev_range = extract_float(tree, *_CHARGING_INFO, "DTE", "TargetSoC", "Standard")
    if ev_range is not None:
        fields["range"] = ev_range
        fields["ev_mode_range"] = ev_range

    limit_ac = extract_float(tree, *_CHARGING_INFO, "TargetSoC", "Standard")
    if limit_ac is not None:
        fields["charge_limit_ac"] = limit_ac
    limit_dc = extract_float(tree, *_CHARGING_INFO, "TargetSoC", "Quick")
    if limit_dc is not None:
        fields["charge_limit_dc"] = limit_dc

    aux_battery = extract_float(tree, "Electronics", "Battery", "Level")
    if aux_battery is not None:
        fields["auxiliary_battery_level"] = aux_battery

    battery = extract_float(tree, "Green", "BatteryManagement", "BatteryRemain", "Ratio")
    if battery is not None:
        fields["battery_level"] = battery


def _cabin_fields(tree: Mapping[str, Any], fields: dict[str, Any]) -> None:
    driving_ready = extract_bool(tree, "DrivingReady")
    if driving_ready is not None:
        fields["acc"] = driving_ready

    if extract_float(tree, *_HVAC_TEMPERATURE) is not None:
        fields["climate_on"] = True
    elif extract_str(tree, *_HVAC_TEMPERATURE) == "OFF":
        fields["climate_on"] = False

    locks = [extract_bool(tree, *path, "Lock") for _label, path in _DOOR_NODES]
    if all(lock is not None for lock in locks):
        fields["doors_locked"] = all(locks)

    open_doors = _open_labels(tree, _DOOR_NODES)
    trunk_open = extract_bool(tree, "Body", "Trunk", "Open")
    hood_open = extract_bool(tree, "Body", "Hood", "Open")
    if trunk_open is not None:
        fields["trunk_open"] = trunk_open
        if trunk_open:
            open_doors.append("Trunk")
    if hood_open is not None:
        fields["hood_open"] = hood_open
        if hood_open:
            open_doors.append("Hood")
    fields["door_status_summary"] = _summary(open_doors)
    fields["window_status_summary"] = _summary(_open_labels(tree, _WINDOW_NODES))


def _charging_fields(tree: Mapping[str, Any], fields: dict[str, Any]) -> None:
    connector = extract_bool(tree, *_CHARGING_INFO, "ConnectorFastening", "State")
    if connector is not None:
        fields["connector_fastened"] = connector

    remain_time = extract_int(tree, *_CHARGING_INFO, "Charging", "RemainTime")
    if remain_time is None:
        return
    if remain_time > 0:
        fields["charging"] = True
        fields["charging_state"] = ChargingState.CHARGING
        fields["remaining_charge_time_minutes"] = remain_time
    else:
        fields["charging"] = False
        fields["charging_state"] = ChargingState.IDLE
        fields["remaining_charge_time_minutes"] = 0


def _diagnostic_fields(tree: Mapping[str, Any], fields: dict[str, Any]) -> None:
    low_tires = [label for label, path in _TIRE_NODES if extract_bool(tree, *path, "PressureLow") is True]
    if low_tires:
        fields["minor_warnings"] = LOW_TIRE_PRESSURE_LABEL + ", ".join(low_tires)

    latitude = extract_float(tree, "Location", "GeoCoord", "Latitude")
    longitude = extract_float(tree, "Location", "GeoCoord", "Longitude")
    # A zero on either axis is treated as "no fix".
    if latitude and longitude:
        fields["latitude"] = latitude
        fields["longitude"] = longitude

    last_updated = parse_compact_timestamp(extract_str(tree, "Date"))
    if last_updated is not None:
        fields["last_updated"] = last_updated


def normalize_ccs2_status(vin: str | None, tree: Any) -> VehicleStatus:
    """Build a :class:`VehicleStatus` from a CCS2 status document.

    Never raises.  Input that is not a mapping yields a record with only
    ``vin`` set.
    """
    fields: dict[str, Any] = {"vin": vin}
    if not isinstance(tree, Mapping):
        _logger.debug("CCS2 status for %s is not an object (%s)", vin, type(tree).__name__)
        return VehicleStatus(**fields)

    _energy_fields(tree, fields)
    _cabin_fields(tree, fields)
    _charging_fields(tree, fields)
    _diagnostic_fields(tree, fields)
    return VehicleStatus(**fields)
