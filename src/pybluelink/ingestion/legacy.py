"""Legacy (V1/V2 ``status``) telemetry normalization.

The legacy endpoints return flat-ish documents whose key names drift
between regions and firmware versions.  Every field is therefore looked
up under a list of known spellings, first on the unwrapped status node,
then on the document root, then on the ``evStatus`` sub-object.  The
first hit wins.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any, NamedTuple, TypeVar

from pybluelink._constants import NO_WARNINGS_SUMMARY
from pybluelink.ingestion.normalize import parse_timestamp, safe_float, safe_int, to_enum
from pybluelink.models.status import ChargingState, DistanceUnit, VehicleStatus

_logger = logging.getLogger(__name__)

T = TypeVar("T")

STATUS_ENVELOPE_GROUPS: tuple[tuple[str, ...], ...] = (
    ("resMsg", "payload", "body", "response", "data"),
    ("vehicleStatus", "vehicleStatusInfo", "vehicleStatusDetail"),
    ("state", "vehicle"),
    ("Vehicle",),
)
_LOCATION_ENVELOPE_GROUPS: tuple[tuple[str, ...], ...] = (
    ("resMsg", "payload", "body", "response", "data"),
    ("vehicleLocation", "location", "lastKnownPosition", "coord", "pos"),
    ("vehicleStatus", "vehicleStatusInfo", "vehicleStatusDetail"),
    ("gpsDetail", "gpsDetails", "gpsInfo"),
    ("coord", "coordinates", "coordinate", "position"),
)

_EV_RANGE_KEYS = ("evModeRange", "evRange", "electricRange", "remainingEvRange", "remainingEVRange", "remainingEVrange")
_GAS_RANGE_KEYS = ("gasModeRange", "fuelRange", "fuelRangeKm", "engineRange")
_ODOMETER_KEYS = ("odometerKm", "Odometer", "odometer", "odo")
_REMAIN_TIME_KEYS = ("remainTime", "remainingChargeTime", "remainChargeTime", "remainingTime")
_EV_REMAIN_TIME_KEYS = (
    "remainTime",
    "remainingChargeTime",
    "remainChargeTime",
    "remainChargeTime2",
    "remainingTime",
    "chargeTime",
    "chargingRemainingTime",
)
_CONNECTOR_KEYS = ("connectorFastened", "connectorAttached")
_EV_CONNECTOR_KEYS = (
    *_CONNECTOR_KEYS,
    "connectorAttachedStatus",
    "connectorFastening",
    "chargerConnected",
    "chargingCableConnected",
)
_CHARGING_KEYS = ("charging", "isCharging", "charge", "chargeStatus", "batteryCharge", "chargingState")
_EV_CHARGING_KEYS = (
    "batteryCharge",
    "isCharging",
    "charging",
    "charge",
    "chargeStatus",
    "evChargeStatus",
    "chargerStatus",
    "chargingState",
)
_CHARGING_STATE_KEYS = ("chargingState", "chargingStatus")
_EV_CHARGING_STATE_KEYS = (*_CHARGING_STATE_KEYS, "chargeState", "chargeStatus", "evChargeStatus", "chargerStatus")
_STATE_VALUE_KEYS = ("state", "status", "value")
_WARNING_KEYS = ("tailLampStatus", "hazardStatus", "systemCutOffAlert", "sleepModeCheck", "ign3", "transCond")
LAST_UPDATED_FALLBACK_KEYS = (
    "updateTime",
    "updateDate",
    "statusTime",
    "lastStatusTime",
    "timeStamp",
    "timestamp",
    "time",
    "eventTime",
    "eventDate",
)

_TRUE_WORDS = frozenset({"on", "open", "true"})
_FALSE_WORDS = frozenset({"off", "closed", "false"})
_MAX_DEPTH = 32
_LOOSE_INT_KEYS = ("value", "total", "state", "status")
_HOUR_KEYS = ("hours", "hour", "hr")
_MINUTE_KEYS = ("minutes", "minute", "min")
_LOOSE_INT_TRIED = frozenset((*_LOOSE_INT_KEYS, *_HOUR_KEYS, *_MINUTE_KEYS))


class _Distance(NamedTuple):
    value: float
    unit: DistanceUnit


# ---------------------------------------------------------------------------
# Envelope handling
# ---------------------------------------------------------------------------


def _first_object(source: Mapping[str, Any] | None, keys: Iterable[str]) -> Mapping[str, Any] | None:
    if source is None:
        return None
    for key in keys:
        value = source.get(key)
        if isinstance(value, Mapping):
            return value
    return None


def _unwrap(tree: Mapping[str, Any], groups: Sequence[Sequence[str]]) -> Mapping[str, Any]:
    current = tree
    while True:
        for keys in groups:
            nested = _first_object(current, keys)
            if nested is not None:
                current = nested
                break
        else:
            return current


def unwrap_status_envelope(tree: Mapping[str, Any]) -> Mapping[str, Any]:
    """Descend through ``resMsg``/``vehicleStatus``/... wrappers to the status node."""
    return _unwrap(tree, STATUS_ENVELOPE_GROUPS)


# ---------------------------------------------------------------------------
# Loose coercion
# ---------------------------------------------------------------------------


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def coerce_loose_int(value: Any, *, _depth: int = 0) -> int | None:
    """Integer from a number, numeric string or ``{value|total|hours,minutes}`` object."""
    if value is None or isinstance(value, bool) or _depth > _MAX_DEPTH:
        return None
    if isinstance(value, (int, float, str)):
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return None
            try:
                return int(value)
            except ValueError:
                pass
        parsed = safe_float(value)
        return None if parsed is None else _round_half_up(parsed)
    depth = _depth + 1
    if isinstance(value, Mapping):
        for key in _LOOSE_INT_KEYS:
            if key in value:
                nested = coerce_loose_int(value[key], _depth=depth)
                if nested is not None:
                    return nested
        hours = _first_loose_int(value, _HOUR_KEYS, depth)
        minutes = _first_loose_int(value, _MINUTE_KEYS, depth)
        if hours is not None or minutes is not None:
            return (hours or 0) * 60 + (minutes or 0)
        return _first_non_none(
            coerce_loose_int(child, _depth=depth) for key, child in value.items() if key not in _LOOSE_INT_TRIED
        )
    if isinstance(value, list):
        return _first_non_none(coerce_loose_int(child, _depth=depth) for child in value)
    return None


def _first_loose_int(source: Mapping[str, Any], keys: Iterable[str], depth: int) -> int | None:
    return _first_non_none(coerce_loose_int(source.get(key), _depth=depth) for key in keys)


def coerce_flag(value: Any, *, _depth: int = 0) -> bool | None:
    """Boolean from a bool, number, on/open/true or off/closed/false word, or wrapper object."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        return None
    if isinstance(value, (int, float)):
        parsed = safe_int(value)
        return None if parsed is None else parsed != 0
    if isinstance(value, Mapping) and _depth < _MAX_DEPTH:
        for key in ("value", "status", "open"):
            if key in value:
                nested = coerce_flag(value[key], _depth=_depth + 1)
                if nested is not None:
                    return nested
    return None


def _first_non_none(values: Iterable[T | None]) -> T | None:
    for value in values:
        if value is not None:
            return value
    return None


def _lookup(
    scopes: Iterable[Mapping[str, Any] | None],
    keys: Sequence[str],
    coerce: Callable[[Any], T | None],
) -> T | None:
    """First successfully coerced value of *keys*, scanning *scopes* in order."""
    for scope in scopes:
        if scope is None:
            continue
        for key in keys:
            if key not in scope:
                continue
            result = coerce(scope[key])
            if result is not None:
                return result
    return None


# ---------------------------------------------------------------------------
# Distances
# ---------------------------------------------------------------------------


def _prefer_distance(current: _Distance | None, candidate: _Distance | None) -> _Distance | None:
    """Kilometers beat miles; with equal units the larger value wins."""
    if candidate is None:
        return current
    if current is None:
        return candidate
    if current.unit != candidate.unit:
        return current if current.unit is DistanceUnit.KILOMETERS else candidate
    return candidate if candidate.value > current.value else current


def _best_distance(candidates: Iterable[_Distance | None]) -> _Distance | None:
    best: _Distance | None = None
    for candidate in candidates:
        best = _prefer_distance(best, candidate)
    return best


def coerce_distance(value: Any, *, _depth: int = 0) -> _Distance | None:
    """Distance from a bare number (km) or a ``{value, unit}`` object."""
    if value is None or isinstance(value, bool) or _depth > _MAX_DEPTH:
        return None
    if isinstance(value, (int, float, str)):
        parsed = safe_float(value)
        return _Distance(parsed, DistanceUnit.KILOMETERS) if parsed is not None else None
    if isinstance(value, Mapping):
        amount = safe_float(value.get("value"))
        if amount is not None:
            unit = safe_int(value.get("unit"))
            return _Distance(amount, DistanceUnit.KILOMETERS if unit is None else DistanceUnit.from_api_unit(unit))
        if "distance" in value:
            return coerce_distance(value["distance"], _depth=_depth + 1)
        return None
    if isinstance(value, list):
        return _best_distance(coerce_distance(child, _depth=_depth + 1) for child in value)
    return None


def _km(value: Any) -> _Distance | None:
    parsed = safe_float(value)
    return _Distance(parsed, DistanceUnit.KILOMETERS) if parsed is not None else None


def _find_distance(value: Any, keys: Sequence[str], *, _depth: int = 0) -> _Distance | None:
    """Depth-first search for the first of *keys* holding a distance."""
    if _depth > _MAX_DEPTH:
        return None
    if isinstance(value, Mapping):
        direct = _lookup((value,), keys, coerce_distance)
        if direct is not None:
            return direct
        children: Iterable[Any] = value.values()
    elif isinstance(value, list):
        children = value
    else:
        return None
    return _first_non_none(_find_distance(child, keys, _depth=_depth + 1) for child in children)


_RANGE_BY_FUEL_KEYS = ("totalAvailableRange", "evModeRange", "distance")


def _range_by_fuel(value: Any, *, _depth: int = 0) -> _Distance | None:
    if value is None or _depth > _MAX_DEPTH:
        return None
    if isinstance(value, Mapping):
        direct = _first_non_none(coerce_distance(value.get(key)) for key in _RANGE_BY_FUEL_KEYS)
        if direct is not None:
            return direct
        skip = {key.lower() for key in _RANGE_BY_FUEL_KEYS}
        return _best_distance(
            _range_by_fuel(child, _depth=_depth + 1) for key, child in value.items() if key.lower() not in skip
        )
    if isinstance(value, list):
        return _best_distance(_range_by_fuel(child, _depth=_depth + 1) for child in value)
    return coerce_distance(value)


def _ev_status_range(ev_status: Mapping[str, Any]) -> _Distance | None:
    best: _Distance | None = None
    drv_distance = ev_status.get("drvDistance")
    if isinstance(drv_distance, (list, Mapping)):
        entries = drv_distance if isinstance(drv_distance, list) else [drv_distance]
        for entry in entries:
            if not isinstance(entry, Mapping):
                continue
            candidate = (
                _range_by_fuel(entry.get("rangeByFuel"))
                or coerce_distance(entry.get("totalAvailableRange"))
                or coerce_distance(entry.get("distance"))
            )
            best = _prefer_distance(best, candidate)
    elif drv_distance is not None:
        best = _range_by_fuel(drv_distance)

    if best is None:
        best = _range_by_fuel(ev_status.get("rangeByFuel"))
    if best is None:
        best = coerce_distance(ev_status.get("totalAvailableRange"))
    if best is None:
        best = coerce_distance(ev_status.get("dte"))
    return best


# ---------------------------------------------------------------------------
# Summaries, location, timestamps
# ---------------------------------------------------------------------------


def _status_text(value: Any, *, _depth: int = 0) -> str | None:
    if value is None or _depth > _MAX_DEPTH:
        return None
    if isinstance(value, Mapping):
        for key in ("value", "status"):
            if key in value:
                nested = _status_text(value[key], _depth=_depth + 1)
                if nested is not None:
                    return nested
        if "open" in value:
            flag = coerce_flag(value["open"])
            if flag is not None:
                return "OPEN" if flag else "CLOSED"
        return None
    if isinstance(value, bool):
        return "OPEN" if value else "CLOSED"
    if isinstance(value, (int, float)):
        return "OPEN" if value != 0 else "CLOSED"
    if isinstance(value, str):
        return value
    return None


def _compact_json(value: Any) -> str:
    try:
        return json.dumps(value, separators=(",", ":"))
    except (RecursionError, TypeError, ValueError):
        return f"<{type(value).__name__}>"


def summarise_positions(positions: Mapping[str, Any]) -> str | None:
    """Render ``{"frontLeft": 0, "trunk": true}`` as ``"frontLeft=CLOSED, trunk=OPEN"``.

    Values with no open/closed reading are shown as compact JSON.
    """
    parts = []
    for key, value in positions.items():
        text = _status_text(value)
        parts.append(f"{key}={_compact_json(value) if text is None else text}")
    return ", ".join(parts) if parts else None


def _door_positions(scopes: Sequence[Mapping[str, Any]]) -> dict[str, Any] | None:
    merged: dict[str, Any] | None = None
    for keys in (("doorStatus", "doors", "doorLockStatus"), ("doorOpen",)):
        found = _first_non_none(_first_object(scope, keys) for scope in scopes)
        if found is not None:
            merged = {**(merged or {}), **found}
    for label, keys in (("trunk", ("trunkOpen", "tailgateOpen", "trunkStatus")), ("hood", ("hoodOpen", "hoodStatus"))):
        flag = _lookup(scopes, keys, coerce_flag)
        if flag is not None:
            merged = {**(merged or {}), label: flag}
    return merged


def _valid_location(latitude: float | None, longitude: float | None) -> bool:
    return latitude is not None and longitude is not None and (latitude != 0.0 or longitude != 0.0)


def _find_location(node: Mapping[str, Any], *, _depth: int = 0) -> tuple[float, float] | None:
    if _depth > _MAX_DEPTH:
        return None
    latitude = _lookup((node,), ("lat", "latitude", "gpsLat"), safe_float)
    longitude = _lookup((node,), ("lon", "longitude", "gpsLon"), safe_float)
    if latitude is None or longitude is None:
        unwrapped = _unwrap(node, _LOCATION_ENVELOPE_GROUPS)
        if unwrapped is not node and "lat" in unwrapped and "lon" in unwrapped:
            inner_lat = safe_float(unwrapped["lat"])
            inner_lon = safe_float(unwrapped["lon"])
            if _valid_location(inner_lat, inner_lon):
                return inner_lat, inner_lon  # type: ignore[return-value]
        for child in node.values():
            if isinstance(child, Mapping):
                found = _find_location(child, _depth=_depth + 1)
                if found is not None:
                    return found
    if _valid_location(latitude, longitude):
        return latitude, longitude  # type: ignore[return-value]
    return None


def _active_warnings(node: Mapping[str, Any]) -> list[str]:
    active = []
    for key in _WARNING_KEYS:
        value = node.get(key)
        if isinstance(value, bool):
            hit = value
        elif isinstance(value, (int, float)):
            hit = safe_int(value) not in (None, 0)
        elif isinstance(value, str):
            hit = value != "0" and value.lower() != "false"
        else:
            hit = False
        if hit:
            active.append(key)
    return active


# ---------------------------------------------------------------------------
# Field groups
# ---------------------------------------------------------------------------


class _Scopes(NamedTuple):
    node: Mapping[str, Any]
    root: Mapping[str, Any] | None
    """Document root, or ``None`` when it is the status node itself."""
    ev: Mapping[str, Any] | None

    @property
    def base(self) -> tuple[Mapping[str, Any], ...]:
        return (self.node,) if self.root is None else (self.node, self.root)

    @property
    def all(self) -> tuple[Mapping[str, Any], ...]:
        return self.base if self.ev is None else (*self.base, self.ev)


def _base_then_ev(
    scopes: _Scopes,
    base_keys: Sequence[str],
    ev_keys: Sequence[str],
    coerce: Callable[[Any], T | None],
) -> T | None:
    """:func:`_lookup` on the base scopes, then on ``evStatus`` with its own spellings."""
    found = _lookup(scopes.base, base_keys, coerce)
    if found is None and scopes.ev is not None:
        found = _lookup((scopes.ev,), ev_keys, coerce)
    return found


def _energy_fields(scopes: _Scopes, fields: dict[str, Any]) -> None:
    battery = _base_then_ev(scopes, ("batteryLevel",), ("batteryStatus", "soc"), safe_float)
    if battery is not None:
        fields["battery_level"] = battery

    battery_obj = _first_non_none(_first_object(scope, ("battery",)) for scope in scopes.base)
    if battery_obj is not None:
        aux = _lookup((battery_obj,), ("batSoc", "auxBatteryLevel"), safe_float)
        if aux is not None:
            fields["auxiliary_battery_level"] = aux

    fuel = _lookup(scopes.all, ("fuelLevel", "fuelLevelPercent"), safe_float)
    if fuel is not None:
        fields["fuel_level"] = fuel


def _range_fields(scopes: _Scopes, fields: dict[str, Any]) -> None:
    total = _lookup(scopes.base, ("rangeKm",), _km)
    if total is None and scopes.ev is not None:
        total = _ev_status_range(scopes.ev)
    if total is not None:
        fields["range"], fields["range_unit"] = total

    for keys, value_field, unit_field in (
        (_EV_RANGE_KEYS, "ev_mode_range", "ev_mode_range_unit"),
        (_GAS_RANGE_KEYS, "gas_mode_range", "gas_mode_range_unit"),
    ):
        distance = _lookup(scopes.all, keys, coerce_distance)
        if distance is None and scopes.ev is not None:
            distance = _find_distance(scopes.ev.get("rangeByFuel"), keys) or _find_distance(
                scopes.ev.get("drvDistance"), keys
            )
        if distance is not None:
            fields[value_field], fields[unit_field] = distance

    odometer = _lookup(scopes.base, ("odometerKm",), _km)
    if odometer is None:
        odometer = (
            _lookup(scopes.all, ("Odometer",), _km)
            or _lookup(scopes.all, ("odometer", "odo"), coerce_distance)
            or _first_non_none(_find_distance(scope, _ODOMETER_KEYS) for scope in scopes.all)
        )
    if odometer is not None:
        fields["odometer"], fields["odometer_unit"] = odometer


def _remaining_charge_time(scopes: _Scopes) -> int | None:
    remain = _base_then_ev(scopes, _REMAIN_TIME_KEYS, _EV_REMAIN_TIME_KEYS, coerce_loose_int)
    if remain is not None or scopes.ev is None:
        return remain

    ev = scopes.ev
    remain_time2 = _first_object(ev, ("remainTime2",))
    if remain_time2 is None:
        return None
    plug = _lookup((ev,), ("batteryPlugin",), coerce_loose_int)
    if _lookup((ev,), ("batteryCharge",), coerce_flag) is True:
        estimate_keys: tuple[str, ...] = ("atc",)
    elif plug is not None and plug > 0:
        estimate_keys = {1: ("etc1",), 2: ("etc2", "etc3")}.get(plug, ("etc2",))
    else:
        return 0
    estimate = _first_object(remain_time2, estimate_keys)
    return _lookup((estimate,), ("value",), coerce_loose_int)


def _connector_fastened(scopes: _Scopes) -> bool | None:
    fastened = _base_then_ev(scopes, _CONNECTOR_KEYS, _EV_CONNECTOR_KEYS, coerce_flag)
    if fastened is None and scopes.ev is not None:
        plugin = _lookup((scopes.ev,), ("batteryPlugin",), coerce_loose_int)
        if plugin is not None and plugin >= 0:
            fastened = plugin > 0
    if fastened is not None:
        return fastened

    state = _lookup(scopes.all, ("connectorFasteningState",), coerce_loose_int)
    if state is None:
        connector = _first_non_none(_first_object(scope, ("connectorFastening", "connector")) for scope in scopes.all)
        if connector is not None:
            fastened = _lookup((connector,), (*_STATE_VALUE_KEYS, "connected", "fastened"), coerce_flag)
            if fastened is not None:
                return fastened
            state = _lookup((connector,), _STATE_VALUE_KEYS, coerce_loose_int)
    return None if state is None else state != 0


def _charging_fields(scopes: _Scopes, fields: dict[str, Any]) -> None:
    remain = _remaining_charge_time(scopes)
    if remain is not None:
        fields["remaining_charge_time_minutes"] = remain

    connector = _connector_fastened(scopes)
    if connector is not None:
        fields["connector_fastened"] = connector

    charging = _base_then_ev(scopes, _CHARGING_KEYS, _EV_CHARGING_KEYS, coerce_flag)
    if charging is not None:
        fields["charging"] = charging

    state = _base_then_ev(scopes, _CHARGING_STATE_KEYS, _EV_CHARGING_STATE_KEYS, coerce_loose_int)
    if state is None and scopes.ev is not None:
        charger = _first_object(scopes.ev, ("charging", "charger", "charge"))
        state = _lookup((charger,), _STATE_VALUE_KEYS, coerce_loose_int)
    if state is None:
        charger = _first_non_none(_first_object(scope, ("charging", "charge")) for scope in scopes.base)
        state = _lookup((charger,), _STATE_VALUE_KEYS, coerce_loose_int)
    if state is None and charging is not None:
        state = int(charging)
    if state is not None:
        fields["charging_state"] = to_enum(ChargingState, state)

    if scopes.ev is not None:
        _charge_limits(scopes.ev.get("targetSOC"), fields)


def _charge_limits(target_soc: Any, fields: dict[str, Any]) -> None:
    if isinstance(target_soc, list):
        for entry in target_soc:
            if not isinstance(entry, Mapping):
                continue
            level = safe_float(entry.get("targetSOClevel"))
            if level is None or level <= 0:
                continue
            plug_type = safe_int(entry.get("plugType"))
            if plug_type == 1:
                fields["charge_limit_ac"] = level
            elif plug_type == 2:
                fields["charge_limit_dc"] = level
    elif isinstance(target_soc, Mapping):
        ac = safe_float(target_soc.get("ac"))
        if ac is not None:
            fields["charge_limit_ac"] = ac
        dc = safe_float(target_soc.get("dc"))
        if dc is not None:
            fields["charge_limit_dc"] = dc


def _body_fields(scopes: _Scopes, fields: dict[str, Any]) -> None:
    doors = _door_positions(scopes.base)
    if doors is not None:
        fields["door_status_summary"] = summarise_positions(doors)
    windows = _first_non_none(_first_object(scope, ("windowStatus", "windows")) for scope in scopes.base)
    if windows is not None:
        fields["window_status_summary"] = summarise_positions(windows)

    for field_name, scope_set, keys in (
        ("acc", scopes.base, ("acc",)),
        ("doors_locked", scopes.all, ("doorsLocked", "doorLock", "doorLockStatus", "doorLockState")),
        ("climate_on", scopes.base, ("airCtrlOn", "climateOn", "airCondition", "climateStatus")),
        ("engine_on", scopes.base, ("engine", "engineOn", "isEngineOn")),
        ("trunk_open", scopes.base, ("trunkOpen", "trunkStatus")),
        ("hood_open", scopes.base, ("hoodOpen", "hoodStatus")),
    ):
        flag = _lookup(scope_set, keys, coerce_flag)
        if flag is not None:
            fields[field_name] = flag


def _diagnostic_fields(scopes: _Scopes, fields: dict[str, Any]) -> None:
    warnings = _active_warnings(scopes.node)
    fields["minor_warnings"] = ", ".join(warnings) if warnings else NO_WARNINGS_SUMMARY

    battery_warning = _lookup(scopes.base, ("batteryWarning", "batteryWarningLamp", "lowBatteryWarning"), coerce_flag)
    if battery_warning is not None:
        fields["battery_warning"] = battery_warning
    low_fuel = _lookup(scopes.all, ("lowFuelLight", "lowFuelWarning", "lowFuelIndicator"), coerce_flag)
    if low_fuel is not None:
        fields["low_fuel_light"] = low_fuel

    location = _find_location(scopes.node)
    if location is None and scopes.root is not None:
        location = _find_location(scopes.root)
    if location is not None:
        fields["latitude"], fields["longitude"] = location

    last_updated = _lookup(scopes.base, ("lastUpdated",), parse_timestamp) or _lookup(
        scopes.all, LAST_UPDATED_FALLBACK_KEYS, parse_timestamp
    )
    if last_updated is not None:
        fields["last_updated"] = last_updated


def normalize_legacy_status(vin: str | None, tree: Any) -> VehicleStatus:
    """Build a :class:`VehicleStatus` from a legacy ``status`` document.

    Never raises.  Input that is not a mapping yields a record with only
    ``vin`` set.
    """
    fields: dict[str, Any] = {"vin": vin}
    if not isinstance(tree, Mapping):
        _logger.debug("Legacy status for %s is not an object (%s)", vin, type(tree).__name__)
        return VehicleStatus(**fields)

    node = unwrap_status_envelope(tree)
    root = None if node is tree else tree
    ev_status = _first_object(node, ("evStatus",))
    if ev_status is None and root is not None:
        ev_status = _first_object(root, ("evStatus",))
    scopes = _Scopes(node=node, root=root, ev=ev_status)

    _energy_fields(scopes, fields)
    _range_fields(scopes, fields)
    _charging_fields(scopes, fields)
    _body_fields(scopes, fields)
    _diagnostic_fields(scopes, fields)
    return VehicleStatus(**fields)
