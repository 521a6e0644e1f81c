"""Canonical vehicle status record.

Every field is independently optional.  ``None`` means *unknown*: a
normalizer that cannot find or coerce a value leaves the field unset
instead of writing a zero or ``False``.
"""

from __future__ import annotations

import enum
from datetime import datetime

from pydantic import Field

from pybluelink.models._base import BlueLinkBaseModel


class DistanceUnit(enum.StrEnum):
    """Unit attached to a distance reading."""

    KILOMETERS = "km"
    MILES = "mi"

    @classmethod
    def from_api_unit(cls, unit: int) -> DistanceUnit:
        """Map a backend unit code to a :class:`DistanceUnit`.

        Codes ``0``, ``2`` and ``3`` are miles; anything else is kilometers.
        """
        if unit in (0, 2, 3):
            return cls.MILES
        return cls.KILOMETERS


class ChargingState(enum.IntEnum):
    """Normalized charging state.

    Legacy payloads may carry other backend codes; those are kept as raw
    ints on :attr:`VehicleStatus.charging_state`.
    """

    IDLE = 0
    CHARGING = 1


class VehicleStatus(BlueLinkBaseModel):
    """Flat status record produced by the telemetry normalizers."""

    vin: str | None = None

    # --- Energy & range ---
    battery_level: float | None = None
    """High-voltage battery state of charge (%)."""
    range: float | None = None
    ev_mode_range: float | None = None
    gas_mode_range: float | None = None
    odometer: float | None = None
    fuel_level: float | None = None
    range_unit: DistanceUnit | None = None
    odometer_unit: DistanceUnit | None = None
    ev_mode_range_unit: DistanceUnit | None = None
    gas_mode_range_unit: DistanceUnit | None = None
    auxiliary_battery_level: float | None = None
    """12 V battery level (%)."""

    # --- Security ---
    doors_locked: bool | None = None
    door_status_summary: str | None = None
    window_status_summary: str | None = None
    trunk_open: bool | None = None
    hood_open: bool | None = None

    # --- Climate & drivetrain ---
    climate_on: bool | None = None
    engine_on: bool | None = None
    acc: bool | None = None
    """Ignition / driving-ready state."""

    # --- Charging ---
    charging: bool | None = None
    charging_state: ChargingState | int | None = None
    remaining_charge_time_minutes: int | None = None
    connector_fastened: bool | None = None
    charge_limit_ac: float | None = Field(default=None, alias="chargeLimitAC")
    charge_limit_dc: float | None = Field(default=None, alias="chargeLimitDC")

    # --- Diagnostics ---
    minor_warnings: str | None = None
    battery_warning: bool | None = None
    low_fuel_light: bool | None = None

    # --- Location & freshness ---
    latitude: float | None = None
    longitude: float | None = None
    last_updated: datetime | None = None
    """UTC instant of the backend snapshot."""
