"""Typed payload builders for the command catalog.

Each model validates its inputs and renders the JSON object the backend
expects for one protocol generation.  The rendered dicts become the
static payload templates of :class:`~pybluelink.models.command.StaticCommand`.
"""

from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from pybluelink._constants import (
    DEFAULT_CLIMATE_TEMP,
    DEFAULT_CLIMATE_TEMP_CODE,
    DEFAULT_CLIMATE_UNIT,
    DEFAULT_HVAC_TYPE,
    DEFAULT_IGNITION_DURATION,
    temperature_to_code,
)


class ControlAction(enum.StrEnum):
    """``action``/``command`` token for start/stop style commands."""

    START = "start"
    STOP = "stop"


class ControlParams(BaseModel):
    """Base class for control-parameter models."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON object sent as the request body."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class _DeviceScopedParams(ControlParams):
    """Params whose legacy payload carries the registered device id."""

    device_id: str | None = None

    @field_validator("device_id")
    @classmethod
    def _blank_device_id_is_none(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value


class ChargeParams(_DeviceScopedParams):
    """Start/stop charging (legacy ``control/charge``)."""

    action: ControlAction
    control_token: str


class ChargeLimitParams(_DeviceScopedParams):
    """AC/DC target state-of-charge limits (legacy ``control/charge``)."""

    control_token: str
    limit_ac: int = Field(..., ge=0, le=100, serialization_alias="chargingLimitAC")
    limit_dc: int = Field(..., ge=0, le=100, serialization_alias="chargingLimitDC")


class LegacyClimateParams(_DeviceScopedParams):
    """Climate start/stop payload for the legacy ``control/temperature`` segment."""

    action: ControlAction
    control_token: str
    temperature: float | None = Field(default=None, ge=14.0, le=32.0)
    """Cabin setpoint in °C."""
    defrost: bool = False
    heating: bool = False
    heating_steering_wheel: bool = False
    heating_side_mirror: bool = False
    heating_rear_window: bool = False

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "action": self.action.value,
            "controlToken": self.control_token,
            "hvacType": DEFAULT_HVAC_TYPE,
            "options": {
                "defrost": self.defrost,
                "heating1": int(self.heating),
                "heatingSteeringWheel": int(self.heating_steering_wheel),
                "heatingSideMirror": int(self.heating_side_mirror),
                "heatingRearWindow": int(self.heating_rear_window),
            },
        }
        if self.temperature is not None:
            payload["airTemp"] = f"{self.temperature:.1f}"
            payload["tempCode"] = temperature_to_code(self.temperature)
        else:
            payload["tempCode"] = DEFAULT_CLIMATE_TEMP_CODE
        payload["unit"] = DEFAULT_CLIMATE_UNIT
        if self.device_id is not None:
            payload["deviceId"] = self.device_id
        return payload


class ModernClimateParams(ControlParams):
    """Climate start/stop payload for the modern ``control/temperature`` suffix.

    Carries both ``command`` and ``action`` so older V2 backends that only
    read ``action`` still understand it.
    """

    command: ControlAction
    temperature: float | None = Field(default=None, ge=14.0, le=32.0)
    defrost: bool = False
    steering_wheel: bool = False
    side_mirror: bool = False
    rear_window: bool = False

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "command": self.command.value,
            "action": self.command.value,
        }
        if self.temperature is not None:
            payload["temp"] = self.temperature
        payload["defrost"] = self.defrost
        payload["steeringWheel"] = self.steering_wheel
        payload["sideMirror"] = self.side_mirror
        payload["rearWindow"] = self.rear_window

        if self.command == ControlAction.START:
            payload["ignitionDuration"] = DEFAULT_IGNITION_DURATION
            payload["strgWhlHeating"] = int(self.steering_wheel)
            payload["sideRearMirrorHeating"] = int(self.side_mirror)
            payload["windshieldFrontDefogState"] = int(self.defrost)
            payload["hvacTempType"] = 1
            if self.temperature is not None:
                payload["hvacTemp"] = f"{self.temperature:.1f}"
                payload["tempCode"] = temperature_to_code(self.temperature)
            else:
                payload["hvacTemp"] = DEFAULT_CLIMATE_TEMP
                payload["tempCode"] = DEFAULT_CLIMATE_TEMP_CODE
            payload["tempUnit"] = DEFAULT_CLIMATE_UNIT
            payload["unit"] = DEFAULT_CLIMATE_UNIT
            payload["drvSeatLoc"] = "L"
        else:
            payload["hvacType"] = 1
            payload["drvSeatLoc"] = "L"
        return payload
