"""Descriptor catalog for the supported remote commands.

Maps a logical command name to its :data:`CommandDescriptor`.  Payload
templates are rendered from the typed params in
:mod:`pybluelink.models.control_params`; the builder never edits them.
"""

from __future__ import annotations

import enum

from pybluelink.exceptions import BlueLinkInvalidDescriptorError
from pybluelink.models.command import CommandDescriptor, DoorAction, RemoteDoorCommand, StaticCommand
from pybluelink.models.control_params import (
    ChargeLimitParams,
    ChargeParams,
    ControlAction,
    LegacyClimateParams,
    ModernClimateParams,
)

CLIMATE_SEGMENT = "temperature"
CLIMATE_SUFFIX = "control/temperature"
CHARGE_SEGMENT = "charge"


class CommandName(enum.StrEnum):
    """Logical commands known to the catalog."""

    LOCK = "lock"
    UNLOCK = "unlock"
    START = "start"
    STOP = "stop"
    START_CHARGE = "start_charge"
    STOP_CHARGE = "stop_charge"


def climate_command(
    action: ControlAction,
    *,
    control_token: str,
    device_id: str | None = None,
    temperature: float | None = None,
    defrost: bool = False,
    heating: bool = False,
    steering_wheel: bool = False,
    side_mirror: bool = False,
    rear_window: bool = False,
) -> StaticCommand:
    """Climate start/stop with distinct legacy and modern payloads.

    Raises
    ------
    pydantic.ValidationError
        *temperature* is outside 14-32 °C.
    """
    legacy = LegacyClimateParams(
        action=action,
        control_token=control_token,
        device_id=device_id,
        temperature=temperature,
        defrost=defrost,
        heating=heating,
        heating_steering_wheel=steering_wheel,
        heating_side_mirror=side_mirror,
        heating_rear_window=rear_window,
    )
    modern = ModernClimateParams(
        command=action,
        temperature=temperature,
        defrost=defrost,
        steering_wheel=steering_wheel,
        side_mirror=side_mirror,
        rear_window=rear_window,
    )
    return StaticCommand.v1_and_v2(CLIMATE_SEGMENT, CLIMATE_SUFFIX, legacy.to_payload(), modern.to_payload())


def charge_command(action: ControlAction, *, control_token: str, device_id: str | None = None) -> StaticCommand:
    """Start or stop charging."""
    params = ChargeParams(action=action, control_token=control_token, device_id=device_id)
    return StaticCommand.v1_only(CHARGE_SEGMENT, params.to_payload())


def set_charge_limit(
    limit_ac: int,
    limit_dc: int,
    *,
    control_token: str,
    device_id: str | None = None,
) -> StaticCommand:
    """AC/DC target state-of-charge limits in percent.

    Raises
    ------
    pydantic.ValidationError
        A limit is outside 0-100.
    """
    params = ChargeLimitParams(
        control_token=control_token,
        limit_ac=limit_ac,
        limit_dc=limit_dc,
        device_id=device_id,
    )
    return StaticCommand.v1_only(CHARGE_SEGMENT, params.to_payload())


def build_command(
    name: str,
    *,
    control_token: str,
    device_id: str | None = None,
    temperature: float | None = None,
    defrost: bool = False,
) -> CommandDescriptor:
    """Look up *name* and build its descriptor.

    Raises
    ------
    BlueLinkInvalidDescriptorError
        *name* is not a known command.
    """
    try:
        command = CommandName(name)
    except ValueError as exc:
        raise BlueLinkInvalidDescriptorError(f"Unsupported vehicle command: {name!r}") from exc

    if command is CommandName.LOCK:
        return RemoteDoorCommand(action=DoorAction.CLOSE)
    if command is CommandName.UNLOCK:
        return RemoteDoorCommand(action=DoorAction.OPEN)
    if command in (CommandName.START, CommandName.STOP):
        action = ControlAction.START if command is CommandName.START else ControlAction.STOP
        return climate_command(
            action,
            control_token=control_token,
            device_id=device_id,
            temperature=temperature,
            defrost=defrost,
        )
    action = ControlAction.START if command is CommandName.START_CHARGE else ControlAction.STOP
    return charge_command(action, control_token=control_token, device_id=device_id)
