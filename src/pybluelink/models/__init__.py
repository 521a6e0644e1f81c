"""Data models for pybluelink."""

from pybluelink.models._base import BlueLinkBaseModel
from pybluelink.models.command import (
    ApiGeneration,
    CommandDescriptor,
    CommandRequest,
    DoorAction,
    RemoteDoorCommand,
    StaticCommand,
    VehicleCommandResponse,
)
from pybluelink.models.control_params import (
    ChargeLimitParams,
    ChargeParams,
    ControlAction,
    ControlParams,
    LegacyClimateParams,
    ModernClimateParams,
)
from pybluelink.models.status import ChargingState, DistanceUnit, VehicleStatus

__all__ = [
    "ApiGeneration",
    "BlueLinkBaseModel",
    "ChargeLimitParams",
    "ChargeParams",
    "ChargingState",
    "CommandDescriptor",
    "CommandRequest",
    "ControlAction",
    "ControlParams",
    "DistanceUnit",
    "DoorAction",
    "LegacyClimateParams",
    "ModernClimateParams",
    "RemoteDoorCommand",
    "StaticCommand",
    "VehicleCommandResponse",
    "VehicleStatus",
]
