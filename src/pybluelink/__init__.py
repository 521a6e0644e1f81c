"""pybluelink - Async Python client for the Hyundai/Kia BlueLink vehicle API."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pybluelink")
except PackageNotFoundError:
    __version__ = "0+local"
from pybluelink._api.control import send_vehicle_command
from pybluelink._api.status import fetch_vehicle_status
from pybluelink._transport import HttpTransport, Transport, TransportResponse
from pybluelink.catalog import CommandName, build_command, set_charge_limit
from pybluelink.command_builder import build_request, detect_api_generation
from pybluelink.config import BlueLinkConfig
from pybluelink.exceptions import (
    BlueLinkCommandError,
    BlueLinkConfigError,
    BlueLinkError,
    BlueLinkInvalidDescriptorError,
    BlueLinkTransportError,
)
from pybluelink.ingestion import normalize_ccs2_status, normalize_legacy_status, normalize_vehicle_status
from pybluelink.models import (
    ApiGeneration,
    ChargingState,
    CommandDescriptor,
    CommandRequest,
    DistanceUnit,
    DoorAction,
    RemoteDoorCommand,
    StaticCommand,
    VehicleCommandResponse,
    VehicleStatus,
)

__all__ = [
    "__version__",
    "ApiGeneration",
    "BlueLinkCommandError",
    "BlueLinkConfig",
    "BlueLinkConfigError",
    "BlueLinkError",
    "BlueLinkInvalidDescriptorError",
    "BlueLinkTransportError",
    "ChargingState",
    "CommandDescriptor",
    "CommandName",
    "CommandRequest",
    "DistanceUnit",
    "DoorAction",
    "HttpTransport",
    "RemoteDoorCommand",
    "StaticCommand",
    "Transport",
    "TransportResponse",
    "VehicleCommandResponse",
    "VehicleStatus",
    "build_command",
    "build_request",
    "detect_api_generation",
    "fetch_vehicle_status",
    "normalize_ccs2_status",
    "normalize_legacy_status",
    "normalize_vehicle_status",
    "send_vehicle_command",
    "set_charge_limit",
]
