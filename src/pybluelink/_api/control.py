"""Remote command dispatch.

Builds the request for a descriptor, attaches the authorization headers
the active protocol generation needs, POSTs it once and parses the
acknowledgement.  Result polling is left to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pybluelink._constants import (
    AUTHORIZATION_HEADER,
    CCSP_AUTHORIZATION_HEADER,
    CONTROL_TOKEN_HEADER,
    DEVICE_ID_HEADER,
)
from pybluelink._redact import redact_for_log
from pybluelink._transport import Transport
from pybluelink.command_builder import build_request
from pybluelink.config import BlueLinkConfig
from pybluelink.exceptions import BlueLinkCommandError, BlueLinkConfigError
from pybluelink.ingestion.normalize import safe_str
from pybluelink.models.command import (
    CommandDescriptor,
    CommandRequest,
    RemoteDoorCommand,
    VehicleCommandResponse,
)

_logger = logging.getLogger(__name__)

MESSAGE_ID_KEYS: tuple[str, ...] = ("msgId", "messageId", "requestId", "id")


def build_command_headers(
    request: CommandRequest,
    *,
    access_token: str,
    control_token: str | None = None,
    device_id: str | None = None,
) -> dict[str, str]:
    """Authorization headers for *request*.

    Raises
    ------
    BlueLinkConfigError
        The request needs the control token and none was given.
    """
    headers: dict[str, str] = {}
    if request.requires_auth_token:
        if control_token is None or not control_token.strip():
            raise BlueLinkConfigError(f"Command {request.log_segment} requires a control token")
        bearer = f"Bearer {control_token}"
        headers[AUTHORIZATION_HEADER] = bearer
        headers[CCSP_AUTHORIZATION_HEADER] = bearer
    else:
        headers[AUTHORIZATION_HEADER] = f"Bearer {access_token}"
        if control_token is not None and control_token.strip():
            headers[CONTROL_TOKEN_HEADER] = control_token
    if device_id is not None and device_id.strip():
        headers[DEVICE_ID_HEADER] = device_id
    return headers


def _message_id(body: Mapping[str, Any]) -> str | None:
    for key in MESSAGE_ID_KEYS:
        value = body.get(key)
        if isinstance(value, Mapping):
            value = value.get("value")
        text = safe_str(value)
        if text is not None and text.strip():
            return text
    return None


def parse_command_response(
    descriptor: CommandDescriptor,
    request: CommandRequest,
    body: Any,
    *,
    action: str,
) -> VehicleCommandResponse:
    """Wrap the acknowledgement body; bodies that are not objects carry no message id."""
    is_door = isinstance(descriptor, RemoteDoorCommand)
    door_action = descriptor.action if isinstance(descriptor, RemoteDoorCommand) else None
    if not isinstance(body, Mapping):
        if body is not None:
            _logger.debug("Unparseable %s command response: %r", action, body)
        return VehicleCommandResponse(
            control_segment=request.log_segment,
            action=action,
            remote_door=is_door,
            remote_door_action=door_action,
        )
    return VehicleCommandResponse(
        control_segment=request.log_segment,
        action=action,
        message_id=_message_id(body),
        body=dict(body),
        remote_door=is_door,
        remote_door_action=door_action,
    )


async def send_vehicle_command(
    config: BlueLinkConfig,
    transport: Transport,
    descriptor: CommandDescriptor,
    *,
    access_token: str,
    control_token: str | None = None,
    action: str | None = None,
) -> VehicleCommandResponse:
    """Send one remote command and return the parsed acknowledgement.

    Parameters
    ----------
    config : BlueLinkConfig
        Supplies the API root, vehicle id, device id and CCS2 capability.
    transport : Transport
        HTTP transport.
    descriptor : CommandDescriptor
        Command to send, usually from :func:`pybluelink.catalog.build_command`.
    access_token : str
        OAuth access token.
    control_token : str or None
        CCSP control token.  Required whenever the built request needs it.
    action : str or None
        Label recorded on the response; defaults to the log segment.

    Raises
    ------
    BlueLinkCommandError
        The backend answered with a non-2xx status.
    BlueLinkTransportError
        The request could not be sent or the reply was not JSON.
    BlueLinkInvalidDescriptorError
        The descriptor has no payload for the active generation.
    """
    request = build_request(
        descriptor,
        config.api_root,
        config.vehicle_id,
        config.device_id,
        config.ccs2_supported,
    )
    label = action or request.log_segment
    headers = build_command_headers(
        request,
        access_token=access_token,
        control_token=control_token,
        device_id=config.device_id,
    )
    vin = config.vin or "UNKNOWN"
    if config.api_trace_enabled:
        _logger.debug("%s command for %s payload=%s", label, vin, redact_for_log(request.payload))

    response = await transport.request_json("POST", request.uri, headers=headers, payload=request.payload or {})
    if not response.ok:
        _logger.warning("%s command failed for %s: %s", label, vin, response.status)
        raise BlueLinkCommandError(
            f"{label} command failed: HTTP {response.status}",
            status_code=response.status,
            endpoint=request.uri,
        )

    _logger.debug("%s command accepted for %s via %s", label, vin, request.log_segment)
    return parse_command_response(descriptor, request, response.body, action=label)
