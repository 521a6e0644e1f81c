"""Turn a command descriptor into a concrete request.

The builder branches on two independent inputs:

* the protocol *generation* of the API root (legacy ``/api/v1/spa`` or
  modern), decided by :func:`detect_api_generation` alone;
* whether the target *vehicle* is CCS2-capable.

Each aspect of the request (payload, URI, token requirement, log label)
has its own function so the rules can be read and tested in isolation.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, assert_never

from pybluelink._api.endpoints import (
    build_control_uri,
    build_remote_door_uri,
    build_vehicle_uri,
    ensure_spa_v1_base,
    ensure_spa_v2_base,
    is_legacy_root,
)
from pybluelink._constants import CCS2_PREFIX, CONTROL_PREFIX, REMOTE_DOOR_LOG_SEGMENT
from pybluelink.exceptions import BlueLinkInvalidDescriptorError
from pybluelink.models.command import (
    ApiGeneration,
    CommandDescriptor,
    CommandRequest,
    RemoteDoorCommand,
    StaticCommand,
)

_logger = logging.getLogger(__name__)


def detect_api_generation(api_root: str) -> ApiGeneration:
    """Legacy when *api_root* contains ``/api/v1/spa`` (any case), else modern."""
    return ApiGeneration.LEGACY if is_legacy_root(api_root) else ApiGeneration.MODERN


def resolve_ccs2_suffix(suffix: str, ccs2_supported: bool) -> str:
    """Apply the modern-path prefixing rules to a CCS2 suffix.

    A suffix without ``/`` is a bare action and moves under ``control/``.
    On CCS2-capable vehicles the result then moves under ``ccs2/``.
    ``"lock"`` on a CCS2 vehicle therefore becomes ``"ccs2/control/lock"``.
    """
    if "/" not in suffix:
        suffix = CONTROL_PREFIX + suffix
    if ccs2_supported and not suffix.startswith(CCS2_PREFIX):
        suffix = CCS2_PREFIX + suffix
    return suffix


def select_payload(
    descriptor: CommandDescriptor,
    generation: ApiGeneration,
    *,
    device_id: str | None = None,
    ccs2_supported: bool = False,
) -> dict[str, Any]:
    """Return a fresh payload for *descriptor*.

    Raises
    ------
    BlueLinkInvalidDescriptorError
        A static descriptor has no payload template for *generation*.
    """
    if isinstance(descriptor, RemoteDoorCommand):
        action = descriptor.action.value
        if generation is ApiGeneration.LEGACY:
            payload: dict[str, Any] = {"action": action}
            if device_id and device_id.strip():
                payload["deviceId"] = device_id
            return payload
        payload = {"command": action}
        if not ccs2_supported:
            payload["action"] = action
        return payload

    if isinstance(descriptor, StaticCommand):
        template = descriptor.legacy_payload if generation is ApiGeneration.LEGACY else descriptor.modern_payload
        if template is None:
            raise BlueLinkInvalidDescriptorError(
                f"Command {descriptor.legacy_segment!r} has no {generation.name.lower()} payload"
            )
        payload = copy.deepcopy(template)
        if generation is ApiGeneration.MODERN and not ccs2_supported:
            if "command" in payload and "action" not in payload:
                payload["action"] = payload["command"]
        return payload

    assert_never(descriptor)


def resolve_uri(
    descriptor: CommandDescriptor,
    generation: ApiGeneration,
    api_root: str,
    vehicle_id: str,
    *,
    ccs2_supported: bool = False,
) -> str:
    """Absolute URI the command is POSTed to."""
    if isinstance(descriptor, RemoteDoorCommand):
        return build_remote_door_uri(api_root, vehicle_id)

    if isinstance(descriptor, StaticCommand):
        if generation is ApiGeneration.LEGACY:
            return build_control_uri(api_root, vehicle_id, descriptor.legacy_segment)
        return build_vehicle_uri(
            api_root,
            vehicle_id,
            resolve_ccs2_suffix(descriptor.ccs2_suffix, ccs2_supported),
            use_spa_v2=True,
        )

    assert_never(descriptor)


def requires_auth_token(
    descriptor: CommandDescriptor,
    generation: ApiGeneration,
    *,
    ccs2_supported: bool = False,
) -> bool:
    """Whether the CCSP control token must authorize the request.

    Never on legacy roots.  On modern roots: always for remote door
    commands and CCS2-capable vehicles, and for static suffixes already
    under ``ccs2/``.
    """
    if generation is ApiGeneration.LEGACY:
        return False

    if isinstance(descriptor, RemoteDoorCommand):
        return True

    if isinstance(descriptor, StaticCommand):
        return ccs2_supported or descriptor.ccs2_suffix.startswith(CCS2_PREFIX)

    assert_never(descriptor)


def log_segment(descriptor: CommandDescriptor, *, ccs2_supported: bool = False) -> str:
    """Short path label for logs and command responses."""
    if isinstance(descriptor, RemoteDoorCommand):
        return REMOTE_DOOR_LOG_SEGMENT

    if isinstance(descriptor, StaticCommand):
        segment = descriptor.ccs2_suffix
        if ccs2_supported and not segment.startswith(CCS2_PREFIX):
            return CCS2_PREFIX + segment
        return segment

    assert_never(descriptor)


def build_request(
    descriptor: CommandDescriptor,
    api_root: str,
    vehicle_id: str,
    device_id: str | None = None,
    ccs2_supported: bool = False,
    *,
    generation: ApiGeneration | None = None,
) -> CommandRequest:
    """Build the request for *descriptor* against *api_root*.

    Parameters
    ----------
    generation : ApiGeneration or None
        Force a protocol generation instead of detecting it from
        *api_root*.  The root is rewritten to the matching SPA version.

    Raises
    ------
    BlueLinkInvalidDescriptorError
        A static descriptor has no payload for the active generation.
    ValueError
        *api_root* or *vehicle_id* is blank.
    """
    if not api_root or not api_root.strip():
        raise ValueError("api_root must not be blank")
    if generation is None:
        generation = detect_api_generation(api_root)
    root = ensure_spa_v1_base(api_root) if generation is ApiGeneration.LEGACY else ensure_spa_v2_base(api_root)

    request = CommandRequest(
        uri=resolve_uri(descriptor, generation, root, vehicle_id, ccs2_supported=ccs2_supported),
        payload=select_payload(descriptor, generation, device_id=device_id, ccs2_supported=ccs2_supported),
        requires_auth_token=requires_auth_token(descriptor, generation, ccs2_supported=ccs2_supported),
        generation=generation,
        log_segment=log_segment(descriptor, ccs2_supported=ccs2_supported),
    )
    _logger.debug(
        "Built %s command %s (generation=%s ccs2=%s auth_token=%s)",
        descriptor.kind,
        request.log_segment,
        generation.value,
        ccs2_supported,
        request.requires_auth_token,
    )
    return request
