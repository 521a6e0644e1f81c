"""Remote command descriptors, built requests and command responses.

A :data:`CommandDescriptor` is a tagged union: either a
:class:`StaticCommand` (fixed path segment/suffix plus per-generation
payload templates) or a :class:`RemoteDoorCommand` (lock/unlock, whose
payload is shaped from the action at build time).  The ``kind`` field is
the discriminator, so a descriptor never carries fields that only make
sense for the other shape.
"""

from __future__ import annotations

import enum
from typing import Annotated, Any, Literal

from pydantic import Field, field_validator

from pybluelink.models._base import BlueLinkBaseModel

# ------------------------------------------------------------------
# Enums
# ------------------------------------------------------------------


class ApiGeneration(enum.StrEnum):
    """Protocol generation of the API root a request is sent to."""

    LEGACY = "v1"
    MODERN = "v2"


class DoorAction(enum.StrEnum):
    """Action token carried by remote door commands."""

    OPEN = "open"
    CLOSE = "close"


# ------------------------------------------------------------------
# Descriptors
# ------------------------------------------------------------------


class StaticCommand(BlueLinkBaseModel):
    """Command with a fixed legacy segment, CCS2 suffix and payload templates.

    ``legacy_segment`` is appended to ``vehicles/<id>/control/`` on legacy
    roots.  ``ccs2_suffix`` is resolved below ``vehicles/<id>/`` on modern
    roots (see :func:`pybluelink.command_builder.resolve_uri`).  Payload
    templates are never mutated by the builder and may be shared.
    """

    kind: Literal["static"] = "static"
    legacy_segment: str
    ccs2_suffix: str
    legacy_payload: dict[str, Any] | None = None
    modern_payload: dict[str, Any] | None = None

    @field_validator("legacy_segment", "ccs2_suffix")
    @classmethod
    def _segment_non_empty(cls, value: str) -> str:
        segment = value.strip()
        if not segment:
            raise ValueError("command path segment must be non-empty")
        return segment

    @classmethod
    def v1_only(cls, segment: str, payload: dict[str, Any] | None) -> StaticCommand:
        """Descriptor that uses the same segment and payload on both generations."""
        return cls(
            legacy_segment=segment,
            ccs2_suffix=segment,
            legacy_payload=payload,
            modern_payload=payload,
        )

    @classmethod
    def v1_and_v2(
        cls,
        segment: str,
        suffix: str,
        legacy_payload: dict[str, Any] | None,
        modern_payload: dict[str, Any] | None,
    ) -> StaticCommand:
        """Descriptor with distinct legacy and modern shapes."""
        return cls(
            legacy_segment=segment,
            ccs2_suffix=suffix,
            legacy_payload=legacy_payload,
            modern_payload=modern_payload,
        )


class RemoteDoorCommand(BlueLinkBaseModel):
    """Lock/unlock command routed through the dedicated door endpoint."""

    kind: Literal["remote_door"] = "remote_door"
    action: DoorAction


CommandDescriptor = Annotated[StaticCommand | RemoteDoorCommand, Field(discriminator="kind")]
"""Discriminated union of all command descriptor shapes."""


# ------------------------------------------------------------------
# Built request / response
# ------------------------------------------------------------------


class CommandRequest(BlueLinkBaseModel):
    """Everything a transport needs to send one command."""

    uri: str
    payload: dict[str, Any] | None = None
    requires_auth_token: bool
    """Whether the capability (CCSP control) token must authorize the request."""
    generation: ApiGeneration
    log_segment: str
    """Diagnostic path label; not used to build the request."""


class VehicleCommandResponse(BlueLinkBaseModel):
    """Acknowledgement returned by the backend for an accepted command."""

    control_segment: str | None = None
    action: str
    message_id: str | None = None
    body: dict[str, Any] | None = None
    remote_door: bool = False
    remote_door_action: DoorAction | None = None
