"""Client configuration for pybluelink."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pybluelink._constants import API_ROOT
from pybluelink.exceptions import BlueLinkConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class BlueLinkConfig:
    """Per-vehicle configuration.

    Parameters
    ----------
    api_root : str
        CC API root.  A root containing ``/api/v1/spa`` selects the legacy
        protocol generation; anything else is treated as the modern one.
    vehicle_id : str
        Backend vehicle identifier (not the VIN).
    vin : str or None
        Vehicle identification number, used for logging and as the
        ``vin`` of normalized status records.
    device_id : str or None
        Registered device id.  Sent as ``ccsp-device-id`` and included in
        legacy payloads when non-blank.
    ccs2_supported : bool
        Whether the *vehicle* supports the CCS2 schema.  Independent of
        the protocol generation of ``api_root``.
    request_timeout : float
        Total timeout in seconds for a single HTTP request.
    api_trace_enabled : bool
        Log redacted request/response payloads at DEBUG level.
    """

    vehicle_id: str = ""
    api_root: str = API_ROOT
    vin: str | None = None
    device_id: str | None = None
    ccs2_supported: bool = False
    request_timeout: float = 30.0
    api_trace_enabled: bool = False

    def __post_init__(self) -> None:
        if not self.api_root or not self.api_root.strip():
            raise BlueLinkConfigError("api_root must be non-empty")

    @classmethod
    def from_env(cls, **overrides: Any) -> BlueLinkConfig:
        """Create configuration from ``BLUELINK_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "BLUELINK_API_ROOT": "api_root",
            "BLUELINK_VEHICLE_ID": "vehicle_id",
            "BLUELINK_VIN": "vin",
            "BLUELINK_DEVICE_ID": "device_id",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        if "ccs2_supported" not in overrides:
            config_kwargs["ccs2_supported"] = _env_bool(env.get("BLUELINK_CCS2_SUPPORTED"), False)

        timeout_env = env.get("BLUELINK_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            try:
                config_kwargs["request_timeout"] = float(timeout_env)
            except ValueError as exc:
                raise BlueLinkConfigError(f"BLUELINK_REQUEST_TIMEOUT is not a number: {timeout_env!r}") from exc

        if "api_trace_enabled" not in overrides:
            config_kwargs["api_trace_enabled"] = _env_bool(env.get("BLUELINK_API_TRACE_ENABLED"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
