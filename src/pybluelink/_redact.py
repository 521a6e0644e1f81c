"""Masking for request/response traces.

Command payloads and headers carry the CCSP control token, bearer
tokens and PIN material.  Everything logged with ``api_trace_enabled``
goes through :func:`redact_for_log` first.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

REDACTED = "<redacted>"
_MAX_DEPTH = 20

SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "pin",
        "password",
        "controltoken",
        "accesstoken",
        "refreshtoken",
        "authorization",
        "authorizationccsp",
        "ccsp-control-token",
        "stamp",
    }
)


def _is_sensitive(key: object) -> bool:
    return str(key).lower() in SENSITIVE_KEYS


def _truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else f"{text[:limit]}…<truncated>"


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Copy of *value* with sensitive keys masked and long strings cut.

    Header names and JSON keys are matched case-insensitively.  The input
    is never modified.
    """
    if _depth > _MAX_DEPTH:
        return "<max-depth>"
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return _truncate(value, max_string)
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"

    depth = _depth + 1
    if isinstance(value, Mapping):
        return {
            str(key): REDACTED if _is_sensitive(key) else redact_for_log(item, max_string=max_string, _depth=depth)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [redact_for_log(item, max_string=max_string, _depth=depth) for item in value]
    return repr(value)
