"""Normalization helpers.

Centralizes defensive parsing of telemetry trees.  Nothing here raises:
a missing path, a ``null`` or a value of the wrong type all come back as
``None`` so the normalizers can treat every field as independently
optional.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from enum import IntEnum
from typing import Any, TypeVar

from pybluelink._constants import CCS2_DATE_FORMAT, CCS2_DATE_LENGTH

T = TypeVar("T")
TEnum = TypeVar("TEnum", bound=IntEnum)

# ---------------------------------------------------------------------------
# Scalar coercion
# ---------------------------------------------------------------------------


def safe_float(value: Any) -> float | None:
    """Finite float, or ``None``.  Integers too large for a float are rejected."""
    if value is None or value == "" or value == "--" or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(result):
        return None
    return result


def safe_int(value: Any) -> int | None:
    """Truncating integer; numeric strings such as ``"45.7"`` give ``45`` like the number would."""
    parsed = safe_float(value)
    if parsed is None:
        return None
    return int(parsed)


def safe_str(value: Any) -> str | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value if value else None
    if isinstance(value, (int, float)):
        try:
            return str(value)
        except ValueError:
            # int above the interpreter's digit limit
            return None
    return None


def safe_bool(value: Any) -> bool | None:
    """Booleans as-is; numbers as ``0`` → ``False``, non-zero → ``True``."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        if isinstance(value, float) and math.isnan(value):
            return None
        return value != 0
    return None


def to_enum(enum_cls: type[TEnum], value: Any, default: TEnum | None = None) -> TEnum | int | None:
    parsed = safe_int(value)
    if parsed is None:
        return default
    try:
        return enum_cls(parsed)
    except ValueError:
        return parsed


# ---------------------------------------------------------------------------
# Path extraction
# ---------------------------------------------------------------------------


def extract(tree: Any, *path: str, coerce: Callable[[Any], T | None]) -> T | None:
    """Walk *path* through nested mappings and coerce the terminal value.

    Returns ``None`` when any intermediate node is missing, ``null`` or not
    a mapping, when the terminal key is absent or ``null``, or when
    *coerce* rejects the terminal value.
    """
    if not path:
        return None
    node = tree
    for key in path[:-1]:
        if not isinstance(node, Mapping):
            return None
        node = node.get(key)
    if not isinstance(node, Mapping):
        return None
    value = node.get(path[-1])
    if value is None:
        return None
    return coerce(value)


def extract_float(tree: Any, *path: str) -> float | None:
    return extract(tree, *path, coerce=safe_float)


def extract_int(tree: Any, *path: str) -> int | None:
    return extract(tree, *path, coerce=safe_int)


def extract_bool(tree: Any, *path: str) -> bool | None:
    return extract(tree, *path, coerce=safe_bool)


def extract_str(tree: Any, *path: str) -> str | None:
    return extract(tree, *path, coerce=safe_str)


# ---------------------------------------------------------------------------
# Timestamps
# ---------------------------------------------------------------------------


def parse_compact_timestamp(value: str | None) -> datetime | None:
    """Parse a ``yyyyMMddHHmmss`` UTC timestamp (e.g. ``"20240915140000"``).

    Strings shorter than 14 characters, or that do not match the pattern
    exactly, give ``None``.
    """
    if value is None or len(value) < CCS2_DATE_LENGTH:
        return None
    try:
        return datetime.strptime(value, CCS2_DATE_FORMAT).replace(tzinfo=UTC)
    except ValueError:
        return None


def parse_timestamp(value: Any) -> datetime | None:
    """Best-effort parse of the timestamp spellings seen in legacy payloads.

    Accepts ISO-8601 strings, 14-digit compact timestamps, and epoch
    seconds (10 digits) or milliseconds (anything else numeric).
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        parsed_number = safe_float(value)
        if parsed_number is None:
            return None
        text = str(int(parsed_number))
    elif isinstance(value, str):
        text = value.strip()
    else:
        return None
    if not text:
        return None

    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        parsed = None
    if parsed is not None and not text.isdigit():
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=UTC)
        return parsed.astimezone(UTC)

    if not text.isdigit():
        return None
    if len(text) == CCS2_DATE_LENGTH:
        compact = parse_compact_timestamp(text)
        if compact is not None:
            return compact
    try:
        epoch = int(text)
    except ValueError:
        return None
    if epoch <= 0:
        return None
    try:
        if len(text) == 10:
            return datetime.fromtimestamp(epoch, tz=UTC)
        return datetime.fromtimestamp(epoch / 1000, tz=UTC)
    except (OverflowError, OSError, ValueError):
        return None
