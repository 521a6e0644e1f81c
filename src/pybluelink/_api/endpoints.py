"""URI builders for the SPA vehicle API.

All builders accept an ``api_root`` in any of the shapes seen in the
wild (bare host, ``.../api/v1/spa`` or ``.../api/v2/spa``) and rewrite it
to the SPA version the endpoint lives under.
"""

from __future__ import annotations

import re

from pybluelink._constants import CCS2_PREFIX, LEGACY_API_MARKER, MODERN_API_MARKER

_SPA_VERSION_RE = re.compile(r"/api/v[12]/spa", re.IGNORECASE)


def _require(**values: str) -> None:
    for name, value in values.items():
        if not value or not value.strip():
            raise ValueError(f"{name} must not be blank")


def is_legacy_root(api_root: str) -> bool:
    """Whether *api_root* points at the legacy ``/api/v1/spa`` API."""
    return LEGACY_API_MARKER in api_root.lower()


def _ensure_spa_base(api_root: str, marker: str) -> str:
    base = api_root.strip()
    if "/api/" not in base.lower():
        base = base.removesuffix("/") + marker
    return _SPA_VERSION_RE.sub(marker, base)


def ensure_spa_v1_base(api_root: str) -> str:
    """Rewrite *api_root* to the ``/api/v1/spa`` base."""
    return _ensure_spa_base(api_root, LEGACY_API_MARKER)


def ensure_spa_v2_base(api_root: str) -> str:
    """Rewrite *api_root* to the ``/api/v2/spa`` base."""
    return _ensure_spa_base(api_root, MODERN_API_MARKER)


def _vehicle_base(api_root: str, vehicle_id: str, *, use_spa_v2: bool) -> str:
    base = ensure_spa_v2_base(api_root) if use_spa_v2 else ensure_spa_v1_base(api_root)
    if not base.endswith("/"):
        base += "/"
    return f"{base}vehicles/{vehicle_id}"


def build_control_uri(api_root: str, vehicle_id: str, segment: str) -> str:
    """``<base>/vehicles/<id>/control/<segment>`` on the root's own SPA version."""
    _require(api_root=api_root, vehicle_id=vehicle_id, segment=segment)
    base = _vehicle_base(api_root, vehicle_id, use_spa_v2=not is_legacy_root(api_root))
    return f"{base}/control/{segment}"


def build_remote_door_uri(api_root: str, vehicle_id: str) -> str:
    """Lock/unlock endpoint: ``control/door`` on legacy roots, ``ccs2/control/door`` otherwise."""
    _require(api_root=api_root, vehicle_id=vehicle_id)
    legacy = is_legacy_root(api_root)
    base = _vehicle_base(api_root, vehicle_id, use_spa_v2=not legacy)
    return f"{base}/control/door" if legacy else f"{base}/ccs2/control/door"


def build_vehicle_uri(
    api_root: str,
    vehicle_id: str,
    suffix: str,
    *,
    use_spa_v2: bool = True,
    ccs2_supported: bool = False,
) -> str:
    """General vehicle resource: ``<base>/vehicles/<id>/<suffix>``.

    With ``ccs2_supported`` the suffix is moved under ``ccs2/`` unless it
    already lives there.
    """
    _require(api_root=api_root, vehicle_id=vehicle_id)
    if ccs2_supported and suffix and not suffix.startswith(CCS2_PREFIX):
        suffix = CCS2_PREFIX + suffix
    base = _vehicle_base(api_root, vehicle_id, use_spa_v2=use_spa_v2)
    if not suffix:
        return base
    return f"{base}{suffix}" if suffix.startswith("/") else f"{base}/{suffix}"
