"""Vehicle status endpoints.

Endpoints:
  - ``/api/v2/spa/vehicles/<id>/ccs2/carstatus/latest`` (CCS2 vehicles)
  - ``/api/v1/spa/vehicles/<id>/status/latest`` (legacy fallback)
"""

from __future__ import annotations

import logging
from typing import Any

from pybluelink._api.endpoints import build_vehicle_uri
from pybluelink._constants import AUTHORIZATION_HEADER, CCS2_STATUS_SUFFIX, DEVICE_ID_HEADER, LEGACY_STATUS_SUFFIX
from pybluelink._transport import Transport
from pybluelink.config import BlueLinkConfig
from pybluelink.exceptions import BlueLinkTransportError
from pybluelink.ingestion.status import normalize_vehicle_status
from pybluelink.models.status import VehicleStatus

_logger = logging.getLogger(__name__)


def _status_headers(config: BlueLinkConfig, access_token: str) -> dict[str, str]:
    headers = {AUTHORIZATION_HEADER: f"Bearer {access_token}"}
    if config.device_id and config.device_id.strip():
        headers[DEVICE_ID_HEADER] = config.device_id
    return headers


async def _fetch_ccs2_status(config: BlueLinkConfig, transport: Transport, headers: dict[str, str]) -> Any | None:
    """Latest CCS2 document, or ``None`` when the backend cannot serve it."""
    url = build_vehicle_uri(config.api_root, config.vehicle_id, CCS2_STATUS_SUFFIX, use_spa_v2=True)
    vin = config.vin or "UNKNOWN"
    try:
        response = await transport.request_json("GET", url, headers=headers)
    except BlueLinkTransportError as exc:
        _logger.debug("CCS2 car status request failed for %s: %s", vin, exc)
        return None
    if response.ok:
        return response.body
    if 400 <= response.status < 500:
        _logger.debug("CCS2 car status unavailable for %s: status %s", vin, response.status)
    else:
        _logger.warning("CCS2 car status request failed for %s: %s", vin, response.status)
    return None


async def fetch_vehicle_status(
    config: BlueLinkConfig,
    transport: Transport,
    *,
    access_token: str,
) -> VehicleStatus:
    """Fetch and normalize the latest vehicle status.

    CCS2-capable vehicles are queried on ``ccs2/carstatus/latest`` first;
    any failure there falls back to the legacy ``status/latest`` endpoint.

    Raises
    ------
    BlueLinkTransportError
        The legacy fallback failed or answered with a non-2xx status.
    """
    headers = _status_headers(config, access_token)
    if config.ccs2_supported:
        document = await _fetch_ccs2_status(config, transport, headers)
        if document is not None:
            return normalize_vehicle_status(config.vin, document)

    url = build_vehicle_uri(config.api_root, config.vehicle_id, LEGACY_STATUS_SUFFIX, use_spa_v2=False)
    response = await transport.request_json("GET", url, headers=headers)
    if not response.ok:
        raise BlueLinkTransportError(
            f"Vehicle status request failed: HTTP {response.status}",
            status_code=response.status,
            endpoint=url,
        )
    _logger.debug("Vehicle status retrieved for %s", config.vin or "UNKNOWN")
    return normalize_vehicle_status(config.vin, response.body)
