"""Pick the right normalizer for a status document."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pybluelink.ingestion.ccs2 import normalize_ccs2_status
from pybluelink.ingestion.legacy import normalize_legacy_status, unwrap_status_envelope
from pybluelink.models.status import VehicleStatus

_logger = logging.getLogger(__name__)

CCS2_SECTIONS: frozenset[str] = frozenset(
    {"Drivetrain", "Green", "Cabin", "Body", "Chassis", "Electronics", "Location", "DrivingReady"}
)


def is_ccs2_document(node: Mapping[str, Any]) -> bool:
    """Whether *node* carries any CCS2 top-level section."""
    return not CCS2_SECTIONS.isdisjoint(node.keys())


def normalize_vehicle_status(vin: str | None, tree: Any) -> VehicleStatus:
    """Normalize a status document of either shape into a :class:`VehicleStatus`."""
    if not isinstance(tree, Mapping):
        return VehicleStatus(vin=vin)
    node = unwrap_status_envelope(tree)
    if is_ccs2_document(node):
        _logger.debug("Normalizing CCS2 status for %s", vin)
        return normalize_ccs2_status(vin, node)
    _logger.debug("Normalizing legacy status for %s", vin)
    return normalize_legacy_status(vin, tree)
