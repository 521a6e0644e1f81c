"""Ingestion layer.

This package turns raw status documents from the BlueLink backend (CCS2
or legacy shape) into normalized :class:`~pybluelink.models.VehicleStatus`
records.
"""

from pybluelink.ingestion.ccs2 import normalize_ccs2_status
from pybluelink.ingestion.legacy import normalize_legacy_status
from pybluelink.ingestion.status import normalize_vehicle_status

__all__ = [
    "normalize_ccs2_status",
    "normalize_legacy_status",
    "normalize_vehicle_status",
]
