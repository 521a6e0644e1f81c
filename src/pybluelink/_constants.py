"""Internal constants shared across the library."""

API_ROOT = "https://prd.eu-ccapi.hyundai.com:8080/api/v1/spa"

# ------------------------------------------------------------------
# Protocol generation markers and path namespaces
# ------------------------------------------------------------------

LEGACY_API_MARKER = "/api/v1/spa"
MODERN_API_MARKER = "/api/v2/spa"
CCS2_PREFIX = "ccs2/"
CONTROL_PREFIX = "control/"
REMOTE_DOOR_LOG_SEGMENT = "ccs2/remote/door"

CCS2_STATUS_SUFFIX = "ccs2/carstatus/latest"
LEGACY_STATUS_SUFFIX = "status/latest"

# ------------------------------------------------------------------
# Request headers
# ------------------------------------------------------------------

AUTHORIZATION_HEADER = "Authorization"
CCSP_AUTHORIZATION_HEADER = "AuthorizationCCSP"
CONTROL_TOKEN_HEADER = "ccsp-control-token"
DEVICE_ID_HEADER = "ccsp-device-id"

# ------------------------------------------------------------------
# Telemetry formatting
# ------------------------------------------------------------------

CCS2_DATE_FORMAT = "%Y%m%d%H%M%S"
CCS2_DATE_LENGTH = 14
CLOSED_SUMMARY = "Closed"
LOW_TIRE_PRESSURE_LABEL = "Low Tire Pressure: "
NO_WARNINGS_SUMMARY = "OK"

# ------------------------------------------------------------------
# Climate payload defaults
# ------------------------------------------------------------------

DEFAULT_HVAC_TYPE = 0
DEFAULT_CLIMATE_TEMP_CODE = "0CH"
DEFAULT_CLIMATE_UNIT = "C"
DEFAULT_CLIMATE_TEMP = "21.0"
DEFAULT_IGNITION_DURATION = 10


def temperature_to_code(temp_c: float) -> str:
    """Encode a °C setpoint as the backend's hex ``tempCode`` (``21.5`` → ``"15H"``)."""
    return f"{int(temp_c):02X}H"
