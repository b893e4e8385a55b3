"""Application constants."""

USER_AGENT = "CampusCoffee/0.0.1 (University Project)"
OSM_API_BASE_URL = "https://api.openstreetmap.org/api/0.6"
OSM_SOURCE_NAME = "OpenStreetMap"
EXIT_SUCCESS = 0
EXIT_NOT_FOUND = 10
EXIT_BAD_INPUT = 11
EXIT_CONFLICT = 12
EXIT_HARD_FAIL = 20
JSON_LOG_FIELDS = (
    "timestamp",
    "run_id",
    "stage",
    "node_id",
    "record_id",
    "event",
    "status",
    "duration_ms",
    "error_code",
    "message",
)
