"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

EARTH_RADIUS_METERS = 6_371_000.0

DEFAULT_ZONE_RADIUS_METERS = 100.0
DEFAULT_DAILY_DEADLINE = time(20, 0)

DEFAULT_LOCATION_TIMEOUT_SECONDS = 10.0
DEFAULT_LOCATION_MAX_AGE_SECONDS = 0.0

DEFAULT_FACE_MATCH_THRESHOLD = 0.6
UNKNOWN_FACE_LABEL = "unknown"
