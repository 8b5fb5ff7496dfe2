import json
import os

# Demo geofences; override with a JSON list in GEOFENCE_ZONES.
DEFAULT_GEOFENCE_ZONES = [
    {"id": "1", "name": "Main Office", "latitude": 28.470046, "longitude": 77.493496, "radius": 100},
    {"id": "2", "name": "Branch Office", "latitude": 28.6236477, "longitude": 77.3073903, "radius": 100},
    {"id": "3", "name": "SRM Office", "latitude": 28.796565, "longitude": 77.538373, "radius": 1000},
]


def env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def load_zones():
    raw = os.getenv("GEOFENCE_ZONES", "").strip()
    if not raw:
        return list(DEFAULT_GEOFENCE_ZONES)
    zones = json.loads(raw)
    if not isinstance(zones, list):
        raise ValueError("GEOFENCE_ZONES must be a JSON list")
    return zones


class Config:
    DB_CONFIG = {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", ""),
        "database": os.getenv("DB_NAME", "geo_attendance"),
    }

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # "settings" reads GEOFENCE_ZONES, "database" loads the offices table at startup.
    ZONE_SOURCE = os.getenv("ZONE_SOURCE", "settings").lower()
    GEOFENCE_ZONES = load_zones()

    DAILY_DEADLINE = os.getenv("DAILY_DEADLINE", "20:00")
    CHECKOUT_ON_LOCATION_ERROR = env_flag("CHECKOUT_ON_LOCATION_ERROR", "1")

    # The browser asks for a fresh fix; this only covers the trip to the server.
    LOCATION_MAX_AGE_SECONDS = float(os.getenv("LOCATION_MAX_AGE_SECONDS", "30"))
    LOCATION_TIMEOUT_SECONDS = float(os.getenv("LOCATION_TIMEOUT_SECONDS", "10"))

    FACE_REFERENCE_DIR = os.getenv("FACE_REFERENCE_DIR", "pictures")
    FACE_MATCH_THRESHOLD = float(os.getenv("FACE_MATCH_THRESHOLD", "0.6"))
