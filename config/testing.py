from .config import Config

SECRET_KEY = "test-secret"

DB_CONFIG = Config.DB_CONFIG

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
AUTO_SEED_DB = False

ZONE_SOURCE = "settings"
GEOFENCE_ZONES = Config.GEOFENCE_ZONES
DAILY_DEADLINE = "20:00"
CHECKOUT_ON_LOCATION_ERROR = True
LOCATION_MAX_AGE_SECONDS = 30.0
LOCATION_TIMEOUT_SECONDS = 10.0
# No face models in tests; the session gate is injected.
FACE_REFERENCE_DIR = None
FACE_MATCH_THRESHOLD = 0.6
