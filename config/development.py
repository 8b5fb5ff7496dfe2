import os

from .config import Config, env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = Config.DB_CONFIG

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
# Optional: also seed demo offices and the demo admin on startup
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")

ZONE_SOURCE = Config.ZONE_SOURCE
GEOFENCE_ZONES = Config.GEOFENCE_ZONES
DAILY_DEADLINE = Config.DAILY_DEADLINE
CHECKOUT_ON_LOCATION_ERROR = Config.CHECKOUT_ON_LOCATION_ERROR
LOCATION_MAX_AGE_SECONDS = Config.LOCATION_MAX_AGE_SECONDS
LOCATION_TIMEOUT_SECONDS = Config.LOCATION_TIMEOUT_SECONDS
FACE_REFERENCE_DIR = Config.FACE_REFERENCE_DIR
FACE_MATCH_THRESHOLD = Config.FACE_MATCH_THRESHOLD
