import os

from .config import Config, env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = Config.DB_CONFIG

DEBUG = False
LOG_LEVEL = Config.LOG_LEVEL

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")

ZONE_SOURCE = os.getenv("ZONE_SOURCE", "database").lower()
GEOFENCE_ZONES = Config.GEOFENCE_ZONES
DAILY_DEADLINE = Config.DAILY_DEADLINE
CHECKOUT_ON_LOCATION_ERROR = Config.CHECKOUT_ON_LOCATION_ERROR
LOCATION_MAX_AGE_SECONDS = Config.LOCATION_MAX_AGE_SECONDS
LOCATION_TIMEOUT_SECONDS = Config.LOCATION_TIMEOUT_SECONDS
FACE_REFERENCE_DIR = Config.FACE_REFERENCE_DIR
FACE_MATCH_THRESHOLD = Config.FACE_MATCH_THRESHOLD
