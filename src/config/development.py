import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_attendance"),
}

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# Month boundaries and day keys are computed in this zone
TIMEZONE = os.getenv("TIMEZONE", "UTC")

OFFICE_LAT = float(os.getenv("OFFICE_LAT", "33.97331"))
OFFICE_LNG = float(os.getenv("OFFICE_LNG", "71.45652"))
MAX_DISTANCE_FROM_OFFICE_METERS = float(os.getenv("MAX_DISTANCE_FROM_OFFICE_METERS", "500"))

FACE_MATCH_THRESHOLD = float(os.getenv("FACE_MATCH_THRESHOLD", "0.6"))

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
PUBLIC_MEDIA_URL = os.getenv("PUBLIC_MEDIA_URL", "/media")

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_FILE = os.getenv("LOG_FILE") or None
