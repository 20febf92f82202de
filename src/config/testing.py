import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_attendance_test"),
}

DEBUG = False
TESTING = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

TIMEZONE = os.getenv("TIMEZONE", "UTC")

OFFICE_LAT = 33.97331
OFFICE_LNG = 71.45652
MAX_DISTANCE_FROM_OFFICE_METERS = 500.0

FACE_MATCH_THRESHOLD = 0.6

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads-test")
PUBLIC_MEDIA_URL = "/media"

LOG_LEVEL = "WARNING"
LOG_FILE = None
