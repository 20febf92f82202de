import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_attendance"),
}

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

TIMEZONE = os.getenv("TIMEZONE", "UTC")

OFFICE_LAT = float(os.getenv("OFFICE_LAT", "33.97331"))
OFFICE_LNG = float(os.getenv("OFFICE_LNG", "71.45652"))
MAX_DISTANCE_FROM_OFFICE_METERS = float(os.getenv("MAX_DISTANCE_FROM_OFFICE_METERS", "500"))

FACE_MATCH_THRESHOLD = float(os.getenv("FACE_MATCH_THRESHOLD", "0.6"))

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "/var/lib/hr-attendance/uploads")
PUBLIC_MEDIA_URL = os.getenv("PUBLIC_MEDIA_URL", "/media")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "logs/hr_attendance.log")
