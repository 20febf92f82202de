"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import timedelta

WEEKS_PER_MONTH_BUCKETS = 4
# Upper day-of-month bound of the first three week buckets; the last bucket takes the rest.
WEEK_BUCKET_LIMITS = (7, 14, 21)

WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

DISPLAY_DATE_FORMAT = "%d/%m/%Y"
DAY_KEY_FORMAT = "%Y-%m-%d"

DEFAULT_OFFICE_LAT = 33.97331944724137
DEFAULT_OFFICE_LNG = 71.45657513924102
DEFAULT_MAX_DISTANCE_FROM_OFFICE_METERS = 500.0

EARTH_RADIUS_METERS = 6371000

MIN_WORKED_FOR_ATTENDANCE = timedelta(hours=2)
REQUIRED_WORKED_FOR_PRESENT = timedelta(hours=7, minutes=45)

FACE_DESCRIPTOR_LENGTH = 128
DEFAULT_FACE_MATCH_THRESHOLD = 0.6

IMAGE_PLACEHOLDER = "—"
IMAGE_JPEG_QUALITY = 80
ATTENDANCE_IMAGE_PREFIX = "attendance"

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 1024
