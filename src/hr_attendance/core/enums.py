from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization."""

    ADMIN = "admin"
    USER = "user"


class AttendanceStatus(str, Enum):
    """Attendance status as persisted in the database."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"
    DISCORD_ABSENT = "discord-absent"


class AttendanceAction(str, Enum):
    CHECK_IN = "check-in"
    CHECK_OUT = "check-out"
