from __future__ import annotations

from datetime import timezone, tzinfo
from typing import Optional

from ..common.datetime_utils import day_key, to_local
from ..core.constants import IMAGE_PLACEHOLDER, WEEKDAY_LABELS
from ..core.enums import AttendanceStatus
from ..storage.image_store import ImageStore
from .model import AttendanceRecord, DayEntry

OFFICE_LOCATION_LABEL = "Office"

_STATUS_LABELS = {
    AttendanceStatus.PRESENT: "Present",
    AttendanceStatus.LATE: "Late",
    AttendanceStatus.ABSENT: "Absent",
    AttendanceStatus.DISCORD_ABSENT: "Absent",
}


def status_label(status) -> str:
    return _STATUS_LABELS.get(status, "Unknown")


def device_label(user_agent: Optional[str]) -> Optional[str]:
    if not user_agent:
        return None
    return user_agent.split(" ")[0]


class DayRecordFormatter:
    """Turns reconciled records into presentation-ready day entries.

    The calendar date is taken in local time, not UTC, so that it matches the
    wall-clock day of the check-in.
    """

    def __init__(self, images: ImageStore, *, tz: tzinfo = timezone.utc):
        self._images = images
        self._tz = tz

    def format(self, record: AttendanceRecord) -> DayEntry:
        local = to_local(record.effective_at, self._tz)
        location = OFFICE_LOCATION_LABEL if record.location else None

        return DayEntry(
            date=day_key(local),
            weekday=WEEKDAY_LABELS[local.weekday()],
            status=status_label(record.status),
            check_in=record.check_in.isoformat() if record.check_in else None,
            check_out=record.check_out.isoformat() if record.check_out else None,
            check_in_location=location,
            check_out_location=location,
            image=self._images.url_for(record.image) if record.image else IMAGE_PLACEHOLDER,
            device=device_label(record.device.user_agent if record.device else None),
        )

    def format_all(self, records) -> list[DayEntry]:
        return [self.format(r) for r in records]
