from __future__ import annotations

from datetime import datetime, timedelta, timezone

from hr_attendance.attendance.formatter import DayRecordFormatter, device_label, status_label
from hr_attendance.attendance.model import AttendanceRecord, DeviceInfo, GeoLocation
from hr_attendance.core.enums import AttendanceStatus


def test_status_labels():
    assert status_label(AttendanceStatus.PRESENT) == "Present"
    assert status_label(AttendanceStatus.LATE) == "Late"
    assert status_label(AttendanceStatus.ABSENT) == "Absent"
    assert status_label(AttendanceStatus.DISCORD_ABSENT) == "Absent"
    assert status_label("on-leave") == "Unknown"


def test_device_label_takes_first_token():
    assert device_label("Mozilla/5.0 (Windows NT 10.0; Win64; x64)") == "Mozilla/5.0"
    assert device_label(None) is None


def test_format_checkin(images):
    check_in = datetime(2024, 2, 5, 9, 0, tzinfo=timezone.utc)
    record = AttendanceRecord(
        user_id=1,
        display_date="05/02/2024",
        status=AttendanceStatus.PRESENT,
        check_in=check_in,
        check_out=check_in + timedelta(hours=8),
        location=GeoLocation(longitude=71.45, latitude=33.97, distance_from_office_meters=3.0),
        device=DeviceInfo(user_agent="Mozilla/5.0 (X11; Linux x86_64)"),
        image="attendance/1707123600000_1.jpeg",
        created_at=check_in,
    )

    entry = DayRecordFormatter(images).format(record).to_dict()

    assert entry == {
        "date": "2024-02-05",
        "weekday": "Mon",
        "status": "Present",
        "check_in": "2024-02-05T09:00:00+00:00",
        "check_out": "2024-02-05T17:00:00+00:00",
        "check_in_location": "Office",
        "check_out_location": "Office",
        "image": "https://cdn.test/attendance/1707123600000_1.jpeg",
        "device": "Mozilla/5.0",
    }


def test_format_backfilled_absence(images):
    record = AttendanceRecord(
        user_id=1,
        display_date="04/02/2024",
        status=AttendanceStatus.ABSENT,
        created_at=datetime(2024, 2, 4, tzinfo=timezone.utc),
    )

    entry = DayRecordFormatter(images).format(record)

    assert entry.weekday == "Sun"
    assert entry.check_in is None and entry.check_out is None
    assert entry.check_in_location is None
    assert entry.image == "—"
    assert entry.device is None


def test_date_is_taken_in_local_time(images):
    record = AttendanceRecord(
        user_id=1,
        display_date="06/02/2024",
        status=AttendanceStatus.LATE,
        check_in=datetime(2024, 2, 5, 22, 30, tzinfo=timezone.utc),
        created_at=datetime(2024, 2, 5, 22, 30, tzinfo=timezone.utc),
    )

    entry = DayRecordFormatter(images, tz=timezone(timedelta(hours=5))).format(record)

    assert entry.date == "2024-02-06"
    assert entry.weekday == "Tue"
    assert entry.status == "Late"
