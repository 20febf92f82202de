from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from hr_attendance.common.datetime_utils import day_key, display_date, parse_month, to_local, week_bucket
from hr_attendance.core.exceptions import InvalidMonthFormat, ValidationError


def test_parse_month_gives_exclusive_end():
    m = parse_month("2024-02")

    assert (m.year, m.month_index) == (2024, 1)
    assert m.start == datetime(2024, 2, 1, tzinfo=timezone.utc)
    assert m.end == datetime(2024, 3, 1, tzinfo=timezone.utc)


def test_parse_month_december_rolls_into_next_year():
    m = parse_month("2024-12")

    assert m.end == datetime(2025, 1, 1, tzinfo=timezone.utc)


def test_parse_month_uses_local_boundaries():
    tz = timezone(timedelta(hours=5))
    m = parse_month("2024-02", tz)

    assert m.start.utcoffset() == timedelta(hours=5)
    assert m.start.astimezone(timezone.utc) == datetime(2024, 1, 31, 19, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "value",
    ["2024-13", "2024-00", "feb-2024", "2024-2", "2024-02-01", "", None, "0000-05", "9999-12", "\uff12\uff10\uff12\uff14-\uff10\uff12"],
)
def test_parse_month_rejects_bad_input(value):
    with pytest.raises(InvalidMonthFormat) as exc:
        parse_month(value)

    assert isinstance(exc.value, ValidationError)
    assert exc.value.status_code == 400


@pytest.mark.parametrize("day,bucket", [(1, 0), (7, 0), (8, 1), (14, 1), (15, 2), (21, 2), (22, 3), (31, 3)])
def test_week_bucket(day, bucket):
    assert week_bucket(day) == bucket


def test_to_local_converts_aware_and_tags_naive():
    tz = timezone(timedelta(hours=5))

    assert to_local(datetime(2024, 2, 5, 20, 0, tzinfo=timezone.utc), tz).day == 6
    assert to_local(datetime(2024, 2, 5, 20, 0), tz).tzinfo is tz


def test_day_key_and_display_date():
    d = datetime(2024, 2, 5, 9, 30)

    assert day_key(d) == "2024-02-05"
    assert display_date(d) == "05/02/2024"


def test_parse_month_rejects_month_whose_utc_boundary_overflows():
    with pytest.raises(InvalidMonthFormat):
        parse_month("0001-01", timezone(timedelta(hours=5)))


def test_parse_month_accepts_last_month_before_year_limit():
    m = parse_month("9999-11")

    assert m.end == datetime(9999, 12, 1, tzinfo=timezone.utc)
