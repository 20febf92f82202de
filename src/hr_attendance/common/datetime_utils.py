from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date, datetime, timezone, tzinfo
from typing import Optional

from ..core.constants import DAY_KEY_FORMAT, DISPLAY_DATE_FORMAT, WEEK_BUCKET_LIMITS
from ..core.exceptions import InvalidMonthFormat

_MONTH_RE = re.compile(r"([0-9]{4})-([0-9]{2})")


@dataclass(frozen=True)
class MonthRange:
    """A calendar month. ``month_index`` is zero-based, ``end`` is exclusive."""

    year: int
    month_index: int
    start: datetime
    end: datetime


def parse_month(value: Optional[str], tz: tzinfo = timezone.utc) -> MonthRange:
    """Parse a ``YYYY-MM`` string into month boundaries in ``tz``.

    Anything else (including a month outside 1-12) raises InvalidMonthFormat.
    """
    match = _MONTH_RE.fullmatch(value or "")
    if not match:
        raise InvalidMonthFormat(value)

    year = int(match.group(1))
    month_index = int(match.group(2)) - 1
    if not 0 <= month_index <= 11:
        raise InvalidMonthFormat(value)
    try:
        start = datetime(year, month_index + 1, 1, tzinfo=tz)
        if month_index == 11:
            end = datetime(year + 1, 1, 1, tzinfo=tz)
        else:
            end = datetime(year, month_index + 2, 1, tzinfo=tz)
        # both boundaries are stored as UTC
        start.astimezone(timezone.utc)
        end.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        raise InvalidMonthFormat(value) from None
    return MonthRange(year=year, month_index=month_index, start=start, end=end)


def last_day_of_month(year: int, month_index: int) -> int:
    return calendar.monthrange(year, month_index + 1)[1]


def is_weekday(value: date) -> bool:
    return value.weekday() < 5


def week_bucket(day_of_month: int) -> int:
    """Index of the fixed day-of-month bucket: 1-7, 8-14, 15-21, 22-end."""
    for idx, limit in enumerate(WEEK_BUCKET_LIMITS):
        if day_of_month <= limit:
            return idx
    return len(WEEK_BUCKET_LIMITS)


def to_local(value: datetime, tz: tzinfo) -> datetime:
    # Naive values coming from the database are taken as already local.
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def local_midnight(year: int, month_index: int, day: int, tz: tzinfo) -> datetime:
    return datetime(year, month_index + 1, day, tzinfo=tz)


def day_key(value: date) -> str:
    return value.strftime(DAY_KEY_FORMAT)


def display_date(value: date) -> str:
    """Render a date as ``dd/mm/yyyy``."""
    return value.strftime(DISPLAY_DATE_FORMAT)


def now_local(tz: tzinfo = timezone.utc) -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(tz)
