from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..common.datetime_utils import is_weekday, last_day_of_month, week_bucket
from ..core.constants import WEEKS_PER_MONTH_BUCKETS


@dataclass(frozen=True)
class WorkingDays:
    total_working_days: int
    working_days_per_week: tuple[int, ...]


def compute_working_days(year: int, month_index: int) -> WorkingDays:
    """Count Mon-Fri days of a month, overall and per day-of-month bucket.

    The four buckets are fixed (days 1-7, 8-14, 15-21, 22-end) and are not
    aligned to calendar weeks, so the last one holds 7 to 10 days.
    """
    per_week = [0] * WEEKS_PER_MONTH_BUCKETS
    total = 0

    for day in range(1, last_day_of_month(year, month_index) + 1):
        if not is_weekday(date(year, month_index + 1, day)):
            continue
        per_week[week_bucket(day)] += 1
        total += 1

    return WorkingDays(total_working_days=total, working_days_per_week=tuple(per_week))
