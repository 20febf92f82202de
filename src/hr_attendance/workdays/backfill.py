from __future__ import annotations

from datetime import datetime

from ..common.datetime_utils import last_day_of_month


def resolve_max_day_to_fill(year: int, month_index: int, now: datetime) -> int:
    """Highest day of the month already elapsed at ``now``.

    A past month is fully elapsed, the current month stops at yesterday (today
    may still be in progress) and a future month has nothing to fill.
    ``now`` must already be in the local timezone.
    """
    target = (year, month_index)
    current = (now.year, now.month - 1)

    if target < current:
        return last_day_of_month(year, month_index)
    if target == current:
        return now.day - 1
    return 0
