from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone, tzinfo
from typing import Callable, Iterable, Optional, Sequence

from ..common.datetime_utils import (
    MonthRange,
    day_key,
    display_date,
    is_weekday,
    local_midnight,
    now_local,
    parse_month,
    to_local,
    week_bucket,
)
from ..core.constants import WEEKS_PER_MONTH_BUCKETS
from ..core.enums import AttendanceStatus
from ..workdays.backfill import resolve_max_day_to_fill
from ..workdays.calculator import WorkingDays, compute_working_days
from .formatter import DayRecordFormatter
from .model import AttendanceRecord, MonthlyReport, StatusUpdate
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_PRESENT_LIKE = (AttendanceStatus.PRESENT, AttendanceStatus.LATE)
_ABSENT_LIKE = (AttendanceStatus.ABSENT, AttendanceStatus.DISCORD_ABSENT)


@dataclass(frozen=True)
class AttendanceTally:
    presents: int
    lates: int
    absents: int
    presence_series: tuple[float, ...]


def sort_by_effective_date(records: Iterable[AttendanceRecord], tz: tzinfo) -> list[AttendanceRecord]:
    return sorted(records, key=lambda r: to_local(r.effective_at, tz))


def plan_backfill(
    user_id: int,
    records: Sequence[AttendanceRecord],
    month: MonthRange,
    max_day_to_fill: int,
    tz: tzinfo,
) -> list[AttendanceRecord]:
    """Absent records for elapsed weekdays that have no record at all."""
    existing = {day_key(to_local(r.effective_at, tz)) for r in records}

    missing: list[AttendanceRecord] = []
    for day in range(1, max_day_to_fill + 1):
        midnight = local_midnight(month.year, month.month_index, day, tz)
        if not is_weekday(midnight) or day_key(midnight) in existing:
            continue
        missing.append(
            AttendanceRecord(
                user_id=user_id,
                display_date=display_date(midnight),
                status=AttendanceStatus.ABSENT,
                check_in=None,
                check_out=None,
                created_at=midnight,
                updated_at=midnight,
            )
        )
    return missing


def reclassify_stale_checkins(
    records: Sequence[AttendanceRecord],
    max_day_to_fill: int,
    tz: tzinfo,
) -> tuple[list[AttendanceRecord], list[StatusUpdate]]:
    """Mark elapsed weekday check-ins that were never closed as late.

    Records already ``late`` are left alone, so running this twice changes nothing.
    """
    result: list[AttendanceRecord] = []
    updates: list[StatusUpdate] = []

    for record in records:
        local = to_local(record.effective_at, tz)
        stale = (
            local.day <= max_day_to_fill
            and is_weekday(local)
            and record.is_open
            and record.status != AttendanceStatus.LATE
        )
        if stale:
            record = replace(record, status=AttendanceStatus.LATE)
            if record.record_id is not None:
                updates.append(StatusUpdate(record_id=record.record_id, status=AttendanceStatus.LATE))
        result.append(record)

    return result, updates


def tally(records: Iterable[AttendanceRecord], working_days: WorkingDays, tz: tzinfo) -> AttendanceTally:
    presents = lates = absents = 0
    present_like_per_week = [0] * WEEKS_PER_MONTH_BUCKETS

    for record in records:
        if record.status == AttendanceStatus.PRESENT:
            presents += 1
        elif record.status == AttendanceStatus.LATE:
            lates += 1
        elif record.status in _ABSENT_LIKE:
            absents += 1

        local = to_local(record.effective_at, tz)
        if is_weekday(local) and record.status in _PRESENT_LIKE:
            present_like_per_week[week_bucket(local.day)] += 1

    presence_series = tuple(
        present_like_per_week[idx] / days if days else 0
        for idx, days in enumerate(working_days.working_days_per_week)
    )
    return AttendanceTally(presents=presents, lates=lates, absents=absents, presence_series=presence_series)


class AttendanceReconciler:
    """Builds the complete attendance ledger of one user for one month.

    Missing elapsed weekdays are backfilled as absences and open check-ins of
    elapsed days are turned into late days; both changes are written back
    before the statistics are computed.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        formatter: DayRecordFormatter,
        *,
        tz: tzinfo = timezone.utc,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._attendance = attendance
        self._formatter = formatter
        self._tz = tz
        self._clock = clock or (lambda: now_local(tz))

    def reconcile(self, user_id: int, month: str, *, now: Optional[datetime] = None) -> MonthlyReport:
        month_range = parse_month(month, self._tz)
        now = to_local(now or self._clock(), self._tz)

        working_days = compute_working_days(month_range.year, month_range.month_index)
        max_day_to_fill = resolve_max_day_to_fill(month_range.year, month_range.month_index, now)

        records = sort_by_effective_date(
            self._attendance.find_for_user_between(user_id, month_range.start, month_range.end), self._tz
        )

        missing = plan_backfill(user_id, records, month_range, max_day_to_fill, self._tz)
        if missing:
            inserted = self._attendance.insert_many(missing)
            records = sort_by_effective_date([*records, *inserted], self._tz)
            logger.info("Backfilled %d absent day(s) for user %s in %s", len(inserted), user_id, month)

        records, updates = reclassify_stale_checkins(records, max_day_to_fill, self._tz)
        if updates:
            self._attendance.bulk_update_status(updates, updated_at=now)
            logger.info("Marked %d open check-in(s) late for user %s in %s", len(updates), user_id, month)

        totals = tally(records, working_days, self._tz)

        return MonthlyReport(
            presents=totals.presents,
            lates=totals.lates,
            absents=totals.absents,
            days_in_month=working_days.total_working_days,
            presence_series=totals.presence_series,
            days=self._formatter.format_all(records),
        )
