from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, StatusUpdate


class AttendanceRepository(Protocol):
    """Repository interface for attendance records.

    Services depend on this interface, not on a concrete database.
    """

    def find_for_user_between(self, user_id: int, start: datetime, end: datetime) -> Sequence[AttendanceRecord]:
        """Records with ``start <= created_at < end``, oldest first."""

        raise NotImplementedError

    def get_for_user_and_display_date(self, user_id: int, display_date: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_open_for_user_and_display_date(self, user_id: int, display_date: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def insert_many(self, records: Sequence[AttendanceRecord]) -> list[AttendanceRecord]:
        """Persist records in one batch and return them with ids.

        Records whose ``(user_id, display_date)`` already exists are skipped.
        """

        raise NotImplementedError

    def bulk_update_status(self, updates: Sequence[StatusUpdate], *, updated_at: datetime) -> int:
        raise NotImplementedError

    def create_checkin(self, record: AttendanceRecord) -> AttendanceRecord:
        """Raises DuplicateCheckIn when the day is already recorded."""

        raise NotImplementedError

    def update_checkout(
        self, *, record_id: int, check_out: datetime, status: AttendanceStatus, updated_at: datetime
    ) -> bool:
        raise NotImplementedError
