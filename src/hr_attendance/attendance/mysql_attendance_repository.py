from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Any, Optional, Sequence

import mysql.connector

from ..core.enums import AttendanceStatus
from ..core.exceptions import DuplicateCheckIn
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, is_duplicate_entry, to_db_datetime
from .model import AttendanceRecord, DeviceInfo, GeoLocation, StatusUpdate
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_COLUMNS = """
    record_id, user_id, display_date, display_time, check_in, check_out,
    location_lng, location_lat, distance_from_office_meters,
    device_user_agent, device_camera_id, image, status, created_at, updated_at
"""

_INSERT = """
    INSERT {ignore} INTO attendance_records(
        user_id, display_date, display_time, check_in, check_out,
        location_lng, location_lat, distance_from_office_meters,
        device_user_agent, device_camera_id, image, status, created_at, updated_at
    )
    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
"""


def _row_to_record(r: dict[str, Any]) -> AttendanceRecord:
    location = None
    if r.get("location_lng") is not None and r.get("location_lat") is not None:
        location = GeoLocation(
            longitude=float(r["location_lng"]),
            latitude=float(r["location_lat"]),
            distance_from_office_meters=float(r.get("distance_from_office_meters") or 0.0),
        )

    device = None
    if r.get("device_user_agent") is not None or r.get("device_camera_id") is not None:
        device = DeviceInfo(user_agent=r.get("device_user_agent"), camera_device_id=r.get("device_camera_id"))

    return AttendanceRecord(
        record_id=int(r["record_id"]),
        user_id=int(r["user_id"]),
        display_date=r["display_date"],
        display_time=r.get("display_time"),
        check_in=from_db_datetime(r.get("check_in")),
        check_out=from_db_datetime(r.get("check_out")),
        location=location,
        device=device,
        image=r.get("image"),
        status=AttendanceStatus(r["status"]),
        created_at=from_db_datetime(r["created_at"]),
        updated_at=from_db_datetime(r.get("updated_at")),
    )


def _record_params(record: AttendanceRecord) -> tuple:
    location = record.location
    device = record.device
    updated_at = record.updated_at or record.created_at
    return (
        record.user_id,
        record.display_date,
        record.display_time,
        to_db_datetime(record.check_in),
        to_db_datetime(record.check_out),
        location.longitude if location else None,
        location.latitude if location else None,
        location.distance_from_office_meters if location else None,
        device.user_agent if device else None,
        device.camera_device_id if device else None,
        record.image,
        record.status.value,
        to_db_datetime(record.created_at),
        to_db_datetime(updated_at),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_for_user_between(self, user_id: int, start: datetime, end: datetime) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s AND created_at >= %s AND created_at < %s
                ORDER BY created_at ASC
                """,
                (user_id, to_db_datetime(start), to_db_datetime(end)),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def get_for_user_and_display_date(self, user_id: int, display_date: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE user_id=%s AND display_date=%s",
                (user_id, display_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def get_open_for_user_and_display_date(self, user_id: int, display_date: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s AND display_date=%s AND check_in IS NOT NULL AND check_out IS NULL
                """,
                (user_id, display_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def insert_many(self, records: Sequence[AttendanceRecord]) -> list[AttendanceRecord]:
        inserted: list[AttendanceRecord] = []
        with db_cursor(self._conn_factory) as (_, cur):
            for record in records:
                cur.execute(_INSERT.format(ignore="IGNORE"), _record_params(record))
                if cur.rowcount == 0:
                    logger.warning(
                        "Skipped duplicate attendance day %s for user %s", record.display_date, record.user_id
                    )
                    continue
                inserted.append(replace(record, record_id=int(cur.lastrowid)))
        return inserted

    def bulk_update_status(self, updates: Sequence[StatusUpdate], *, updated_at: datetime) -> int:
        if not updates:
            return 0
        now = to_db_datetime(updated_at)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                "UPDATE attendance_records SET status=%s, updated_at=%s WHERE record_id=%s",
                [(u.status.value, now, u.record_id) for u in updates],
            )
            return int(cur.rowcount)

    def create_checkin(self, record: AttendanceRecord) -> AttendanceRecord:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(_INSERT.format(ignore=""), _record_params(record))
                return replace(record, record_id=int(cur.lastrowid))
        except mysql.connector.IntegrityError as e:
            if is_duplicate_entry(e):
                raise DuplicateCheckIn(record.display_date) from e
            raise

    def update_checkout(
        self, *, record_id: int, check_out: datetime, status: AttendanceStatus, updated_at: datetime
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out=%s, status=%s, updated_at=%s
                WHERE record_id=%s
                """,
                (to_db_datetime(check_out), status.value, to_db_datetime(updated_at), record_id),
            )
            return cur.rowcount > 0
