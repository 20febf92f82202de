from __future__ import annotations

from dataclasses import dataclass
from datetime import timezone, tzinfo
from typing import Optional

from .attendance.formatter import DayRecordFormatter
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.reconciler import AttendanceReconciler
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService, OfficeGeofence
from .core.constants import DEFAULT_FACE_MATCH_THRESHOLD
from .database.connection import DBConfig, DatabaseConnection
from .storage.image_store import ImageStore, LocalImageStore
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    tz: tzinfo

    users_repo: UserRepository
    attendance_repo: AttendanceRepository
    images: ImageStore

    reconciler: AttendanceReconciler
    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService

    conn: Optional[DatabaseConnection] = None


def wire_container(
    *,
    users_repo: UserRepository,
    attendance_repo: AttendanceRepository,
    images: ImageStore,
    tz: tzinfo = timezone.utc,
    geofence: Optional[OfficeGeofence] = None,
    face_match_threshold: float = DEFAULT_FACE_MATCH_THRESHOLD,
    clock=None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Assemble services on top of the given repositories and image store."""
    reconciler = AttendanceReconciler(
        attendance_repo,
        DayRecordFormatter(images, tz=tz),
        tz=tz,
        clock=clock,
    )
    attendance_service = AttendanceService(
        attendance_repo,
        users_repo,
        images,
        reconciler,
        geofence=geofence,
        face_match_threshold=face_match_threshold,
        tz=tz,
        clock=clock,
    )

    return Container(
        tz=tz,
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        images=images,
        reconciler=reconciler,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo, images, clock=clock),
        attendance_service=attendance_service,
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    upload_dir: str,
    public_media_url: str,
    tz: tzinfo = timezone.utc,
    geofence: Optional[OfficeGeofence] = None,
    face_match_threshold: float = DEFAULT_FACE_MATCH_THRESHOLD,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        users_repo=MySQLUserRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        images=LocalImageStore(upload_dir, public_media_url),
        tz=tz,
        geofence=geofence,
        face_match_threshold=face_match_threshold,
        conn=conn,
    )
