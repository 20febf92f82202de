from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local, parse_month, to_local
from ..common.geo import distance_meters
from ..core.constants import (
    ATTENDANCE_IMAGE_PREFIX,
    DEFAULT_FACE_MATCH_THRESHOLD,
    DEFAULT_MAX_DISTANCE_FROM_OFFICE_METERS,
    DEFAULT_OFFICE_LAT,
    DEFAULT_OFFICE_LNG,
    MIN_WORKED_FOR_ATTENDANCE,
    REQUIRED_WORKED_FOR_PRESENT,
)
from ..core.enums import AttendanceStatus
from ..core.exceptions import (
    AuthorizationError,
    DuplicateCheckIn,
    FaceMismatch,
    ImageRequired,
    NegativeDuration,
    NoOpenCheckIn,
    NotFoundError,
    OutOfGeofence,
    UploadFailed,
)
from ..face.descriptor import compare_descriptors
from ..storage.image_store import ImageStore
from ..users.repository import UserRepository
from ..users.service import SessionUser
from .model import AttendanceRecord, DeviceInfo, GeoLocation, MonthlyReport
from .reconciler import AttendanceReconciler
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OfficeGeofence:
    latitude: float = DEFAULT_OFFICE_LAT
    longitude: float = DEFAULT_OFFICE_LNG
    max_distance_meters: float = DEFAULT_MAX_DISTANCE_FROM_OFFICE_METERS

    def distance_to(self, latitude: float, longitude: float) -> float:
        if not (math.isfinite(latitude) and math.isfinite(longitude)):
            return math.inf
        return distance_meters(latitude, longitude, self.latitude, self.longitude)


def classify_worked_duration(worked: timedelta) -> AttendanceStatus:
    """Status of a closed day: under 2h absent, under 7h45m late, otherwise present."""
    if worked < MIN_WORKED_FOR_ATTENDANCE:
        return AttendanceStatus.ABSENT
    if worked < REQUIRED_WORKED_FOR_PRESENT:
        return AttendanceStatus.LATE
    return AttendanceStatus.PRESENT


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        images: ImageStore,
        reconciler: AttendanceReconciler,
        *,
        geofence: Optional[OfficeGeofence] = None,
        face_match_threshold: float = DEFAULT_FACE_MATCH_THRESHOLD,
        tz: tzinfo = timezone.utc,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._attendance = attendance
        self._users = users
        self._images = images
        self._reconciler = reconciler
        self._geofence = geofence or OfficeGeofence()
        self._face_match_threshold = float(face_match_threshold)
        self._tz = tz
        self._clock = clock or (lambda: now_local(tz))

    def log_check_in(
        self,
        user_id: int,
        *,
        timestamp: datetime,
        display_date: str,
        display_time: Optional[str],
        latitude: float,
        longitude: float,
        device: Optional[DeviceInfo],
        photo: Optional[bytes],
        face_descriptor: Optional[Sequence[float]] = None,
    ) -> AttendanceRecord:
        if not photo:
            raise ImageRequired()

        if self._attendance.get_for_user_and_display_date(user_id, display_date):
            raise DuplicateCheckIn(display_date)

        distance = self._geofence.distance_to(latitude, longitude)
        if not distance <= self._geofence.max_distance_meters:
            logger.info("Rejected check-in of user %s: %.0f m from office", user_id, distance)
            raise OutOfGeofence(distance, self._geofence.max_distance_meters)

        if face_descriptor is not None:
            self._verify_face(user_id, face_descriptor)

        now = self._clock()
        image_path = f"{ATTENDANCE_IMAGE_PREFIX}/{int(now.timestamp() * 1000)}_{user_id}.jpeg"
        result = self._images.upload(self._images.compress(photo), image_path)
        if not result.ok:
            raise UploadFailed(result.error)

        record = AttendanceRecord(
            user_id=user_id,
            display_date=display_date,
            display_time=display_time,
            status=AttendanceStatus.PRESENT,
            check_in=timestamp,
            location=GeoLocation(
                longitude=float(longitude),
                latitude=float(latitude),
                distance_from_office_meters=distance,
            ),
            device=device,
            image=image_path,
            created_at=now,
            updated_at=now,
        )
        return self._attendance.create_checkin(record)

    def _verify_face(self, user_id: int, descriptor: Sequence[float]) -> None:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        if user.face_descriptor is None:
            return

        match = compare_descriptors(user.face_descriptor, descriptor, self._face_match_threshold)
        if not match.match:
            logger.info("Face mismatch for user %s (distance %s)", user_id, match.distance)
            raise FaceMismatch(match.distance)

    def log_check_out(self, user_id: int, *, timestamp: datetime, display_date: str) -> AttendanceRecord:
        record = self._attendance.get_open_for_user_and_display_date(user_id, display_date)
        if not record:
            raise NoOpenCheckIn(display_date)

        worked = to_local(timestamp, self._tz) - to_local(record.check_in, self._tz)
        if worked < timedelta(0):
            logger.info("Rejected check-out of user %s: before check-in on %s", user_id, display_date)
            raise NegativeDuration()

        status = classify_worked_duration(worked)
        now = self._clock()
        self._attendance.update_checkout(
            record_id=record.record_id, check_out=timestamp, status=status, updated_at=now
        )
        return replace(record, check_out=timestamp, status=status, updated_at=now)

    def monthly_stats(self, *, acting: SessionUser, user_id: int, month: str) -> MonthlyReport:
        """Monthly ledger of ``user_id``; users see their own, admins anyone's."""
        parse_month(month, self._tz)

        if acting.user_id != user_id:
            if not acting.is_admin:
                raise AuthorizationError("Not authorized, you are not an admin")
            if not self._users.get_by_id(user_id):
                raise NotFoundError("User not found")

        return self._reconciler.reconcile(user_id, month)
