from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class GeoLocation:
    """Check-in position, stored longitude first (GeoJSON point order)."""

    longitude: float
    latitude: float
    distance_from_office_meters: float

    @property
    def coordinates(self) -> tuple[float, float]:
        return (self.longitude, self.latitude)


@dataclass(frozen=True)
class DeviceInfo:
    user_agent: Optional[str] = None
    camera_device_id: Optional[str] = None


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance day of one user.

    Backfilled absences have neither ``check_in`` nor ``check_out`` and are
    dated by ``created_at``.
    """

    user_id: int
    display_date: str
    status: AttendanceStatus
    created_at: datetime
    record_id: Optional[int] = None
    display_time: Optional[str] = None
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    location: Optional[GeoLocation] = None
    device: Optional[DeviceInfo] = None
    image: Optional[str] = None
    updated_at: Optional[datetime] = None

    @property
    def effective_at(self) -> datetime:
        return self.check_in or self.created_at

    @property
    def is_open(self) -> bool:
        return self.check_in is not None and self.check_out is None


@dataclass(frozen=True)
class StatusUpdate:
    record_id: int
    status: AttendanceStatus


@dataclass(frozen=True)
class DayEntry:
    """Presentation row of the monthly ledger."""

    date: str
    weekday: str
    status: str
    check_in: Optional[str]
    check_out: Optional[str]
    check_in_location: Optional[str]
    check_out_location: Optional[str]
    image: str
    device: Optional[str]

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class MonthlyReport:
    presents: int
    lates: int
    absents: int
    days_in_month: int
    presence_series: tuple[float, ...]
    days: list[DayEntry] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "presents": self.presents,
            "lates": self.lates,
            "absents": self.absents,
            "days_in_month": self.days_in_month,
            "presence_series": list(self.presence_series),
            "days": [d.to_dict() for d in self.days],
        }
