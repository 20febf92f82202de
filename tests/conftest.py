from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from hr_attendance.attendance.model import AttendanceRecord, StatusUpdate
from hr_attendance.attendance.service import OfficeGeofence
from hr_attendance.container import wire_container
from hr_attendance.core.enums import AttendanceStatus, Role
from hr_attendance.core.exceptions import DuplicateCheckIn
from hr_attendance.storage.image_store import UploadResult
from hr_attendance.users.model import User


class InMemoryAttendance:
    def __init__(self):
        self._records: dict[int, AttendanceRecord] = {}
        self._id = 0
        self.find_calls = 0
        self.inserted_batches: list[list[AttendanceRecord]] = []
        self.status_updates: list[list[StatusUpdate]] = []

    def add(self, record: AttendanceRecord) -> AttendanceRecord:
        self._id += 1
        record = replace(record, record_id=self._id)
        self._records[self._id] = record
        return record

    def all(self) -> list[AttendanceRecord]:
        return list(self._records.values())

    def get(self, record_id: int) -> AttendanceRecord:
        return self._records[record_id]

    def find_for_user_between(self, user_id: int, start: datetime, end: datetime):
        self.find_calls += 1
        items = [r for r in self._records.values() if r.user_id == user_id and start <= r.created_at < end]
        items.sort(key=lambda r: r.created_at)
        return items

    def get_for_user_and_display_date(self, user_id: int, display_date: str) -> Optional[AttendanceRecord]:
        for r in self._records.values():
            if r.user_id == user_id and r.display_date == display_date:
                return r
        return None

    def get_open_for_user_and_display_date(self, user_id: int, display_date: str) -> Optional[AttendanceRecord]:
        r = self.get_for_user_and_display_date(user_id, display_date)
        return r if r and r.is_open else None

    def insert_many(self, records):
        inserted = []
        for record in records:
            if self.get_for_user_and_display_date(record.user_id, record.display_date):
                continue
            inserted.append(self.add(record))
        self.inserted_batches.append(inserted)
        return inserted

    def bulk_update_status(self, updates, *, updated_at: datetime) -> int:
        self.status_updates.append(list(updates))
        for u in updates:
            self._records[u.record_id] = replace(self._records[u.record_id], status=u.status, updated_at=updated_at)
        return len(updates)

    def create_checkin(self, record: AttendanceRecord) -> AttendanceRecord:
        if self.get_for_user_and_display_date(record.user_id, record.display_date):
            raise DuplicateCheckIn(record.display_date)
        return self.add(record)

    def update_checkout(
        self, *, record_id: int, check_out: datetime, status: AttendanceStatus, updated_at: datetime
    ) -> bool:
        if record_id not in self._records:
            return False
        self._records[record_id] = replace(
            self._records[record_id], check_out=check_out, status=status, updated_at=updated_at
        )
        return True


class InMemoryUsers:
    def __init__(self):
        self._users: dict[int, User] = {}
        self._id = 0

    def add(self, user: User) -> User:
        self._users[user.user_id] = user
        self._id = max(self._id, user.user_id)
        return user

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._users.values() if u.email == email), None)

    def get_by_emp_id(self, emp_id: str) -> Optional[User]:
        return next((u for u in self._users.values() if u.emp_id == emp_id), None)

    def create_user(self, *, emp_id, full_name, email, password_hash, role, position) -> int:
        self._id += 1
        self._users[self._id] = User(
            user_id=self._id,
            emp_id=emp_id,
            full_name=full_name,
            email=email,
            password_hash=password_hash,
            role=role,
            position=position,
        )
        return self._id

    def update_profile(self, user_id: int, *, emp_id: str, full_name: str, position: str) -> bool:
        self._users[user_id] = replace(self._users[user_id], emp_id=emp_id, full_name=full_name, position=position)
        return True

    def update_password(self, user_id: int, password_hash: str) -> bool:
        self._users[user_id] = replace(self._users[user_id], password_hash=password_hash)
        return True

    def set_face_descriptor(self, user_id: int, *, descriptor, base_image) -> bool:
        self._users[user_id] = replace(
            self._users[user_id], face_descriptor=tuple(descriptor), base_image=base_image
        )
        return True

    def list_by_role(self, role: Role):
        return sorted((u for u in self._users.values() if u.role == role), key=lambda u: u.emp_id)


class FakeImageStore:
    def __init__(self, *, fail: bool = False):
        self.fail = fail
        self.uploads: dict[str, bytes] = {}

    def compress(self, data: bytes) -> bytes:
        return b"jpeg:" + data

    def upload(self, data: bytes, path: str) -> UploadResult:
        if self.fail:
            return UploadResult(ok=False, error="bucket unavailable")
        self.uploads[path] = data
        return UploadResult(ok=True)

    def url_for(self, path: str) -> str:
        return f"https://cdn.test/{path}"


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def _make_user(user_id: int = 1, *, role: Role = Role.USER, emp_id: Optional[str] = None, **kwargs) -> User:
    fields = dict(
        user_id=user_id,
        emp_id=emp_id or f"EMP-{user_id:03d}",
        full_name=f"User {user_id}",
        email=f"user{user_id}@example.com",
        password_hash=generate_password_hash("secret-pass"),
        role=role,
        position="Engineer",
    )
    fields.update(kwargs)
    return User(**fields)


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def users_repo():
    return InMemoryUsers()


@pytest.fixture
def images():
    return FakeImageStore()


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def container(users_repo, attendance_repo, images, clock):
    return wire_container(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        images=images,
        tz=timezone.utc,
        geofence=OfficeGeofence(latitude=33.97331, longitude=71.45652, max_distance_meters=500.0),
        clock=clock,
    )


@pytest.fixture
def make_user():
    return _make_user
