from __future__ import annotations

import json
from typing import Any, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime
from .model import User
from .repository import UserRepository

_COLUMNS = """
    user_id, emp_id, full_name, email, password_hash, role, position,
    face_descriptor, base_image, created_at
"""


def _row_to_user(r: dict[str, Any]) -> User:
    descriptor = r.get("face_descriptor")
    if isinstance(descriptor, (bytes, str)):
        descriptor = json.loads(descriptor)

    return User(
        user_id=int(r["user_id"]),
        emp_id=r["emp_id"],
        full_name=r["full_name"],
        email=r["email"],
        password_hash=r["password_hash"],
        role=Role(r["role"]),
        position=r["position"],
        face_descriptor=tuple(float(v) for v in descriptor) if descriptor else None,
        base_image=r.get("base_image"),
        created_at=from_db_datetime(r.get("created_at")),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, where: str, value: Any) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE {where}=%s", (value,))
            r = fetchone(cur)
            return _row_to_user(r) if r else None

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._get_one("user_id", int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return self._get_one("email", email)

    def get_by_emp_id(self, emp_id: str) -> Optional[User]:
        return self._get_one("emp_id", emp_id)

    def create_user(
        self,
        *,
        emp_id: str,
        full_name: str,
        email: str,
        password_hash: str,
        role: Role,
        position: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(emp_id, full_name, email, password_hash, role, position)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (emp_id, full_name, email, password_hash, role.value, position),
            )
            return int(cur.lastrowid)

    def update_profile(self, user_id: int, *, emp_id: str, full_name: str, position: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET emp_id=%s, full_name=%s, position=%s WHERE user_id=%s",
                (emp_id, full_name, position, int(user_id)),
            )
            return cur.rowcount > 0

    def update_password(self, user_id: int, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET password_hash=%s WHERE user_id=%s", (password_hash, int(user_id)))
            return cur.rowcount > 0

    def set_face_descriptor(self, user_id: int, *, descriptor: Sequence[float], base_image: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET face_descriptor=%s, base_image=%s WHERE user_id=%s",
                (json.dumps(list(descriptor)), base_image, int(user_id)),
            )
            return cur.rowcount > 0

    def list_by_role(self, role: Role) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE role=%s ORDER BY emp_id ASC", (role.value,))
            return [_row_to_user(r) for r in fetchall(cur)]
