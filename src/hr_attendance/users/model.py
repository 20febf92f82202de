from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object, no database access code here.
    """

    user_id: int
    emp_id: str
    full_name: str
    email: str
    password_hash: str
    role: Role
    position: str
    face_descriptor: Optional[tuple[float, ...]] = None
    base_image: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def to_public_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "emp_id": self.emp_id,
            "full_name": self.full_name,
            "email": self.email,
            "role": self.role.value,
            "position": self.position,
            "has_face_descriptor": self.face_descriptor is not None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
