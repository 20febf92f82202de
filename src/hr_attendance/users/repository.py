from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): the service layer depends on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_emp_id(self, emp_id: str) -> Optional[User]:
        raise NotImplementedError

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
        raise NotImplementedError

    def update_profile(self, user_id: int, *, emp_id: str, full_name: str, position: str) -> bool:
        raise NotImplementedError

    def update_password(self, user_id: int, password_hash: str) -> bool:
        raise NotImplementedError

    def set_face_descriptor(self, user_id: int, *, descriptor: Sequence[float], base_image: Optional[str]) -> bool:
        raise NotImplementedError

    def list_by_role(self, role: Role) -> Sequence[User]:
        """Users of ``role`` ordered by employee id."""

        raise NotImplementedError
