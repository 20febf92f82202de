from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_choice, require_email, require_length, require_non_empty
from ..core.constants import MAX_PASSWORD_LENGTH, MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    StorageError,
    UploadFailed,
    ValidationError,
)
from ..face.descriptor import is_valid_descriptor
from ..storage.image_store import ImageStore
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)

FACE_IMAGE_PREFIX = "faces"


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    full_name: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def _require_password(password: Optional[str]) -> str:
    return require_length(password, "Password", MIN_PASSWORD_LENGTH, MAX_PASSWORD_LENGTH)


class AuthService:
    """Use case: sign up and authenticate users."""

    def __init__(self, users: UserRepository):
        self._users = users

    def signup(
        self,
        *,
        full_name: str,
        emp_id: str,
        role: str,
        position: str,
        email: str,
        password: str,
    ) -> int:
        full_name = require_non_empty(full_name, "Fullname")
        emp_id = require_non_empty(emp_id, "Employee ID")
        position = require_non_empty(position, "Position")
        role = Role(require_choice(role or Role.USER.value, "Role", [r.value for r in Role]))
        email = require_email(email)
        _require_password(password)

        if self._users.get_by_email(email):
            raise ConflictError("User already exists")
        if self._users.get_by_emp_id(emp_id):
            raise ConflictError("Employee ID already exists")

        user_id = self._users.create_user(
            emp_id=emp_id,
            full_name=full_name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
            position=position,
        )
        logger.info("Created %s account %s (emp %s)", role.value, user_id, emp_id)
        return user_id

    def authenticate(self, email: str, password: str) -> SessionUser:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user:
            raise AuthenticationError("User not found")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid password. Please try again or reset.")

        return SessionUser(user_id=user.user_id, full_name=user.full_name, role=user.role)


class UserService:
    """Use case: read and maintain user profiles."""

    def __init__(
        self,
        users: UserRepository,
        images: Optional[ImageStore] = None,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._users = users
        self._images = images
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def get_user(self, user_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def list_users(self) -> Sequence[User]:
        return self._users.list_by_role(Role.USER)

    def edit_profile(self, user_id: int, *, full_name: str, emp_id: str, position: str) -> User:
        full_name = require_non_empty(full_name, "Fullname")
        emp_id = require_non_empty(emp_id, "Employee ID")
        position = require_non_empty(position, "Position")

        self.get_user(user_id)
        other = self._users.get_by_emp_id(emp_id)
        if other and other.user_id != user_id:
            raise ConflictError("Employee ID already exists")

        self._users.update_profile(user_id, emp_id=emp_id, full_name=full_name, position=position)
        return self.get_user(user_id)

    def change_password(self, *, acting: SessionUser, user_id: int, new_password: str) -> None:
        if acting.user_id != user_id and not acting.is_admin:
            raise AuthorizationError("Not authorized to change this password")

        _require_password(new_password)
        self.get_user(user_id)
        self._users.update_password(user_id, generate_password_hash(new_password))

    def get_face_descriptor(self, user_id: int) -> dict:
        user = self.get_user(user_id)
        base_image = None
        if user.base_image and self._images:
            base_image = self._images.url_for(user.base_image)
        return {
            "descriptor": list(user.face_descriptor) if user.face_descriptor else None,
            "base_image": base_image,
        }

    def set_face_descriptor(self, user_id: int, descriptor, *, image: Optional[bytes] = None) -> None:
        if not is_valid_descriptor(descriptor):
            raise ValidationError("Face descriptor must be 128 numbers")

        user = self.get_user(user_id)
        base_image = user.base_image
        if image:
            if not self._images:
                raise StorageError("Image storage is not configured")
            base_image = f"{FACE_IMAGE_PREFIX}/{int(self._clock().timestamp() * 1000)}_{user_id}.jpeg"
            result = self._images.upload(self._images.compress(image), base_image)
            if not result.ok:
                raise UploadFailed(result.error)

        self._users.set_face_descriptor(user_id, descriptor=[float(v) for v in descriptor], base_image=base_image)
