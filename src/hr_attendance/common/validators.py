from __future__ import annotations

import math
import re
from typing import Any, Optional

from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_length(value: Optional[str], field_name: str, min_len: int, max_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters long")
    if len(value) > max_len:
        raise ValidationError(f"{field_name} cannot exceed {max_len} characters")
    return value


def require_email(value: Optional[str]) -> str:
    value = require_non_empty(value, "Email")
    if not _EMAIL_RE.fullmatch(value):
        raise ValidationError("Email must be a valid email address")
    return value.lower()


def require_choice(value: Any, field_name: str, choices) -> Any:
    if value not in choices:
        allowed = ", ".join(f"'{c}'" for c in choices)
        raise ValidationError(f"{field_name} must be one of {allowed}")
    return value


def require_number(value: Any, field_name: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number") from None
    if not math.isfinite(number):
        raise ValidationError(f"{field_name} must be a finite number")
    return number
