from __future__ import annotations

import pytest

from hr_attendance.common.geo import distance_meters
from hr_attendance.common.validators import require_choice, require_email, require_length, require_number
from hr_attendance.core.exceptions import ValidationError


def test_distance_is_zero_for_same_point():
    assert distance_meters(33.97, 71.45, 33.97, 71.45) == pytest.approx(0.0)


def test_one_degree_of_latitude():
    assert distance_meters(0.0, 0.0, 1.0, 0.0) == pytest.approx(111_195, rel=1e-3)


def test_require_email_lowercases():
    assert require_email("  Jane.Doe@Example.COM ") == "jane.doe@example.com"


@pytest.mark.parametrize("value", ["", "jane", "jane@", "jane@example"])
def test_require_email_rejects(value):
    with pytest.raises(ValidationError):
        require_email(value)


def test_require_length_bounds():
    assert require_length("12345678", "Password", 8, 10) == "12345678"
    with pytest.raises(ValidationError, match="at least 8"):
        require_length("short", "Password", 8, 10)
    with pytest.raises(ValidationError, match="cannot exceed 10"):
        require_length("x" * 11, "Password", 8, 10)


def test_require_choice():
    assert require_choice("admin", "Role", ["admin", "user"]) == "admin"
    with pytest.raises(ValidationError, match="Role must be one of"):
        require_choice("root", "Role", ["admin", "user"])


def test_require_number():
    assert require_number("33.5", "lat") == 33.5
    for bad in (None, "north", True):
        with pytest.raises(ValidationError):
            require_number(bad, "lat")


@pytest.mark.parametrize("value", ["nan", "inf", "-Infinity", float("nan"), float("inf")])
def test_require_number_rejects_non_finite(value):
    with pytest.raises(ValidationError, match="finite"):
        require_number(value, "location.lat")
