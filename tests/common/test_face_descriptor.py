from __future__ import annotations

import math

from hr_attendance.face.descriptor import compare_descriptors, is_valid_descriptor


def test_valid_descriptor_is_128_numbers():
    assert is_valid_descriptor([0.1] * 128)
    assert is_valid_descriptor(tuple([0] * 128))


def test_invalid_descriptors():
    assert not is_valid_descriptor([0.1] * 127)
    assert not is_valid_descriptor([True] * 128)
    assert not is_valid_descriptor([0.1] * 127 + ["x"])
    assert not is_valid_descriptor([0.1] * 127 + [float("nan")])
    assert not is_valid_descriptor("0.1,0.2")
    assert not is_valid_descriptor(None)


def test_identical_descriptors_match():
    result = compare_descriptors([0.2] * 128, [0.2] * 128)

    assert result.match
    assert result.distance == 0.0


def test_distance_against_threshold():
    near = compare_descriptors([0.0] * 128, [0.01] * 128)
    far = compare_descriptors([0.0] * 128, [0.1] * 128)

    assert near.match and near.distance == 0.113
    assert not far.match and far.distance == 1.131


def test_invalid_input_never_matches():
    result = compare_descriptors([0.0] * 128, [0.0] * 3)

    assert not result.match
    assert math.isinf(result.distance)
