from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np

from ..core.constants import DEFAULT_FACE_MATCH_THRESHOLD, FACE_DESCRIPTOR_LENGTH


@dataclass(frozen=True)
class FaceMatch:
    match: bool
    distance: float


def is_valid_descriptor(descriptor: Any) -> bool:
    """A descriptor is exactly 128 finite numbers (as produced by face-api.js)."""
    if not isinstance(descriptor, (list, tuple)) or len(descriptor) != FACE_DESCRIPTOR_LENGTH:
        return False
    for value in descriptor:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        if not math.isfinite(value):
            return False
    return True


def compare_descriptors(
    descriptor1: Sequence[float],
    descriptor2: Sequence[float],
    threshold: float = DEFAULT_FACE_MATCH_THRESHOLD,
) -> FaceMatch:
    """Euclidean distance between two descriptors; a match when within ``threshold``."""
    if not is_valid_descriptor(descriptor1) or not is_valid_descriptor(descriptor2):
        return FaceMatch(match=False, distance=math.inf)

    distance = float(np.linalg.norm(np.asarray(descriptor1, dtype=float) - np.asarray(descriptor2, dtype=float)))
    return FaceMatch(match=distance <= threshold, distance=round(distance, 3))
