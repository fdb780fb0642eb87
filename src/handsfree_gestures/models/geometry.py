"""Keypoint geometry helpers. Stateless, points are anything indexable as `(x, y)`."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from math import atan2, degrees, isfinite

import numpy as np

# Rays shorter than this are considered degenerate
MIN_RAY_LENGTH = 1e-9

Point = Sequence[float]


def magnitude(dx: float, dy: float) -> float:
    """Length of the (dx, dy) vector."""
    return float(np.linalg.norm((dx, dy)))


def angle(p1: Point, vertex: Point, p3: Point) -> float | None:
    """Calculate the angle at `vertex` between the rays toward `p1` and `p3`.

    Returns the angle in degrees, in [0, 180] (180 = the three points are aligned, the
    vertex between the two others). Returns None when the angle is undefined: one of the
    rays has no length, or a coordinate is not finite.
    """
    if not all(isfinite(value) for point in (p1, vertex, p3) for value in point[:2]):
        return None

    v1 = (p1[0] - vertex[0], p1[1] - vertex[1])
    v2 = (p3[0] - vertex[0], p3[1] - vertex[1])

    if magnitude(*v1) < MIN_RAY_LENGTH or magnitude(*v2) < MIN_RAY_LENGTH:
        return None

    angle_deg = abs(degrees(atan2(v2[1], v2[0]) - atan2(v1[1], v1[0])))

    # Reflect to keep the smallest of the two angles formed by the rays
    return 360.0 - angle_deg if angle_deg > 180.0 else angle_deg


def centroid(points: Iterable[Point]) -> tuple[float, float]:
    """Calculate the arithmetic mean of the given points."""
    coords = np.array([(point[0], point[1]) for point in points], dtype=float)
    if not len(coords):
        return 0.0, 0.0

    centroid_x, centroid_y = coords.mean(axis=0)
    return float(centroid_x), float(centroid_y)
