"""Wraparound-safe angle arithmetic.

All angles are radians normalized to ``[0, 2π)``. The helpers assume that a
step is a small adjustment (``0 <= step <= 2π``); a single wrap is applied.

The arc test is the subtle part. An arc is given by its ``left`` and ``right``
edges, walking counter-clockwise from ``left`` to ``right``. When
``left <= right`` the arc is an ordinary interval. When ``right < left`` the
arc straddles the 0/2π seam and is the union ``[0, right) ∪ (left, 2π]``.
Edges are exclusive in both cases, so a bearing exactly on an edge ray is
outside the arc.
"""

from __future__ import annotations

import math

TAU = 2 * math.pi


def normalize_advance(angle: float, step: float) -> float:
    """Return ``angle + step`` wrapped back below 2π."""
    result = angle + step
    if result > TAU:
        result -= TAU
    return result


def normalize_reduce(angle: float, step: float) -> float:
    """Return ``angle - step`` wrapped back above 0."""
    result = angle - step
    if result < 0:
        result += TAU
    return result


def _seam(angle: float) -> float:
    # 2π and 0 are the same direction.
    return 0.0 if angle == TAU else angle


def is_within_arc(angle: float, left: float, right: float) -> bool:
    """Return True if ``angle`` lies strictly inside the arc ``left`` → ``right``.

    Args:
        angle: The bearing to test.
        left: Clockwise-most edge of the arc.
        right: Counter-clockwise-most edge of the arc.

    A value of exactly 2π for any argument is treated as 0.
    """
    angle = _seam(angle)
    left = _seam(left)
    right = _seam(right)

    if left <= right:
        return left < angle < right

    # Arc crosses the seam.
    return 0 <= angle < right or left < angle <= TAU
