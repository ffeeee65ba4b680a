"""Internal Bezier curve flattening algorithms.

Helpers for the outline flattening pen used when converting font glyphs.
Not intended for public use.
"""

import math

from glyphtrace.domain.contour import Point

MAX_DEPTH = 16


def _mid(a: Point, b: Point) -> Point:
    return Point((a.x + b.x) / 2, (a.y + b.y) / 2)


def flatten_quadratic(points: list[Point], tolerance: float, _depth: int = 0) -> list[Point]:
    """Flatten a quadratic Bezier curve using recursive subdivision.

    Args:
        points: List of 3 control points [p0, p1, p2]
        tolerance: Maximum distance from true curve

    Returns:
        List of points approximating the curve, endpoints included

    Examples:
        >>> flat = flatten_quadratic([Point(0, 0), Point(50, 0), Point(100, 0)], 1.0)
        >>> [p.to_tuple() for p in flat]
        [(0, 0), (100, 0)]
    """
    p0, p1, p2 = points

    # Distance between the curve midpoint (t=0.5) and the chord midpoint
    distance = math.hypot(p0.x - 2 * p1.x + p2.x, p0.y - 2 * p1.y + p2.y) / 4

    if distance <= tolerance or _depth >= MAX_DEPTH:
        return [p0, p2]

    # Subdivide at t=0.5
    q1 = _mid(p0, p1)
    r1 = _mid(p1, p2)
    mid = _mid(q1, r1)

    left = flatten_quadratic([p0, q1, mid], tolerance, _depth + 1)
    right = flatten_quadratic([mid, r1, p2], tolerance, _depth + 1)

    # Combine, avoiding duplicate midpoint
    return left[:-1] + right


def flatten_cubic(points: list[Point], tolerance: float, _depth: int = 0) -> list[Point]:
    """Flatten a cubic Bezier curve using recursive subdivision.

    Uses De Casteljau's algorithm for subdivision. Flatness is bounded by
    the second differences of the control points, which also catches
    S-shaped segments whose midpoint happens to lie on the chord.

    Args:
        points: List of 4 control points [p0, p1, p2, p3]
        tolerance: Maximum distance from true curve

    Returns:
        List of points approximating the curve, endpoints included
    """
    p0, p1, p2, p3 = points

    d1 = math.hypot(p0.x - 2 * p1.x + p2.x, p0.y - 2 * p1.y + p2.y)
    d2 = math.hypot(p1.x - 2 * p2.x + p3.x, p1.y - 2 * p2.y + p3.y)
    distance = 0.75 * max(d1, d2)

    if distance <= tolerance or _depth >= MAX_DEPTH:
        return [p0, p3]

    # Subdivide at t=0.5 using De Casteljau's algorithm
    q1 = _mid(p0, p1)
    q2 = _mid(p1, p2)
    q3 = _mid(p2, p3)
    r1 = _mid(q1, q2)
    r2 = _mid(q2, q3)
    mid = _mid(r1, r2)

    left = flatten_cubic([p0, q1, r1, mid], tolerance, _depth + 1)
    right = flatten_cubic([mid, r2, q3, p3], tolerance, _depth + 1)

    # Combine, avoiding duplicate midpoint
    return left[:-1] + right
