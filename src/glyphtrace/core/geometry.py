"""Geometric operations for laying out and decorating outlines.

This module provides the small amount of geometry the rasterizer needs:
- Placing font-unit contours on the surface
- Walking a closed contour at a fixed arc-length spacing

All functions are pure and stateless.
"""

import math

from glyphtrace.domain import Contour, Point


def place_contour(
    contour: Contour,
    origin_x: float,
    baseline: float,
    scale: float,
) -> Contour:
    """Map a contour from font units to surface coordinates.

    Font units have y pointing up from the baseline; surface coordinates
    have y pointing down from the top edge.

    Args:
        contour: Contour in font units
        origin_x: Surface x of the glyph origin
        baseline: Surface y of the baseline
        scale: Surface units per font unit

    Returns:
        New contour in surface coordinates

    Examples:
        >>> c = Contour([Point(0, 0), Point(100, 0), Point(100, 100)])
        >>> placed = place_contour(c, origin_x=10.0, baseline=50.0, scale=0.5)
        >>> [p.to_tuple() for p in placed.points]
        [(10.0, 50.0), (60.0, 50.0), (60.0, 0.0)]
    """
    return Contour(
        points=[
            Point(origin_x + p.x * scale, baseline - p.y * scale)
            for p in contour.points
        ]
    )


def points_along_contour(contour: Contour, spacing: float) -> list[Point]:
    """Sample points every ``spacing`` units along a closed contour.

    Sampling starts at the contour's first point and follows its edges in
    order, so the result is deterministic for a given contour.

    Args:
        contour: Closed contour
        spacing: Arc-length distance between consecutive samples

    Returns:
        Sampled points (empty for degenerate contours)

    Raises:
        ValueError: If spacing is not positive

    Examples:
        >>> square = Contour([Point(0, 0), Point(2, 0), Point(2, 2), Point(0, 2)])
        >>> [p.to_tuple() for p in points_along_contour(square, 2.0)]
        [(0.0, 0.0), (2.0, 0.0), (2.0, 2.0), (0.0, 2.0)]
    """
    if spacing <= 0:
        raise ValueError("spacing must be positive")

    samples: list[Point] = []
    carry = 0.0  # distance along the current edge to the next sample

    for start, end in contour.edges():
        dx = end.x - start.x
        dy = end.y - start.y
        length = math.hypot(dx, dy)
        if length < 1e-9:
            continue

        offset = carry
        while offset < length - 1e-9:
            t = offset / length
            samples.append(Point(start.x + t * dx, start.y + t * dy))
            offset += spacing
        carry = offset - length

    return samples
