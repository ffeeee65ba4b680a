"""Core geometric types for outline representation.

This module defines the geometric types shared by the rasterizer and the
overlay renderer:
- Point: A 2D point
- Contour: A closed, already-flattened outline
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)


@dataclass
class Contour:
    """A closed polygonal contour representing a shape boundary.

    Curves have already been flattened into line segments, so every
    point lies on the outline. The closing edge from the last point back
    to the first is implicit.

    Attributes:
        points: List of points forming the contour
    """

    points: list[Point]

    def edges(self) -> list[tuple[Point, Point]]:
        """Return the contour's edges, including the closing edge."""
        n = len(self.points)
        if n < 2:
            return []
        return [(self.points[i], self.points[(i + 1) % n]) for i in range(n)]
