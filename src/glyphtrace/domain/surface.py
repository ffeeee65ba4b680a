"""Surface geometry and the normalized pointer-event contract.

Mouse, pen and touch input are all reduced to PointerEvent before they
reach the engine, so nothing downstream depends on the input device.
"""

from dataclasses import dataclass
from enum import Enum


class PointerPhase(str, Enum):
    """Phase of a pointer event."""

    DOWN = "down"
    MOVE = "move"
    UP = "up"


@dataclass(frozen=True, slots=True)
class PointerEvent:
    """A pointer event in surface-local logical coordinates.

    Attributes:
        phase: Whether the pointer went down, moved or was released
        x: X coordinate in logical pixels from the surface's left edge
        y: Y coordinate in logical pixels from the surface's top edge
    """

    phase: PointerPhase
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def down(cls, x: float, y: float) -> "PointerEvent":
        return cls(PointerPhase.DOWN, x, y)

    @classmethod
    def move(cls, x: float, y: float) -> "PointerEvent":
        return cls(PointerPhase.MOVE, x, y)

    @classmethod
    def up(cls, x: float = 0.0, y: float = 0.0) -> "PointerEvent":
        return cls(PointerPhase.UP, x, y)


@dataclass(frozen=True, slots=True)
class SurfaceGeometry:
    """Size of the drawing surface.

    Attributes:
        width: Logical width in pixels
        height: Logical height in pixels
        pixel_ratio: Device pixels per logical pixel
    """

    width: float
    height: float
    pixel_ratio: float = 1.0

    @property
    def is_ready(self) -> bool:
        """True once the surface has a usable, non-empty size."""
        return self.width > 0 and self.height > 0 and self.pixel_ratio > 0

    @property
    def device_width(self) -> int:
        """Width of the backing raster in device pixels."""
        return max(0, round(self.width * self.pixel_ratio))

    @property
    def device_height(self) -> int:
        """Height of the backing raster in device pixels."""
        return max(0, round(self.height * self.pixel_ratio))

    @property
    def device_shape(self) -> tuple[int, int]:
        """Raster shape as (rows, columns)."""
        return (self.device_height, self.device_width)

    def to_device(self, x: float, y: float) -> tuple[float, float]:
        """Convert logical coordinates to device pixels."""
        return (x * self.pixel_ratio, y * self.pixel_ratio)
