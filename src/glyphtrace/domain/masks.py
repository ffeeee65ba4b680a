"""Guide raster, text layout and per-character bounds."""

from dataclasses import dataclass, field

import numpy as np

from glyphtrace.domain.contour import Contour
from glyphtrace.domain.surface import SurfaceGeometry


@dataclass(frozen=True, slots=True)
class CharacterBound:
    """Half-open device-pixel column interval occupied by one character.

    Attributes:
        char: The character this interval belongs to
        start: First column inside the interval
        end: First column past the interval
    """

    char: str
    start: int
    end: int

    @property
    def width(self) -> int:
        return max(0, self.end - self.start)

    def contains(self, column: "int | np.ndarray") -> "bool | np.ndarray":
        """Whether column lies in the interval; elementwise for arrays."""
        return (column >= self.start) & (column < self.end)


@dataclass(frozen=True)
class TextLayout:
    """Placement of the target text on the surface.

    Computed once per (text, font size, geometry) and shared by the guide
    mask and the cosmetic overlay so the two never drift apart. Outline
    coordinates are logical pixels with y pointing down.

    Attributes:
        text: The target text
        geometry: Surface the layout was computed for
        font_size: Font size actually used, after any shrinking
        left: Logical x of the text's left edge
        baseline: Logical y of the text baseline
        pen_positions: Logical x of each character's origin
        bounds: Per-character column intervals in device pixels
        contours: All outlines of the text in logical pixels
    """

    text: str
    geometry: SurfaceGeometry
    font_size: float
    left: float
    baseline: float
    pen_positions: tuple[float, ...]
    bounds: tuple[CharacterBound, ...]
    contours: tuple[Contour, ...] = field(repr=False)

    @property
    def text_width(self) -> float:
        """Logical width of the laid-out text."""
        if not self.bounds:
            return 0.0
        return (self.bounds[-1].end - self.bounds[0].start) / self.geometry.pixel_ratio


@dataclass(frozen=True)
class GuideMask:
    """Anti-aliased ink raster of the target text.

    The alpha array is made read-only on construction.

    Attributes:
        alpha: uint8 array of shape (device_height, device_width)
        geometry: Surface geometry the mask was rendered for
        layout: Layout the mask was rendered from
    """

    alpha: np.ndarray = field(repr=False)
    geometry: SurfaceGeometry
    layout: TextLayout = field(repr=False)

    def __post_init__(self) -> None:
        self.alpha.setflags(write=False)

    @property
    def shape(self) -> tuple[int, int]:
        return self.alpha.shape  # type: ignore[return-value]

    @property
    def bounds(self) -> tuple[CharacterBound, ...]:
        return self.layout.bounds

    def ink(self, threshold: int, stride: int = 1) -> np.ndarray:
        """Boolean ink-presence grid, keeping every ``stride``-th row and column."""
        return self.alpha[::stride, ::stride] > threshold
