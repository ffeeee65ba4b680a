"""Freehand stroke capture.

The stroke canvas owns the stroke mask. It is written only by pointer
input and never receives any guide pixels, so coverage checks compare
what the user drew against the guide without the guide's own ink
leaking in.
"""

import numpy as np
import structlog
from PIL import Image, ImageDraw, ImageFilter

from glyphtrace.config import StrokeConfig
from glyphtrace.domain import PointerEvent, PointerPhase, SurfaceGeometry

logger = structlog.get_logger(__name__)


class StrokeCanvas:
    """Records pen input as round-capped strokes on a device-resolution mask.

    Exactly one path is open at a time. Pen-down opens a path without
    inking; every pen-move while the path is open inks a segment from the
    previous point with round caps and joins; pen-up closes the path.

    While the geometry is not ready every operation is a no-op.
    """

    def __init__(self, geometry: SurfaceGeometry, config: StrokeConfig | None = None) -> None:
        self.geometry = geometry
        self.config = config or StrokeConfig()
        self._image: Image.Image | None = None
        self._draw: ImageDraw.ImageDraw | None = None
        self._last: tuple[float, float] | None = None
        self.highlight: Image.Image | None = None

        if geometry.is_ready:
            self._image = Image.new("L", (geometry.device_width, geometry.device_height), 0)
            self._draw = ImageDraw.Draw(self._image)

    @property
    def is_ready(self) -> bool:
        return self._image is not None

    @property
    def is_pen_down(self) -> bool:
        return self._last is not None

    @property
    def stroke_width(self) -> float:
        """Stroke width in device pixels."""
        return self.config.width * self.geometry.pixel_ratio

    @property
    def mask(self) -> np.ndarray:
        """Read-only snapshot of the ink as a boolean grid."""
        if self._image is None:
            snapshot = np.zeros(self.geometry.device_shape, dtype=bool)
        else:
            snapshot = np.array(self._image) > 0
        snapshot.setflags(write=False)
        return snapshot

    def is_empty(self) -> bool:
        return self._image is None or self._image.getbbox() is None

    def handle(self, event: PointerEvent) -> bool:
        """Apply a normalized pointer event.

        Returns:
            True if the event committed ink
        """
        if event.phase is PointerPhase.DOWN:
            self.pen_down(event.x, event.y)
            return False
        if event.phase is PointerPhase.MOVE:
            return self.pen_move(event.x, event.y)
        self.pen_up()
        return False

    def pen_down(self, x: float, y: float) -> None:
        """Open a new path at a logical point."""
        if not self.is_ready:
            return
        if self._last is not None:
            self.pen_up()
        self._last = self.geometry.to_device(x, y)

    def pen_move(self, x: float, y: float) -> bool:
        """Extend the open path to a logical point.

        Returns:
            True if ink was committed, False if no path is open
        """
        if self._draw is None or self._last is None:
            return False

        point = self.geometry.to_device(x, y)
        width = self.stroke_width
        radius = width / 2

        self._draw.line([self._last, point], fill=255, width=max(1, round(width)))
        # Round caps and joins
        for cx, cy in (self._last, point):
            self._draw.ellipse((cx - radius, cy - radius, cx + radius, cy + radius), fill=255)

        self._last = point
        return True

    def pen_up(self) -> None:
        """Close the open path, if any."""
        self._last = None

    def clear(self) -> None:
        """Wipe all ink and the highlight layer."""
        self._last = None
        self.highlight = None
        if self._image is not None and self._draw is not None:
            self._draw.rectangle((0, 0, self._image.width, self._image.height), fill=0)
        logger.debug("Stroke canvas cleared")

    def render_highlight(self) -> Image.Image | None:
        """Build a glow layer around the current ink.

        The glow lives on its own layer; the ink it was derived from is not
        modified.

        Returns:
            Greyscale glow image, or None if the surface is not ready
        """
        if self._image is None:
            return None
        size = 2 * self.config.highlight_radius + 1
        glow = self._image.filter(ImageFilter.MaxFilter(size))
        if self.config.highlight_blur > 0:
            glow = glow.filter(ImageFilter.GaussianBlur(self.config.highlight_blur))
        self.highlight = glow
        return glow

    def to_image(self) -> Image.Image | None:
        """Render the strokes, with the glow if present, as RGBA."""
        if self._image is None:
            return None
        layer = Image.new("RGBA", self._image.size, self.config.color)
        transparent = Image.new("RGBA", self._image.size, (0, 0, 0, 0))
        strokes = Image.composite(layer, transparent, self._image)
        if self.highlight is None:
            return strokes
        glow_layer = Image.new("RGBA", self._image.size, (255, 215, 64, 255))
        glow = Image.composite(glow_layer, transparent, self.highlight)
        return Image.alpha_composite(glow, strokes)
