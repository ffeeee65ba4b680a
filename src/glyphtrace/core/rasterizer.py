"""Guide rasterization for target letters and words.

The rasterizer lays out the target text once per (text, font size,
geometry) and derives everything else from that single layout:

- the guide mask the coverage estimator samples,
- the per-character column intervals used in word mode,
- the dotted outline shown to the user as a purely cosmetic layer.

Text is centred horizontally and vertically on the surface the way a
canvas centres text with ``textAlign = "center"`` and
``textBaseline = "middle"``. Outlines are filled with the even-odd rule
at a supersampled resolution, then box-filtered down to an anti-aliased
alpha grid.
"""

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
import structlog
from PIL import Image, ImageDraw

from glyphtrace.config import RasterConfig
from glyphtrace.core.geometry import place_contour, points_along_contour
from glyphtrace.domain import (
    CharacterBound,
    Contour,
    GuideMask,
    Point,
    SurfaceGeometry,
    TextLayout,
)

if TYPE_CHECKING:
    from glyphtrace.io import FontReader

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class GuideOverlay:
    """Dotted outline of the target text.

    Only ever drawn on its own visual layer; it never touches either mask.

    Attributes:
        dots: Dot centres in logical pixels
        radius: Dot radius in logical pixels
        color: Fill colour
    """

    dots: tuple[Point, ...]
    radius: float
    color: str

    def to_image(self, geometry: SurfaceGeometry) -> Image.Image:
        """Render the dots onto a transparent RGBA image at device size."""
        image = Image.new("RGBA", (geometry.device_width, geometry.device_height), (0, 0, 0, 0))
        draw = ImageDraw.Draw(image)
        r = self.radius * geometry.pixel_ratio
        for dot in self.dots:
            x, y = geometry.to_device(dot.x, dot.y)
            draw.ellipse((x - r, y - r, x + r, y + r), fill=self.color)
        return image


class GlyphRasterizer:
    """Renders target text into guide masks.

    Example:
        with FontReader(Path("font.ttf")) as reader:
            rasterizer = GlyphRasterizer(reader)
            guide = rasterizer.rasterize("cat", 120.0, SurfaceGeometry(800, 384, 2.0))
    """

    def __init__(self, reader: "FontReader", config: RasterConfig | None = None) -> None:
        """Initialize the rasterizer.

        Args:
            reader: Loaded font reader providing glyph outlines and metrics
            config: Raster configuration (defaults if None)
        """
        self.reader = reader
        self.config = config or RasterConfig()

    def fit_font_size(self, text: str, nominal_size: float, geometry: SurfaceGeometry) -> float:
        """Shrink the font size so the text fits the surface.

        The text may take up to ``max_width_ratio`` of the logical width.
        Wider text is scaled down proportionally, but never below
        ``min_font_scale`` of the nominal size.

        Args:
            text: Target text
            nominal_size: Preferred font size in logical pixels
            geometry: Surface geometry

        Returns:
            Font size to render with
        """
        upm = self.reader.units_per_em
        advance = sum(self.reader.glyph_for_char(c).advance_width for c in text)
        natural_width = advance * nominal_size / upm
        max_width = geometry.width * self.config.max_width_ratio

        if natural_width <= max_width or natural_width <= 0:
            return nominal_size

        fitted = nominal_size * max_width / natural_width
        return max(fitted, nominal_size * self.config.min_font_scale)

    def layout(
        self,
        text: str,
        nominal_size: float,
        geometry: SurfaceGeometry,
    ) -> TextLayout | None:
        """Compute the placement of the text on the surface.

        Args:
            text: Non-empty target text
            nominal_size: Preferred font size in logical pixels
            geometry: Surface geometry

        Returns:
            The layout, or None if the surface is not ready yet

        Raises:
            ValueError: If text is empty
        """
        if not text:
            raise ValueError("Target text must not be empty")

        if not geometry.is_ready:
            logger.debug("Surface not ready, skipping layout", text=text)
            return None

        upm = self.reader.units_per_em
        font_size = self.fit_font_size(text, nominal_size, geometry)
        scale = font_size / upm

        glyphs = [self.reader.glyph_for_char(c) for c in text]
        text_width = sum(g.advance_width for g in glyphs) * scale
        left = (geometry.width - text_width) / 2
        # Middle of the em box sits on the surface's vertical centre
        baseline = geometry.height / 2 + (self.reader.ascender + self.reader.descender) / 2 * scale

        pen_positions: list[float] = []
        bounds: list[CharacterBound] = []
        contours: list[Contour] = []
        pen_x = left
        for char, glyph in zip(text, glyphs):
            advance = glyph.advance_width * scale
            pen_positions.append(pen_x)
            bounds.append(
                CharacterBound(
                    char=char,
                    start=round(pen_x * geometry.pixel_ratio),
                    end=round((pen_x + advance) * geometry.pixel_ratio),
                )
            )
            contours.extend(place_contour(c, pen_x, baseline, scale) for c in glyph.contours)
            pen_x += advance

        logger.debug(
            "Text laid out",
            text=text,
            font_size=round(font_size, 2),
            left=round(left, 2),
            baseline=round(baseline, 2),
        )

        return TextLayout(
            text=text,
            geometry=geometry,
            font_size=font_size,
            left=left,
            baseline=baseline,
            pen_positions=tuple(pen_positions),
            bounds=tuple(bounds),
            contours=tuple(contours),
        )

    def render(self, layout: TextLayout) -> GuideMask:
        """Fill the layout's outlines into an anti-aliased guide mask.

        Args:
            layout: Layout to render

        Returns:
            Read-only guide mask at device resolution
        """
        geometry = layout.geometry
        ss = self.config.supersample
        height, width = geometry.device_height, geometry.device_width
        factor = geometry.pixel_ratio * ss

        filled = np.zeros((height * ss, width * ss), dtype=bool)
        for contour in layout.contours:
            _xor_polygon(filled, [(p.x * factor, p.y * factor) for p in contour.points])

        if ss > 1:
            coverage = filled.reshape(height, ss, width, ss).mean(axis=(1, 3))
        else:
            coverage = filled.astype(np.float64)
        alpha = np.rint(coverage * 255).astype(np.uint8)

        return GuideMask(alpha=alpha, geometry=geometry, layout=layout)

    def rasterize(
        self,
        text: str,
        nominal_size: float,
        geometry: SurfaceGeometry,
    ) -> GuideMask | None:
        """Lay out and render the text in one step.

        Returns:
            The guide mask, or None if the surface is not ready yet
        """
        layout = self.layout(text, nominal_size, geometry)
        if layout is None:
            return None
        return self.render(layout)

    def overlay(self, layout: TextLayout) -> GuideOverlay:
        """Build the dotted cosmetic outline for a layout."""
        dots: list[Point] = []
        for contour in layout.contours:
            dots.extend(points_along_contour(contour, self.config.overlay_dot_spacing))
        return GuideOverlay(
            dots=tuple(dots),
            radius=self.config.overlay_dot_radius,
            color=self.config.guide_color,
        )


def _xor_polygon(target: np.ndarray, points: list[tuple[float, float]]) -> None:
    """Toggle the pixels covered by a polygon (even-odd fill).

    Only the polygon's bounding box is rasterized; parts outside the
    target are clipped.
    """
    if len(points) < 3:
        return

    rows, cols = target.shape
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    x0 = max(0, math.floor(min(xs)) - 1)
    y0 = max(0, math.floor(min(ys)) - 1)
    x1 = min(cols, math.ceil(max(xs)) + 2)
    y1 = min(rows, math.ceil(max(ys)) + 2)
    if x1 <= x0 or y1 <= y0:
        return

    tile = Image.new("1", (x1 - x0, y1 - y0), 0)
    ImageDraw.Draw(tile).polygon([(x - x0, y - y0) for x, y in points], fill=1)
    target[y0:y1, x0:x1] ^= np.array(tile, dtype=bool)
