"""Converters between fonttools glyphs and domain models.

This module turns fonttools outlines into flattened domain contours. The
pen protocol already resolves TrueType implied on-curve points and
all-off-curve contours, so only single curve segments reach the
flattening helpers.
"""

from typing import Any

from fontTools.pens.basePen import BasePen
from fontTools.ttLib import TTFont

from glyphtrace.core._bezier import flatten_cubic, flatten_quadratic
from glyphtrace.domain.contour import Contour, Point
from glyphtrace.domain.glyph import Glyph, GlyphMetadata


class FlatteningPen(BasePen):
    """Pen that records outlines as polygons.

    Quadratic and cubic segments are flattened by recursive subdivision
    until they deviate from the true curve by at most ``tolerance`` font
    units.
    """

    def __init__(self, glyph_set: Any = None, tolerance: float = 1.0) -> None:
        super().__init__(glyph_set)
        self.tolerance = tolerance
        self.contours: list[Contour] = []
        self._current: list[Point] = []

    def _moveTo(self, pt: tuple[float, float]) -> None:
        self._flush()
        self._current = [Point(*pt)]

    def _lineTo(self, pt: tuple[float, float]) -> None:
        self._current.append(Point(*pt))

    def _qCurveToOne(self, pt1: tuple[float, float], pt2: tuple[float, float]) -> None:
        start = self._current[-1]
        flattened = flatten_quadratic([start, Point(*pt1), Point(*pt2)], self.tolerance)
        self._current.extend(flattened[1:])

    def _curveToOne(
        self,
        pt1: tuple[float, float],
        pt2: tuple[float, float],
        pt3: tuple[float, float],
    ) -> None:
        start = self._current[-1]
        flattened = flatten_cubic(
            [start, Point(*pt1), Point(*pt2), Point(*pt3)], self.tolerance
        )
        self._current.extend(flattened[1:])

    def _closePath(self) -> None:
        # Drop the explicit closing point; Contour closes implicitly
        if len(self._current) > 1 and self._current[0] == self._current[-1]:
            self._current.pop()
        self._flush()

    def _endPath(self) -> None:
        self._closePath()

    def _flush(self) -> None:
        if len(self._current) >= 3:
            self.contours.append(Contour(points=self._current))
        self._current = []


def fonttools_glyph_to_domain(
    name: str,
    fonttools_glyph: Any,
    font: TTFont,
    tolerance: float = 1.0,
) -> Glyph:
    """Convert fonttools glyph to a flattened domain Glyph.

    Handles both TrueType (quadratic curves) and OpenType/CFF (cubic
    curves). Winding direction is irrelevant because guides are filled
    with the even-odd rule, so CFF contours are kept as drawn.

    Args:
        name: Name of the glyph
        fonttools_glyph: The fonttools glyph object from GlyphSet
        font: The TTFont object for accessing metadata
        tolerance: Flattening tolerance in font units

    Returns:
        Domain Glyph model
    """
    pen = FlatteningPen(font.getGlyphSet(), tolerance=tolerance)
    fonttools_glyph.draw(pen)
    pen._flush()

    metadata = _extract_glyph_metadata(name, font)
    return Glyph(metadata=metadata, contours=pen.contours)


def _extract_glyph_metadata(name: str, font: TTFont) -> GlyphMetadata:
    """Extract glyph metadata from font.

    Args:
        name: Glyph name
        font: The TTFont object

    Returns:
        GlyphMetadata object
    """
    hmtx = font.get("hmtx")
    advance_width = 0
    lsb = 0

    if hmtx and name in hmtx.metrics:
        advance_width, lsb = hmtx.metrics[name]

    cmap = font.getBestCmap()
    unicode_value = None

    if cmap:
        for code_point, glyph_name in cmap.items():
            if glyph_name == name:
                unicode_value = code_point
                break

    return GlyphMetadata(
        name=name,
        unicode=unicode_value,
        advance_width=advance_width,
        left_side_bearing=lsb,
    )
