"""Glyph representation and metadata.

This module defines the glyph domain model, which represents a single
glyph (character) in a font with its flattened outline and metrics.
"""

from dataclasses import dataclass

from glyphtrace.domain.contour import Contour


@dataclass
class GlyphMetadata:
    """Metadata about a glyph.

    Attributes:
        name: Glyph name (e.g., "A", "space", ".notdef")
        unicode: Unicode code point (None for unencoded glyphs)
        advance_width: Horizontal advance width in font units
        left_side_bearing: Left side bearing in font units
    """

    name: str
    unicode: int | None
    advance_width: int
    left_side_bearing: int


@dataclass
class Glyph:
    """Represents a single glyph with its flattened contours.

    Contour coordinates are in font units with y pointing up, relative to
    the glyph origin on the baseline.

    Attributes:
        metadata: Glyph metadata (name, unicode, metrics)
        contours: List of contours forming the glyph outline
    """

    metadata: GlyphMetadata
    contours: list[Contour]

    @property
    def name(self) -> str:
        """Get glyph name from metadata."""
        return self.metadata.name

    @property
    def advance_width(self) -> int:
        """Get horizontal advance in font units."""
        return self.metadata.advance_width

    def is_empty(self) -> bool:
        """Check if glyph has no outlines.

        Empty glyphs include spaces and other non-printing characters.

        Returns:
            True if glyph has no contours, False otherwise
        """
        return len(self.contours) == 0
