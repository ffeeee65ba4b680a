"""Domain models for glyphtrace.

This module contains the domain models shared by the rasterizer, the
capture surface, the coverage estimator and the completion controller.
Models are plain dataclasses, immutable where possible, and independent
of fonttools implementation details.

Key classes:
- Point, Contour: Flattened outline geometry
- Glyph, GlyphMetadata: A glyph with its outline and metrics
- SurfaceGeometry, PointerEvent: The drawing surface and its input
- TextLayout, CharacterBound, GuideMask: Rasterized target text
- CompletionState, TracingPhase: Controller-owned state
"""

from glyphtrace.domain.contour import Contour, Point
from glyphtrace.domain.glyph import Glyph, GlyphMetadata
from glyphtrace.domain.masks import CharacterBound, GuideMask, TextLayout
from glyphtrace.domain.state import CompletionState, TracingPhase
from glyphtrace.domain.surface import PointerEvent, PointerPhase, SurfaceGeometry

__all__: list[str] = [
    # Enums
    "PointerPhase",
    "TracingPhase",
    # Core types
    "Point",
    "Contour",
    "GlyphMetadata",
    "Glyph",
    "SurfaceGeometry",
    "PointerEvent",
    "CharacterBound",
    "TextLayout",
    "GuideMask",
    "CompletionState",
]
