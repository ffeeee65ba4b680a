"""Unit tests for domain models."""

import numpy as np
import pytest

from glyphtrace.domain import (
    CharacterBound,
    CompletionState,
    Contour,
    Glyph,
    GlyphMetadata,
    GuideMask,
    Point,
    PointerEvent,
    PointerPhase,
    SurfaceGeometry,
    TextLayout,
    TracingPhase,
)


class TestPoint:
    """Tests for Point class."""

    def test_point_creation(self):
        """Test creating a point with coordinates."""
        p = Point(10.5, 20.3)
        assert p.x == 10.5
        assert p.y == 20.3

    def test_point_immutability(self):
        """Test that points are immutable."""
        p = Point(10.0, 20.0)
        with pytest.raises(AttributeError):
            p.x = 30.0  # type: ignore[misc]

    def test_point_hashable(self):
        """Test that points can be used in sets."""
        assert len({Point(1.0, 2.0), Point(1.0, 2.0), Point(2.0, 1.0)}) == 2

    def test_to_tuple(self):
        """Test conversion to tuple."""
        assert Point(3.0, 4.0).to_tuple() == (3.0, 4.0)


class TestContour:
    """Tests for Contour class."""

    def test_edges_include_closing_edge(self):
        """Test that the implicit closing edge is returned."""
        a, b, c = Point(0, 0), Point(1, 0), Point(1, 1)
        assert Contour([a, b, c]).edges() == [(a, b), (b, c), (c, a)]

    def test_edges_degenerate(self):
        """Test that a single point has no edges."""
        assert Contour([Point(0, 0)]).edges() == []


class TestGlyph:
    """Tests for Glyph class."""

    def test_glyph_properties(self):
        """Test name, advance and emptiness."""
        metadata = GlyphMetadata(name="space", unicode=0x20, advance_width=250, left_side_bearing=0)
        glyph = Glyph(metadata=metadata, contours=[])
        assert glyph.name == "space"
        assert glyph.advance_width == 250
        assert glyph.is_empty()


class TestSurfaceGeometry:
    """Tests for SurfaceGeometry class."""

    def test_ready(self):
        assert SurfaceGeometry(400, 300).is_ready
        assert not SurfaceGeometry(0, 300).is_ready
        assert not SurfaceGeometry(400, 0).is_ready
        assert not SurfaceGeometry(400, 300, 0).is_ready

    def test_device_size_rounds(self):
        """Test device size is the rounded product with the pixel ratio."""
        geometry = SurfaceGeometry(401, 300, 1.5)
        assert geometry.device_width == 602
        assert geometry.device_height == 450
        assert geometry.device_shape == (450, 602)

    def test_to_device(self):
        assert SurfaceGeometry(100, 100, 2.0).to_device(10, 15) == (20, 30)


class TestPointerEvent:
    """Tests for PointerEvent constructors."""

    def test_constructors(self):
        assert PointerEvent.down(1, 2) == PointerEvent(PointerPhase.DOWN, 1, 2)
        assert PointerEvent.move(3, 4).phase is PointerPhase.MOVE
        assert PointerEvent.up().phase is PointerPhase.UP

    def test_phase_from_string(self):
        """Test phases round-trip through their string values."""
        assert PointerPhase("move") is PointerPhase.MOVE


class TestCharacterBound:
    """Tests for CharacterBound class."""

    def test_half_open_interval(self):
        """Test that end is exclusive."""
        bound = CharacterBound("a", 10, 20)
        assert bound.width == 10
        assert bound.contains(10)
        assert bound.contains(19)
        assert not bound.contains(20)
        assert not bound.contains(9)

    def test_contains_columns_elementwise(self):
        """Test that an array of columns is tested column by column."""
        bound = CharacterBound("a", 10, 20)
        columns = np.array([8, 10, 19, 20, 24])
        assert bound.contains(columns).tolist() == [False, True, True, False, False]

    def test_inverted_interval_has_zero_width(self):
        assert CharacterBound("a", 20, 10).width == 0


class TestGuideMask:
    """Tests for GuideMask class."""

    def _layout(self, geometry: SurfaceGeometry) -> TextLayout:
        return TextLayout(
            text="ab",
            geometry=geometry,
            font_size=100.0,
            left=0.0,
            baseline=50.0,
            pen_positions=(0.0, 5.0),
            bounds=(CharacterBound("a", 0, 10), CharacterBound("b", 10, 16)),
            contours=(),
        )

    def test_alpha_is_read_only(self):
        """Test that the guide raster cannot be modified."""
        geometry = SurfaceGeometry(20, 10)
        mask = GuideMask(np.zeros((10, 20), dtype=np.uint8), geometry, self._layout(geometry))
        with pytest.raises(ValueError):
            mask.alpha[0, 0] = 255

    def test_shape_bounds_and_ink(self):
        geometry = SurfaceGeometry(20, 10)
        alpha = np.zeros((10, 20), dtype=np.uint8)
        alpha[2, 3] = 40
        alpha[4, 5] = 200
        mask = GuideMask(alpha, geometry, self._layout(geometry))

        assert mask.shape == (10, 20)
        assert [b.char for b in mask.bounds] == ["a", "b"]
        assert mask.ink(50).sum() == 1
        assert mask.ink(0).sum() == 2

    def test_strided_ink_keeps_every_nth_pixel(self):
        geometry = SurfaceGeometry(20, 10)
        alpha = np.zeros((10, 20), dtype=np.uint8)
        alpha[4, 8] = 200
        alpha[5, 9] = 200
        mask = GuideMask(alpha, geometry, self._layout(geometry))

        ink = mask.ink(50, stride=4)
        assert ink.shape == (3, 5)
        assert np.argwhere(ink).tolist() == [[1, 2]]

    def test_text_width(self):
        """Test text width spans the first to last interval."""
        layout = self._layout(SurfaceGeometry(20, 10, 2.0))
        assert layout.text_width == 8.0


class TestCompletionState:
    """Tests for CompletionState class."""

    def test_reset(self):
        state = CompletionState(has_drawn_any_stroke=True, is_complete=True, is_evaluating=True)
        state.reset()
        assert state == CompletionState()

    def test_phases_are_distinct(self):
        assert len(set(TracingPhase)) == 4
