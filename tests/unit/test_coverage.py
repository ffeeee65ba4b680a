"""Unit tests for coverage estimation.

Guides here are built directly from numpy arrays so sample positions are
known exactly: with the default stride of 4, only pixels whose row and
column are both multiples of 4 are sampled.
"""

import numpy as np
import pytest

from glyphtrace.config import CoverageConfig
from glyphtrace.core import CharacterCoverage, CoverageEstimator, CoverageReport
from glyphtrace.core.coverage import _search_offsets
from glyphtrace.domain import CharacterBound, GuideMask, SurfaceGeometry, TextLayout
from glyphtrace.exceptions import MaskMismatchError

WIDTH, HEIGHT = 200, 100


def make_guide(alpha: np.ndarray, bounds: tuple[CharacterBound, ...] = ()) -> GuideMask:
    geometry = SurfaceGeometry(alpha.shape[1], alpha.shape[0])
    layout = TextLayout(
        text="".join(b.char for b in bounds),
        geometry=geometry,
        font_size=100.0,
        left=0.0,
        baseline=0.0,
        pen_positions=tuple(float(b.start) for b in bounds),
        bounds=bounds,
        contours=(),
    )
    return GuideMask(alpha=alpha, geometry=geometry, layout=layout)


@pytest.fixture
def two_blocks() -> np.ndarray:
    """A large block 'a' and a small block 'b' far to its right."""
    alpha = np.zeros((HEIGHT, WIDTH), dtype=np.uint8)
    alpha[20:80, 10:110] = 255  # 15 x 25 = 375 samples
    alpha[40:60, 160:176] = 255  # 5 x 4 = 20 samples
    return alpha


@pytest.fixture
def estimator() -> CoverageEstimator:
    return CoverageEstimator()


def empty_stroke() -> np.ndarray:
    return np.zeros((HEIGHT, WIDTH), dtype=bool)


class TestSampling:
    """Tests for guide sampling."""

    def test_strided_sampling(self, estimator: CoverageEstimator, two_blocks: np.ndarray):
        ys, xs = estimator.sample_guide(make_guide(two_blocks))
        assert ys.size == 395
        assert (ys % 4 == 0).all()
        assert (xs % 4 == 0).all()

    def test_ink_threshold(self, estimator: CoverageEstimator):
        """Test faint anti-aliased pixels are not sampled."""
        alpha = np.zeros((HEIGHT, WIDTH), dtype=np.uint8)
        alpha[40, 40] = 50
        alpha[40, 44] = 51
        ys, xs = estimator.sample_guide(make_guide(alpha))
        assert list(xs) == [44]

    def test_offsets_nearest_first(self):
        offsets = _search_offsets(20, 2)
        assert offsets[0] == (0, 0)
        rings = [max(abs(dy), abs(dx)) for dy, dx in offsets]
        assert rings == sorted(rings)
        assert len(offsets) == 21 * 21


class TestMatching:
    """Tests for the tolerance window."""

    def _single_sample(self) -> GuideMask:
        alpha = np.zeros((HEIGHT, WIDTH), dtype=np.uint8)
        alpha[40, 40] = 255
        return make_guide(alpha)

    @pytest.mark.parametrize(("dy", "dx"), [(0, 0), (0, 20), (-20, 0), (20, -20), (6, 8)])
    def test_within_radius_matches(self, estimator: CoverageEstimator, dy: int, dx: int):
        stroke = empty_stroke()
        stroke[40 + dy, 40 + dx] = True
        report = estimator.measure(self._single_sample(), stroke)
        assert report is not None
        assert report.ratio == 1.0

    @pytest.mark.parametrize(("dy", "dx"), [(0, 22), (22, 0), (-24, 10)])
    def test_outside_radius_does_not_match(self, estimator: CoverageEstimator, dy: int, dx: int):
        stroke = empty_stroke()
        stroke[40 + dy, 40 + dx] = True
        report = estimator.measure(self._single_sample(), stroke)
        assert report is not None
        assert report.ratio == 0.0

    def test_window_is_clipped_at_edges(self, estimator: CoverageEstimator):
        """Test samples near the border only probe inside the raster."""
        alpha = np.zeros((HEIGHT, WIDTH), dtype=np.uint8)
        alpha[0, 0] = 255
        stroke = empty_stroke()
        stroke[10, 10] = True
        report = estimator.measure(make_guide(alpha), stroke)
        assert report is not None
        assert report.matched == 1

    def test_zero_radius_needs_exact_hit(self):
        estimator = CoverageEstimator(CoverageConfig(tolerance_radius=0))
        guide = self._single_sample()
        stroke = empty_stroke()
        stroke[40, 42] = True
        assert estimator.global_ratio(guide, stroke) == 0.0
        stroke[40, 40] = True
        assert estimator.global_ratio(guide, stroke) == 1.0


class TestMeasure:
    """Tests for global and per-character coverage."""

    def test_no_stroke_is_zero(self, estimator: CoverageEstimator, two_blocks: np.ndarray):
        assert estimator.global_ratio(make_guide(two_blocks), empty_stroke()) == 0.0

    def test_blank_guide_is_not_applicable(self, estimator: CoverageEstimator):
        """Test a guide without sampled ink has no coverage at all."""
        guide = make_guide(np.zeros((HEIGHT, WIDTH), dtype=np.uint8))
        stroke = ~empty_stroke()
        assert estimator.measure(guide, stroke) is None
        assert estimator.global_ratio(guide, stroke) is None

    def test_shape_mismatch(self, estimator: CoverageEstimator, two_blocks: np.ndarray):
        with pytest.raises(MaskMismatchError):
            estimator.measure(make_guide(two_blocks), np.zeros((HEIGHT, WIDTH + 1), dtype=bool))

    def test_masks_are_not_mutated(self, estimator: CoverageEstimator, two_blocks: np.ndarray):
        guide = make_guide(two_blocks)
        stroke = empty_stroke()
        stroke[20:80, 10:110] = True
        stroke_before = stroke.copy()
        guide_before = guide.alpha.copy()

        estimator.measure(guide, stroke, (CharacterBound("a", 0, WIDTH),))

        assert np.array_equal(stroke, stroke_before)
        assert np.array_equal(guide.alpha, guide_before)

    def test_adding_ink_never_lowers_coverage(self, estimator: CoverageEstimator, two_blocks: np.ndarray):
        guide = make_guide(two_blocks)
        stroke = empty_stroke()
        previous = 0.0
        for column in range(0, WIDTH, 15):
            stroke[50, column : column + 3] = True
            ratio = estimator.global_ratio(guide, stroke)
            assert ratio is not None
            assert ratio >= previous
            previous = ratio

    def test_per_character_blocking(self, estimator: CoverageEstimator, two_blocks: np.ndarray):
        """Test one untouched character blocks a word despite a high total."""
        bounds = (CharacterBound("a", 0, 130), CharacterBound("b", 130, WIDTH))
        guide = make_guide(two_blocks, bounds)
        stroke = empty_stroke()
        stroke[20:80, 10:110] = True

        letter_report = estimator.measure(guide, stroke)
        word_report = estimator.measure(guide, stroke, bounds)

        assert letter_report is not None and word_report is not None
        assert letter_report.ratio == pytest.approx(375 / 395)
        assert letter_report.passes(0.85)
        assert word_report.characters is not None
        assert [c.ratio for c in word_report.characters] == [1.0, 0.0]
        assert not word_report.passes(0.85)
        assert word_report.weakest() is word_report.characters[1]

    def test_vacuous_character_does_not_block(self, estimator: CoverageEstimator, two_blocks: np.ndarray):
        """Test an interval without ink, such as a space, is ignored."""
        bounds = (
            CharacterBound("a", 0, 120),
            CharacterBound(" ", 120, 150),
            CharacterBound("b", 150, WIDTH),
        )
        guide = make_guide(two_blocks, bounds)
        stroke = empty_stroke()
        stroke[20:80, 10:110] = True
        stroke[40:60, 160:176] = True

        report = estimator.measure(guide, stroke, bounds)

        assert report is not None and report.characters is not None
        space = report.characters[1]
        assert space.is_vacuous
        assert space.ratio is None
        assert report.passes(0.85)
        assert estimator.per_character_ratios(guide, stroke, bounds) == [1.0, None, 1.0]

    def test_bounds_are_half_open(self, estimator: CoverageEstimator):
        """Test a sample on a shared boundary belongs to the right-hand interval."""
        alpha = np.zeros((HEIGHT, WIDTH), dtype=np.uint8)
        alpha[40, 100] = 255
        bounds = (CharacterBound("a", 0, 100), CharacterBound("b", 100, WIDTH))
        report = estimator.measure(make_guide(alpha, bounds), empty_stroke(), bounds)
        assert report is not None and report.characters is not None
        assert [c.total for c in report.characters] == [0, 1]


class TestCoverageReport:
    """Tests for the pass decision."""

    def test_letter_threshold_is_inclusive(self):
        assert CoverageReport(matched=85, total=100).passes(0.85)
        assert not CoverageReport(matched=84, total=100).passes(0.85)

    def test_word_requires_a_scored_character(self):
        """Test a word made only of vacuous intervals never passes."""
        space = CharacterCoverage(CharacterBound(" ", 0, 10), matched=0, total=0)
        report = CoverageReport(matched=1, total=1, characters=(space,))
        assert not report.passes(0.5)
        assert report.weakest() is None

    def test_word_has_no_averaging(self):
        strong = CharacterCoverage(CharacterBound("a", 0, 10), matched=100, total=100)
        weak = CharacterCoverage(CharacterBound("b", 10, 20), matched=8, total=10)
        report = CoverageReport(matched=108, total=110, characters=(strong, weak))
        assert report.ratio > 0.85
        assert not report.passes(0.85)
        assert report.is_per_character
