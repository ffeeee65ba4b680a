"""Coverage estimation between a guide mask and a stroke mask.

Guide pixels are sampled on a fixed grid (every ``sample_stride`` pixels
in both axes). A sampled guide pixel counts as matched if any stroke
pixel exists inside the square window of radius ``tolerance_radius``
around it, probed every ``search_stride`` pixels. Matching is
existence-only: the first stroke pixel found ends the search for that
guide pixel. Window positions outside the raster are clipped.

Coverage is reported either over the whole mask (letters) or separately
for each character interval (words). An interval without sampled guide
pixels, such as a space, is vacuous and does not take part in the
pass/fail decision.

The estimator never mutates either mask.
"""

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from glyphtrace.config import CoverageConfig
from glyphtrace.domain import CharacterBound, GuideMask
from glyphtrace.exceptions import MaskMismatchError


@dataclass(frozen=True)
class CharacterCoverage:
    """Coverage of one character interval.

    Attributes:
        bound: The character's column interval
        matched: Sampled guide pixels with stroke ink nearby
        total: Sampled guide pixels inside the interval
    """

    bound: CharacterBound
    matched: int
    total: int

    @property
    def char(self) -> str:
        return self.bound.char

    @property
    def is_vacuous(self) -> bool:
        """True if the interval holds no sampled guide pixels."""
        return self.total == 0

    @property
    def ratio(self) -> float | None:
        """Matched fraction, or None for vacuous intervals."""
        if self.total == 0:
            return None
        return self.matched / self.total


@dataclass(frozen=True)
class CoverageReport:
    """Result of one coverage query.

    Attributes:
        matched: Matched sampled guide pixels over the whole mask
        total: Sampled guide pixels over the whole mask (always > 0)
        characters: Per-character coverage in word mode, None in letter mode
    """

    matched: int
    total: int
    characters: tuple[CharacterCoverage, ...] | None = None

    @property
    def ratio(self) -> float:
        """Matched fraction over the whole mask."""
        return self.matched / self.total

    @property
    def is_per_character(self) -> bool:
        return self.characters is not None

    def weakest(self) -> CharacterCoverage | None:
        """The non-vacuous character with the lowest ratio, if any."""
        scored = [c for c in self.characters or () if not c.is_vacuous]
        if not scored:
            return None
        return min(scored, key=lambda c: c.matched / c.total)

    def passes(self, threshold: float) -> bool:
        """Apply the completion threshold.

        Letter mode compares the overall ratio. Word mode requires every
        non-vacuous character to reach the threshold on its own; there is
        no averaging across characters.
        """
        if self.characters is None:
            return self.ratio >= threshold

        scored = [c for c in self.characters if not c.is_vacuous]
        if not scored:
            return False
        return all(c.matched >= threshold * c.total for c in scored)


class CoverageEstimator:
    """Compares a guide mask against a stroke mask.

    Example:
        estimator = CoverageEstimator(CoverageConfig())
        report = estimator.measure(guide, canvas.mask, guide.bounds)
        if report is not None and report.passes(0.85):
            ...
    """

    def __init__(self, config: CoverageConfig | None = None) -> None:
        self.config = config or CoverageConfig()
        self._offsets = _search_offsets(self.config.tolerance_radius, self.config.search_stride)

    def sample_guide(self, guide: GuideMask) -> tuple[np.ndarray, np.ndarray]:
        """Coordinates of the sampled guide ink pixels.

        Returns:
            (rows, columns) arrays of equal length
        """
        stride = self.config.sample_stride
        ink = guide.ink(self.config.ink_threshold, stride)
        ys, xs = np.nonzero(ink)
        return ys * stride, xs * stride

    def match(self, stroke: np.ndarray, ys: np.ndarray, xs: np.ndarray) -> np.ndarray:
        """Which guide pixels have stroke ink within tolerance.

        Args:
            stroke: Boolean stroke mask
            ys: Guide pixel rows
            xs: Guide pixel columns

        Returns:
            Boolean array, one entry per guide pixel
        """
        matched = np.zeros(ys.shape, dtype=bool)
        if ys.size == 0 or not stroke.any():
            return matched

        rows, cols = stroke.shape
        for dy, dx in self._offsets:
            pending = np.flatnonzero(~matched)
            if pending.size == 0:
                break
            y = ys[pending] + dy
            x = xs[pending] + dx
            inside = (y >= 0) & (y < rows) & (x >= 0) & (x < cols)
            hit = np.zeros(pending.shape, dtype=bool)
            hit[inside] = stroke[y[inside], x[inside]]
            matched[pending[hit]] = True

        return matched

    def measure(
        self,
        guide: GuideMask,
        stroke: np.ndarray,
        bounds: Sequence[CharacterBound] | None = None,
    ) -> CoverageReport | None:
        """Measure coverage globally or per character.

        Args:
            guide: Guide mask
            stroke: Boolean stroke mask with the guide's shape
            bounds: Character intervals for word mode, None for letter mode

        Returns:
            The report, or None if the guide has no sampled ink

        Raises:
            MaskMismatchError: If the masks differ in shape
        """
        if guide.shape != stroke.shape:
            raise MaskMismatchError(guide.shape, stroke.shape)

        ys, xs = self.sample_guide(guide)
        if ys.size == 0:
            return None

        matched = self.match(stroke, ys, xs)

        characters = None
        if bounds is not None:
            characters = tuple(
                _bucket(bound, xs, matched) for bound in bounds
            )

        return CoverageReport(
            matched=int(matched.sum()),
            total=int(ys.size),
            characters=characters,
        )

    def global_ratio(self, guide: GuideMask, stroke: np.ndarray) -> float | None:
        """Matched fraction over the whole mask, or None if not applicable."""
        report = self.measure(guide, stroke)
        return None if report is None else report.ratio

    def per_character_ratios(
        self,
        guide: GuideMask,
        stroke: np.ndarray,
        bounds: Sequence[CharacterBound],
    ) -> list[float | None] | None:
        """Matched fraction per interval (None for vacuous intervals)."""
        report = self.measure(guide, stroke, bounds)
        if report is None or report.characters is None:
            return None
        return [c.ratio for c in report.characters]


def _bucket(bound: CharacterBound, xs: np.ndarray, matched: np.ndarray) -> CharacterCoverage:
    inside = bound.contains(xs)
    return CharacterCoverage(
        bound=bound,
        matched=int(matched[inside].sum()),
        total=int(inside.sum()),
    )


def _search_offsets(radius: int, stride: int) -> list[tuple[int, int]]:
    """Window offsets, nearest rings first so typical hits end early."""
    steps = sorted({sign * v for v in range(0, radius + 1, stride) for sign in (1, -1)})
    offsets = [(dy, dx) for dy in steps for dx in steps]
    offsets.sort(key=lambda o: (max(abs(o[0]), abs(o[1])), o))
    return offsets
