"""Tracing session: the facade an embedding screen talks to.

A session wires the rasterizer, the stroke canvas, the coverage
estimator and the completion controller together and reacts to the
embedding surface's signals:

- target text changes re-rasterize the guide and start a new cycle,
- geometry changes re-rasterize the guide, discard strokes and start a
  new cycle,
- pointer events ink the canvas and drive the controller,
- the clear command wipes strokes, redraws the overlay and starts a new
  cycle,
- the continue command is passed straight through; it is never gated on
  completion.

While the surface is not ready, or no target has been set, input is
ignored and coverage is unavailable; drawing resumes as soon as the next
geometry or text signal makes the guide available.
"""

import random
from collections.abc import Callable
from typing import TYPE_CHECKING

import structlog

from glyphtrace.config import TracerSettings, TracingMode, get_default_settings
from glyphtrace.core.canvas import StrokeCanvas
from glyphtrace.core.controller import CompletionController
from glyphtrace.core.coverage import CoverageEstimator, CoverageReport
from glyphtrace.core.effects import CompletionEffect, StarBurstEffect
from glyphtrace.core.rasterizer import GlyphRasterizer, GuideOverlay
from glyphtrace.core.scheduler import Scheduler
from glyphtrace.domain import GuideMask, PointerEvent, PointerPhase, SurfaceGeometry, TracingPhase
from glyphtrace.exceptions import MaskMismatchError
from glyphtrace.utils import TracingLogger

if TYPE_CHECKING:
    from glyphtrace.io import FontReader

logger = structlog.get_logger(__name__)


class TracingSession:
    """One tracing surface with its guide, strokes and completion state.

    Example:
        scheduler = ManualScheduler()
        with FontReader(Path("font.ttf")) as reader:
            session = TracingSession(reader, scheduler)
            session.resize(SurfaceGeometry(400, 300))
            session.set_target("A")
            session.handle_pointer(PointerEvent.down(200, 80))
            ...
    """

    def __init__(
        self,
        reader: "FontReader",
        scheduler: Scheduler,
        settings: TracerSettings | None = None,
        effect: CompletionEffect | None = None,
        rng: random.Random | None = None,
        on_complete: Callable[[CoverageReport], None] | None = None,
        on_effect_done: Callable[[], None] | None = None,
        on_overlay: Callable[[GuideOverlay], None] | None = None,
        on_continue: Callable[[], None] | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            reader: Loaded font reader
            scheduler: Runs deferred evaluations and effect timing
            settings: Application settings (defaults if None)
            effect: Celebration to play (star burst if None)
            rng: Random source for move-triggered checks
            on_complete: Called with the passing report on completion
            on_effect_done: Called when the celebration finishes
            on_overlay: Called whenever the cosmetic guide must be (re)drawn
            on_continue: Called when the user chooses to move on
        """
        self.settings = settings or get_default_settings()
        self.scheduler = scheduler
        self.rasterizer = GlyphRasterizer(reader, self.settings.raster)
        self.estimator = CoverageEstimator(self.settings.coverage)
        self.effect = effect or StarBurstEffect(scheduler, self.settings.effect)
        self.tracing_logger = TracingLogger()
        self.on_overlay = on_overlay
        self.on_continue = on_continue

        self.controller = CompletionController(
            measure=self.coverage,
            effect=self.effect,
            scheduler=scheduler,
            config=self.settings.completion,
            highlight=self._highlight,
            on_complete=on_complete,
            on_effect_done=on_effect_done,
            rng=rng,
            tracing_logger=self.tracing_logger,
        )

        self.geometry = SurfaceGeometry(0, 0)
        self.text: str | None = None
        self.mode = TracingMode.LETTER
        self.guide: GuideMask | None = None
        self.overlay: GuideOverlay | None = None
        self.canvas = StrokeCanvas(self.geometry, self.settings.stroke)

    @property
    def is_ready(self) -> bool:
        """True when a guide exists and input is being captured."""
        return self.guide is not None and self.canvas.is_ready

    @property
    def phase(self) -> TracingPhase:
        return self.controller.phase

    @property
    def is_complete(self) -> bool:
        return self.controller.is_complete

    def nominal_font_size(self) -> float:
        if self.mode is TracingMode.WORD:
            return self.settings.raster.word_font_size
        return self.settings.raster.letter_font_size

    def set_target(self, text: str, mode: TracingMode | None = None) -> None:
        """Trace a new letter or word.

        Args:
            text: Non-empty target text
            mode: Coverage mode; one character means LETTER, more means WORD

        Raises:
            ValueError: If text is empty
        """
        if not text:
            raise ValueError("Target text must not be empty")

        self.text = text
        self.mode = mode or (TracingMode.LETTER if len(text) == 1 else TracingMode.WORD)
        logger.info("Target set", text=text, mode=self.mode.value)
        self._rebuild("target_changed")

    def resize(self, geometry: SurfaceGeometry) -> None:
        """React to a new surface size.

        Strokes are discarded because both masks are tied to the geometry.
        """
        self.geometry = geometry
        logger.debug(
            "Surface resized",
            width=geometry.width,
            height=geometry.height,
            pixel_ratio=geometry.pixel_ratio,
        )
        self._rebuild("resized")

    def _rebuild(self, reason: str) -> None:
        self.controller.reset(reason)
        self.canvas = StrokeCanvas(self.geometry, self.settings.stroke)
        self.guide = None
        self.overlay = None

        if self.text is None:
            return

        self.guide = self.rasterizer.rasterize(self.text, self.nominal_font_size(), self.geometry)
        if self.guide is None:
            return

        self.overlay = self.rasterizer.overlay(self.guide.layout)
        self._emit_overlay()

    def _emit_overlay(self) -> None:
        if self.overlay is not None and self.on_overlay is not None:
            self.on_overlay(self.overlay)

    def handle_pointer(self, event: PointerEvent) -> None:
        """Feed one normalized pointer event into the session."""
        if not self.is_ready:
            return

        if event.phase is PointerPhase.DOWN:
            self.canvas.pen_down(event.x, event.y)
            self.controller.on_pen_down()
        elif event.phase is PointerPhase.MOVE:
            inked = self.canvas.pen_move(event.x, event.y)
            self.controller.on_pen_move(inked)
        else:
            self.canvas.pen_up()
            self.controller.on_pen_up()

    def clear(self) -> None:
        """Wipe the strokes and start over on the same target."""
        self.canvas.clear()
        self.controller.reset("clear")
        self._emit_overlay()

    def continue_(self) -> None:
        """Move on, whether or not the tracing was completed."""
        logger.info("Continue requested", completed=self.is_complete)
        if self.on_continue is not None:
            self.on_continue()

    def coverage(self) -> CoverageReport | None:
        """Current coverage, or None if the guide is missing or blank."""
        if self.guide is None:
            return None
        if self.canvas.geometry != self.guide.geometry:
            raise MaskMismatchError(self.guide.shape, self.canvas.geometry.device_shape)

        bounds = self.guide.bounds if self.mode is TracingMode.WORD else None
        return self.estimator.measure(self.guide, self.canvas.mask, bounds)

    def _highlight(self) -> None:
        self.canvas.render_highlight()
