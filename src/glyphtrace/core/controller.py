"""Completion controller.

Decides when to check coverage and what to do when the check passes.

Phases per clear-cycle::

    IDLE -> DRAWING -> PENDING_CHECK -> COMPLETE
                 ^            |
                 +------------+  (check failed)

Checks are never run synchronously from input. A pen-up always requests
one; an inking pen-move requests one with a small configurable
probability. A request schedules a single deferred evaluation so that
bursts of input coalesce and the stroke's ink is committed before
sampling. A pen-up restarts any pending timer; a move request is dropped
while one is pending.

Completion fires at most once per clear-cycle. Evaluations scheduled in
an earlier cycle are ignored when they arrive late.
"""

import random
from collections.abc import Callable

from glyphtrace.config import CompletionConfig
from glyphtrace.core.coverage import CoverageReport
from glyphtrace.core.effects import CompletionEffect
from glyphtrace.core.scheduler import Cancellable, Scheduler
from glyphtrace.domain import CompletionState, TracingPhase
from glyphtrace.exceptions import MaskError
from glyphtrace.utils import TracingLogger


class CompletionController:
    """Debounced completion state machine.

    Example:
        controller = CompletionController(
            measure=lambda: estimator.measure(guide, canvas.mask),
            effect=StarBurstEffect(scheduler),
            scheduler=scheduler,
            highlight=canvas.render_highlight,
        )
        controller.on_pen_down()
        controller.on_pen_move(inked=True)
        controller.on_pen_up()
    """

    def __init__(
        self,
        measure: Callable[[], CoverageReport | None],
        effect: CompletionEffect,
        scheduler: Scheduler,
        config: CompletionConfig | None = None,
        highlight: Callable[[], object] | None = None,
        on_complete: Callable[[CoverageReport], None] | None = None,
        on_effect_done: Callable[[], None] | None = None,
        rng: random.Random | None = None,
        tracing_logger: TracingLogger | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            measure: Returns the current coverage, or None if not applicable
            effect: Celebration played once per completion
            scheduler: Runs deferred evaluations
            config: Threshold, delay and move-sampling settings
            highlight: Requests the one-shot glow over the strokes
            on_complete: Called with the passing report on completion
            on_effect_done: Called once the effect reports it finished
            rng: Random source for move-triggered checks
            tracing_logger: Receives check and completion events
        """
        self.measure = measure
        self.effect = effect
        self.scheduler = scheduler
        self.config = config or CompletionConfig()
        self.highlight = highlight
        self.on_complete = on_complete
        self.on_effect_done = on_effect_done
        self.rng = rng or random.Random()
        self.tracing_logger = tracing_logger or TracingLogger()

        self._state = CompletionState()
        self._phase = TracingPhase.IDLE
        self._pending: Cancellable | None = None
        self._generation = 0
        self._stroke_open = False
        self._last_report: CoverageReport | None = None

    @property
    def phase(self) -> TracingPhase:
        return self._phase

    @property
    def state(self) -> CompletionState:
        """Copy of the current flags; the controller's own copy is private."""
        return CompletionState(
            has_drawn_any_stroke=self._state.has_drawn_any_stroke,
            is_complete=self._state.is_complete,
            is_evaluating=self._state.is_evaluating,
        )

    @property
    def is_complete(self) -> bool:
        return self._state.is_complete

    @property
    def has_pending_check(self) -> bool:
        return self._pending is not None

    @property
    def last_report(self) -> CoverageReport | None:
        """Report from the most recent evaluation in this cycle."""
        return self._last_report

    def on_pen_down(self) -> None:
        self._stroke_open = True
        if self._phase is TracingPhase.IDLE:
            self._phase = TracingPhase.DRAWING

    def on_pen_move(self, inked: bool) -> None:
        if not inked:
            return
        self._state.has_drawn_any_stroke = True
        if self._phase is TracingPhase.IDLE:
            self._phase = TracingPhase.DRAWING
        if self.rng.random() < self.config.move_check_probability:
            self.request_check("move", restart=False)

    def on_pen_up(self) -> None:
        # A pen-up for a stroke that began before the last clear is ignored
        if not self._stroke_open:
            return
        self._stroke_open = False
        self.request_check("pen_up", restart=True)

    def request_check(self, reason: str, restart: bool = True) -> None:
        """Schedule a deferred evaluation.

        Args:
            reason: What triggered the request, for logging
            restart: Replace a pending evaluation instead of keeping it
        """
        if self._state.is_complete:
            return

        if self._pending is not None:
            if not restart:
                return
            self._pending.cancel()

        generation = self._generation
        delay = self.config.evaluation_delay
        self._pending = self.scheduler.call_later(delay, lambda: self._run_scheduled(generation))
        self._phase = TracingPhase.PENDING_CHECK
        self.tracing_logger.log_check_scheduled(reason, delay)

    def _run_scheduled(self, generation: int) -> None:
        if generation != self._generation:
            self.tracing_logger.log_evaluation_skipped("stale")
            return

        self._pending = None
        self.evaluate_now()
        if not self._state.is_complete:
            self._phase = (
                TracingPhase.DRAWING if self._state.has_drawn_any_stroke else TracingPhase.IDLE
            )

    def evaluate_now(self) -> bool:
        """Run the pass-condition check immediately.

        Safe to call at any time: nothing happens before ink is drawn,
        and nothing happens again once complete.

        Returns:
            True if the cycle is complete after the check
        """
        if self._state.is_complete:
            self.tracing_logger.log_evaluation_skipped("already_complete")
            return True
        if not self._state.has_drawn_any_stroke:
            self.tracing_logger.log_evaluation_skipped("no_ink")
            return False
        if self._state.is_evaluating:
            self.tracing_logger.log_evaluation_skipped("reentrant")
            return False

        self._state.is_evaluating = True
        try:
            report = self.measure()
        except MaskError as e:
            self.tracing_logger.log_evaluation_error(e)
            return False
        finally:
            self._state.is_evaluating = False

        if report is None:
            self.tracing_logger.log_evaluation_skipped("not_applicable")
            return False

        self._last_report = report
        passed = report.passes(self.config.pass_threshold)
        self.tracing_logger.log_evaluation(report, passed)

        if passed:
            self._complete(report)
        return passed

    def _complete(self, report: CoverageReport) -> None:
        self._state.is_complete = True
        self._phase = TracingPhase.COMPLETE
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        self.tracing_logger.log_completion(report.ratio)

        if self.highlight is not None:
            self.highlight()
        if self.on_complete is not None:
            self.on_complete(report)

        finished = False

        def effect_done() -> None:
            nonlocal finished
            if finished:
                return
            finished = True
            if self.on_effect_done is not None:
                self.on_effect_done()

        self.effect.play(effect_done)

    def reset(self, reason: str = "clear") -> None:
        """Start a new clear-cycle.

        Cancels any pending evaluation; an evaluation that still arrives
        later belongs to the old cycle and is ignored.
        """
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        self._generation += 1
        self._state.reset()
        self._phase = TracingPhase.IDLE
        self._stroke_open = False
        self._last_report = None
        self.tracing_logger.log_clear(reason)
