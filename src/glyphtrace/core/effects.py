"""Completion effects.

The engine treats the celebration as an opaque service: it calls
``play(on_done)`` once per completion and expects ``on_done`` to fire
exactly once after a bounded time. StarBurstEffect reproduces the timing
of the star-burst celebration (stars fanning out one after another, then
a short settle) without drawing anything itself; a UI can hook
``on_start`` to show the animation.
"""

from collections.abc import Callable
from typing import Protocol

import structlog

from glyphtrace.config import EffectConfig
from glyphtrace.core.scheduler import Scheduler

logger = structlog.get_logger(__name__)


class CompletionEffect(Protocol):
    """A fire-and-forget celebration."""

    def play(self, on_done: Callable[[], None]) -> None: ...


class StarBurstEffect:
    """Star-burst celebration timing.

    A ``play`` while a burst is already running joins that burst: the
    animation is not restarted, but its ``on_done`` is kept and fires when
    the running burst finishes. Every accepted ``on_done`` fires once.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        config: EffectConfig | None = None,
        on_start: Callable[[EffectConfig], None] | None = None,
    ) -> None:
        self.scheduler = scheduler
        self.config = config or EffectConfig()
        self.on_start = on_start
        self._waiting: list[Callable[[], None]] = []
        self.plays = 0

    @property
    def is_playing(self) -> bool:
        return bool(self._waiting)

    @property
    def duration(self) -> float:
        """Seconds from the start of a burst until its callbacks fire."""
        cfg = self.config
        return cfg.star_duration + (cfg.star_count - 1) * cfg.star_stagger + cfg.settle_delay

    def play(self, on_done: Callable[[], None]) -> None:
        if self._waiting:
            self._waiting.append(on_done)
            logger.debug("Effect already playing, joining burst", waiting=len(self._waiting))
            return

        self._waiting.append(on_done)
        self.plays += 1
        logger.info("Completion effect started", stars=self.config.star_count, duration=self.duration)
        if self.on_start is not None:
            self.on_start(self.config)

        self.scheduler.call_later(self.duration, self._finish)

    def _finish(self) -> None:
        waiting, self._waiting = self._waiting, []
        logger.debug("Completion effect finished", callbacks=len(waiting))
        for on_done in waiting:
            on_done()
