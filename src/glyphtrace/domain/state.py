"""Completion state owned by the completion controller."""

from dataclasses import dataclass
from enum import Enum, auto


class TracingPhase(Enum):
    """Lifecycle of one clear-cycle.

    IDLE -> DRAWING -> PENDING_CHECK -> (COMPLETE | DRAWING). COMPLETE is
    left only through an explicit clear.
    """

    IDLE = auto()
    DRAWING = auto()
    PENDING_CHECK = auto()
    COMPLETE = auto()


@dataclass
class CompletionState:
    """Flags for the current clear-cycle.

    Attributes:
        has_drawn_any_stroke: Ink was committed since the last clear
        is_complete: Completion fired in this clear-cycle
        is_evaluating: An evaluation is running right now
    """

    has_drawn_any_stroke: bool = False
    is_complete: bool = False
    is_evaluating: bool = False

    def reset(self) -> None:
        """Return every flag to its initial value."""
        self.has_drawn_any_stroke = False
        self.is_complete = False
        self.is_evaluating = False
