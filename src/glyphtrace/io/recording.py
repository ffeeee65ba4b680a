"""Recorded pointer sessions.

A recording is a JSON document describing the surface and a timed list
of pointer events, for example::

    {
      "surface": {"width": 400, "height": 300, "pixel_ratio": 2},
      "events": [
        {"phase": "down", "x": 200, "y": 70, "t": 0.0},
        {"phase": "move", "x": 200, "y": 140, "t": 0.05},
        {"phase": "up", "x": 200, "y": 140, "t": 0.1}
      ]
    }

Event times are seconds from the start of the recording.
"""

from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from glyphtrace.domain.surface import PointerEvent, PointerPhase, SurfaceGeometry
from glyphtrace.exceptions import RecordingLoadError


class RecordedSurface(BaseModel):
    """Surface size at recording time."""

    width: float = Field(gt=0.0)
    height: float = Field(gt=0.0)
    pixel_ratio: float = Field(default=1.0, gt=0.0)

    def to_geometry(self) -> SurfaceGeometry:
        return SurfaceGeometry(self.width, self.height, self.pixel_ratio)


class RecordedEvent(BaseModel):
    """One timed pointer event."""

    phase: PointerPhase
    x: float = 0.0
    y: float = 0.0
    t: float = Field(default=0.0, ge=0.0)

    def to_event(self) -> PointerEvent:
        return PointerEvent(self.phase, self.x, self.y)


class PointerRecording(BaseModel):
    """A replayable pointer session."""

    surface: RecordedSurface
    events: list[RecordedEvent] = Field(default_factory=list)

    @field_validator("events")
    @classmethod
    def _events_in_time_order(cls, events: list[RecordedEvent]) -> list[RecordedEvent]:
        for previous, current in zip(events, events[1:]):
            if current.t < previous.t:
                raise ValueError("events must be sorted by time")
        return events

    @property
    def duration(self) -> float:
        return self.events[-1].t if self.events else 0.0


def load_recording(path: Path) -> PointerRecording:
    """Load and validate a pointer recording.

    Args:
        path: Path to the JSON recording

    Returns:
        The validated recording

    Raises:
        RecordingLoadError: If the file is missing or invalid
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise RecordingLoadError(str(path), str(e)) from e

    try:
        return PointerRecording.model_validate_json(raw)
    except ValidationError as e:
        raise RecordingLoadError(str(path), str(e)) from e
