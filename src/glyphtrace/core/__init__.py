"""Core tracing engine for glyphtrace.

This module contains the core components for:

- Guide rasterization (layout, anti-aliased fill, character bounds)
- Stroke capture (pointer input to an independent ink mask)
- Coverage estimation (strided sampling with a bounded tolerance search)
- Completion control (debounced checks, threshold, one-shot celebration)

Key classes:
- GlyphRasterizer: Renders target text into guide masks and overlays
- StrokeCanvas: Records freehand strokes
- CoverageEstimator: Compares guide and stroke masks
- CompletionController: Decides when tracing is complete
- StarBurstEffect: Reference completion effect
- TracingSession: Wires everything to an embedding surface
- ManualScheduler, AsyncioScheduler: Deferred callback runners
"""

from glyphtrace.core.canvas import StrokeCanvas
from glyphtrace.core.controller import CompletionController
from glyphtrace.core.coverage import CharacterCoverage, CoverageEstimator, CoverageReport
from glyphtrace.core.effects import CompletionEffect, StarBurstEffect
from glyphtrace.core.geometry import (
    place_contour,
    points_along_contour,
)
from glyphtrace.core.rasterizer import GlyphRasterizer, GuideOverlay
from glyphtrace.core.scheduler import AsyncioScheduler, ManualScheduler, Scheduler
from glyphtrace.core.session import TracingSession

__all__ = [
    # Scheduling
    "AsyncioScheduler",
    # Coverage
    "CharacterCoverage",
    # Completion
    "CompletionController",
    "CompletionEffect",
    "CoverageEstimator",
    "CoverageReport",
    # Rasterization
    "GlyphRasterizer",
    "GuideOverlay",
    "ManualScheduler",
    "Scheduler",
    "StarBurstEffect",
    # Capture
    "StrokeCanvas",
    # Session
    "TracingSession",
    # Geometry functions
    "place_contour",
    "points_along_contour",
]
