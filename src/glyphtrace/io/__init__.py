"""I/O layer for glyphtrace.

This module handles reading font files using fonttools and loading
recorded pointer sessions. It provides a clean abstraction layer between
fonttools and the domain models.

Key responsibilities:
- Load TTF/OTF fonts
- Convert fonttools outlines to flattened domain glyphs
- Load and validate pointer recordings

Key classes:
- FontReader: Load fonts and look up glyphs by character
- PointerRecording: Validated pointer session
"""

from glyphtrace.io.reader import FontReader
from glyphtrace.io.recording import PointerRecording, RecordedEvent, load_recording

__all__ = [
    "FontReader",
    "PointerRecording",
    "RecordedEvent",
    "load_recording",
]
