"""Exception hierarchy for glyphtrace."""


class GlyphTraceError(Exception):
    """Base exception for all glyphtrace errors."""

    pass


class FontError(GlyphTraceError):
    """Errors related to font loading."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class GlyphError(GlyphTraceError):
    """Errors related to glyph lookup."""

    pass


class GlyphNotFoundError(GlyphError):
    """Requested character has no glyph and the font has no fallback."""

    def __init__(self, char: str) -> None:
        self.char = char
        super().__init__(f"No glyph for character {char!r} and no '.notdef' fallback")


class MaskError(GlyphTraceError):
    """Errors related to guide and stroke masks."""

    pass


class MaskMismatchError(MaskError):
    """Guide and stroke masks do not share the same raster."""

    def __init__(self, guide_shape: tuple[int, ...], stroke_shape: tuple[int, ...]) -> None:
        self.guide_shape = guide_shape
        self.stroke_shape = stroke_shape
        super().__init__(
            f"Guide mask {guide_shape} and stroke mask {stroke_shape} differ"
        )


class RecordingError(GlyphTraceError):
    """Errors related to recorded pointer sessions."""

    pass


class RecordingLoadError(RecordingError):
    """Error loading a pointer recording."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load recording '{path}': {reason}")
