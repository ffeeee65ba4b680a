"""Font reader for loading TTF/OTF fonts.

This module provides the FontReader class for loading font files and
looking up flattened glyphs by character.
"""

from pathlib import Path

import structlog
from fontTools.ttLib import TTFont

from glyphtrace.domain.glyph import Glyph
from glyphtrace.exceptions import GlyphNotFoundError
from glyphtrace.io.converter import fonttools_glyph_to_domain

logger = structlog.get_logger(__name__)

NOTDEF = ".notdef"


class FontReader:
    """Loads TTF/OTF fonts and serves flattened glyphs.

    Glyphs are flattened once per reader and cached by name.

    Example:
        with FontReader(Path("font.ttf")) as reader:
            glyph = reader.glyph_for_char("A")
            print(glyph.advance_width)
    """

    def __init__(self, font_path: Path, flatten_tolerance: float = 1.0) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the TTF or OTF font file
            flatten_tolerance: Curve flattening tolerance in font units
        """
        self._font_path = font_path
        self._flatten_tolerance = flatten_tolerance
        self._font: TTFont | None = None
        self._cmap: dict[int, str] = {}
        self._glyph_cache: dict[str, Glyph] = {}

    @property
    def path(self) -> Path:
        return self._font_path

    def load(self) -> None:
        """Load the font file.

        Raises:
            FileNotFoundError: If font file does not exist
            Exception: If font file is invalid or cannot be loaded
        """
        if not self._font_path.exists():
            raise FileNotFoundError(f"Font file not found: {self._font_path}")

        self._font = TTFont(str(self._font_path))
        self._cmap = self._font.getBestCmap() or {}
        self._glyph_cache.clear()

    def _require_font(self) -> TTFont:
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def format(self) -> str:
        """Return font format.

        Returns:
            'TrueType' for TTF fonts, 'OpenType' for OTF fonts

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        font = self._require_font()
        if "CFF " in font or "CFF2" in font:
            return "OpenType"
        return "TrueType"

    @property
    def units_per_em(self) -> int:
        """Return font's units per em.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self._require_font()["head"].unitsPerEm  # type: ignore[attr-defined]

    @property
    def ascender(self) -> int:
        """Return the horizontal header ascender in font units."""
        return self._require_font()["hhea"].ascent  # type: ignore[attr-defined]

    @property
    def descender(self) -> int:
        """Return the horizontal header descender (negative) in font units."""
        return self._require_font()["hhea"].descent  # type: ignore[attr-defined]

    @property
    def family_name(self) -> str:
        """Return the font's family name, or the file stem if unnamed."""
        name_table = self._require_font().get("name")
        family = name_table.getBestFamilyName() if name_table else None
        return family or self._font_path.stem

    def has_char(self, char: str) -> bool:
        """Check whether the font maps a character to a glyph."""
        self._require_font()
        return ord(char) in self._cmap

    def get_glyph(self, name: str) -> Glyph | None:
        """Get a specific glyph by name.

        Args:
            name: Name of the glyph to retrieve

        Returns:
            Glyph domain model, or None if glyph not found

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        font = self._require_font()

        cached = self._glyph_cache.get(name)
        if cached is not None:
            return cached

        glyph_set = font.getGlyphSet()
        if name not in glyph_set:
            return None

        glyph = fonttools_glyph_to_domain(
            name=name,
            fonttools_glyph=glyph_set[name],
            font=font,
            tolerance=self._flatten_tolerance,
        )
        self._glyph_cache[name] = glyph
        return glyph

    def glyph_for_char(self, char: str) -> Glyph:
        """Get the glyph rendered for a character.

        Characters the font does not map fall back to '.notdef', which is
        what a text renderer would draw.

        Raises:
            GlyphNotFoundError: If neither the character nor '.notdef' exist
            RuntimeError: If font has not been loaded yet
        """
        self._require_font()
        name = self._cmap.get(ord(char))
        if name is None:
            logger.warning("Character missing from font", char=char, fallback=NOTDEF)
            name = NOTDEF

        glyph = self.get_glyph(name)
        if glyph is None:
            raise GlyphNotFoundError(char)
        return glyph

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None
        self._cmap = {}
        self._glyph_cache.clear()

    def __enter__(self) -> "FontReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
