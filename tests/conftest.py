"""Shared fixtures.

The test font is built with fontTools so the geometry of every glyph is
known exactly (UPM 1000, ascender 800, descender -200):

- "I": one rectangle, x 100-200, y 0-700, advance 300
- "T": bar x 50-550 y 600-700 plus stem x 250-350 y 0-600, advance 600
- "A": box x 50-550 y 0-700 with a counter x 150-450 y 150-550, advance 600
- "O": quadratic ring, advance 600
- "space": no outline, advance 250
- ".notdef": box x 50-450 y 0-700, advance 500
"""

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from glyphtrace.core import ManualScheduler
from glyphtrace.io import FontReader


def _rect(pen: TTGlyphPen, x0: int, y0: int, x1: int, y1: int) -> None:
    pen.moveTo((x0, y0))
    pen.lineTo((x0, y1))
    pen.lineTo((x1, y1))
    pen.lineTo((x1, y0))
    pen.closePath()


def _counter(pen: TTGlyphPen, x0: int, y0: int, x1: int, y1: int) -> None:
    pen.moveTo((x0, y0))
    pen.lineTo((x1, y0))
    pen.lineTo((x1, y1))
    pen.lineTo((x0, y1))
    pen.closePath()


def _ring(pen: TTGlyphPen, cx: int, cy: int, rx: int, ry: int, reverse: bool = False) -> None:
    sx = -1 if reverse else 1
    pen.moveTo((cx, cy - ry))
    pen.qCurveTo((cx + sx * rx, cy - ry), (cx + sx * rx, cy))
    pen.qCurveTo((cx + sx * rx, cy + ry), (cx, cy + ry))
    pen.qCurveTo((cx - sx * rx, cy + ry), (cx - sx * rx, cy))
    pen.qCurveTo((cx - sx * rx, cy - ry), (cx, cy - ry))
    pen.closePath()


def build_test_font(path: Path) -> Path:
    """Write the test font to ``path``."""
    glyph_order = [".notdef", "space", "I", "T", "A", "O"]
    advances = {".notdef": 500, "space": 250, "I": 300, "T": 600, "A": 600, "O": 600}

    pens = {name: TTGlyphPen(None) for name in glyph_order}
    _rect(pens[".notdef"], 50, 0, 450, 700)
    _rect(pens["I"], 100, 0, 200, 700)
    _rect(pens["T"], 50, 600, 550, 700)
    _rect(pens["T"], 250, 0, 350, 600)
    _rect(pens["A"], 50, 0, 550, 700)
    _counter(pens["A"], 150, 150, 450, 550)
    _ring(pens["O"], 300, 350, 250, 350)
    _ring(pens["O"], 300, 350, 150, 250, reverse=True)

    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap({0x20: "space", ord("I"): "I", ord("T"): "T", ord("A"): "A", ord("O"): "O"})
    fb.setupGlyf({name: pen.glyph() for name, pen in pens.items()})

    glyf = fb.font["glyf"]
    fb.setupHorizontalMetrics(
        {name: (advances[name], getattr(glyf[name], "xMin", 0)) for name in glyph_order}
    )
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": "Trace Test", "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200)
    fb.setupPost()
    fb.save(str(path))
    return path


@pytest.fixture(scope="session")
def font_path(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """Path to the generated test font."""
    return build_test_font(tmp_path_factory.mktemp("fonts") / "TraceTest-Regular.ttf")


@pytest.fixture
def reader(font_path: Path) -> Generator[FontReader, None, None]:
    """Loaded reader for the test font."""
    font_reader = FontReader(font_path)
    font_reader.load()
    yield font_reader
    font_reader.close()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None, None, None]:
    """Undo handlers and structlog configuration added by a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    structlog.reset_defaults()
