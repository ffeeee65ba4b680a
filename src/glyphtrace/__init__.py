"""glyphtrace - Judge freehand tracing of letters and words.

glyphtrace renders a target letter or word from a TrueType/OpenType font
as a guide, records the strokes a learner draws over it, and decides
without manual grading whether the strokes cover the guide well enough
to celebrate.

Example:
    $ glyphtrace guide Roboto-Regular.ttf cat --output cat.png
    $ glyphtrace replay Roboto-Regular.ttf A session.json
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
