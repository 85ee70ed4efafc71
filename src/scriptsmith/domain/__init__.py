"""Domain models for scriptsmith.

This module contains the core domain models representing drawn strokes,
normalized glyphs, outline contours and output glyphs. All models are
designed to be:

- Immutable where possible (using frozen dataclasses)
- Serializable for inter-process communication (parallel family export)
- Independent of fonttools and shapely implementation details

Key classes:
- Point: A 2D point
- Stroke: One continuous pen gesture
- GlyphRecord: Strokes drawn for one character plus canvas size
- NormalizedGlyph: Strokes mapped into the em square
- Contour: A closed outline ring
- Glyph: A single output glyph with its contours
- FontInfo: Font-wide naming and metrics
"""

from scriptsmith.domain.contour import Contour, WindingDirection
from scriptsmith.domain.glyph import FontInfo, Glyph, GlyphMetadata
from scriptsmith.domain.stroke import (
    CHAR_SET,
    GlyphMap,
    GlyphRecord,
    NormalizedGlyph,
    Point,
    Stroke,
    strokes_bounding_box,
)

__all__: list[str] = [
    "CHAR_SET",
    # Enums
    "WindingDirection",
    # Core types
    "Point",
    "Stroke",
    "GlyphMap",
    "GlyphRecord",
    "NormalizedGlyph",
    "Contour",
    "GlyphMetadata",
    "Glyph",
    "FontInfo",
    "strokes_bounding_box",
]
