"""Glyph representation and metadata.

This module defines the output glyph model handed to the font writer: a
named, encoded glyph with its advance width and merged outline contours.
"""

import re
from dataclasses import dataclass, field

from scriptsmith.domain.contour import Contour

# Everything but ASCII letters and digits
_POSTSCRIPT_UNSAFE = re.compile(r"[^A-Za-z0-9]+")


@dataclass
class GlyphMetadata:
    """Metadata about a glyph.

    Attributes:
        name: Glyph name (e.g., "A", "period", "space")
        unicode: Unicode code point (None for unencoded glyphs)
        advance_width: Horizontal advance width in font units
    """

    name: str
    unicode: int | None
    advance_width: int


@dataclass
class Glyph:
    """Represents a single glyph with its contours.

    Attributes:
        metadata: Glyph metadata (name, unicode, metrics)
        contours: List of contours forming the glyph outline
    """

    metadata: GlyphMetadata
    contours: list[Contour] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.metadata.name

    def is_empty(self) -> bool:
        """Check if glyph has no outlines.

        Empty glyphs include the space and characters whose strokes all
        collapsed away.

        Returns:
            True if glyph has no contours, False otherwise
        """
        return len(self.contours) == 0


@dataclass(frozen=True)
class FontInfo:
    """Font-wide naming and metrics handed to the font writer.

    Attributes:
        family_name: Family name (name ID 1)
        style_name: Style name (name ID 2)
        units_per_em: Em square size
        ascender: Ascender in font units
        descender: Descender in font units (negative)
        x_height: OS/2 x-height
        cap_height: OS/2 cap height
        slant: Italic shear factor, used for post.italicAngle
        is_bold: Whether the style is bold
    """

    family_name: str
    style_name: str = "Regular"
    units_per_em: int = 1000
    ascender: int = 800
    descender: int = -200
    x_height: int = 550
    cap_height: int = 750
    slant: float = 0.0
    is_bold: bool = False

    @property
    def is_italic(self) -> bool:
        return self.slant != 0.0 or "italic" in self.style_name.lower()

    @property
    def full_name(self) -> str:
        return f"{self.family_name} {self.style_name}"

    @property
    def postscript_name(self) -> str:
        """PostScript name (name ID 6): ASCII letters and digits, at most 63 chars."""
        family = _POSTSCRIPT_UNSAFE.sub("", self.family_name) or "Handwriting"
        style = _POSTSCRIPT_UNSAFE.sub("", self.style_name) or "Regular"
        return f"{family}-{style}"[:63]
