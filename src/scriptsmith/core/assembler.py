"""Font assembly: from normalized glyphs to a TrueType binary.

The assembler renders every normalized glyph through the outline builder
and merger for one style, adds the fixed .notdef and space glyphs and hands
the result to the font writer.

Key classes:
- FontAssembler: Builds the glyph list of one style and serializes it
"""

import time
import traceback

from scriptsmith.config import ScriptsmithSettings, StyleConfig
from scriptsmith.core.merger import OutlineMerger, raw_contours
from scriptsmith.core.outline import OutlineBuilder
from scriptsmith.domain import (
    CHAR_SET,
    Contour,
    FontInfo,
    Glyph,
    GlyphMetadata,
    NormalizedGlyph,
    Point,
    WindingDirection,
)
from scriptsmith.exceptions import GlyphProcessingError, UnionError
from scriptsmith.io.writer import FontWriter, glyph_name_for
from scriptsmith.utils import ProcessingLogger

NOTDEF_ADVANCE = 600
# .notdef placeholder box (x_min, y_min, x_max, y_max) in font units
NOTDEF_BOX = (200, 0, 400, 700)


def notdef_glyph() -> Glyph:
    """Fixed placeholder box shown for unmapped characters."""
    x_min, y_min, x_max, y_max = NOTDEF_BOX
    box = Contour(
        points=[
            Point(x_min, y_min),
            Point(x_min, y_max),
            Point(x_max, y_max),
            Point(x_max, y_min),
        ],
        direction=WindingDirection.CLOCKWISE,
    )
    return Glyph(
        metadata=GlyphMetadata(name=".notdef", unicode=0, advance_width=NOTDEF_ADVANCE),
        contours=[box],
    )


class FontAssembler:
    """Assembles one font style from normalized glyphs.

    A glyph whose outline cannot be built is left out with a warning; a
    glyph whose rings cannot be unioned keeps its overlapping rings. Only a
    failure of the binary encoder aborts the export.

    Example:
        assembler = FontAssembler(settings)
        data = assembler.assemble("MyHand", normalized_glyphs, BOLD)
    """

    def __init__(
        self,
        settings: ScriptsmithSettings,
        processing_logger: ProcessingLogger | None = None,
    ) -> None:
        """Initialize the assembler.

        Args:
            settings: Scriptsmith settings (metrics, merge and spacing)
            processing_logger: Logger collecting per-glyph statistics
        """
        self.settings = settings
        self.processing_logger = processing_logger or ProcessingLogger()
        self.merger = OutlineMerger(settings.merge.strategy)

    def spacing_offset(self, letter_spacing: float) -> float:
        """Font units added to every advance width."""
        return letter_spacing * self.settings.generation.spacing_unit

    def space_glyph(self, letter_spacing: float) -> Glyph:
        advance = self.settings.generation.space_width + self.spacing_offset(letter_spacing)
        return Glyph(
            metadata=GlyphMetadata(name="space", unicode=0x20, advance_width=max(round(advance), 0)),
        )

    def build_glyph(
        self,
        normalized: NormalizedGlyph,
        builder: OutlineBuilder,
        letter_spacing: float,
    ) -> Glyph:
        """Render one normalized glyph into merged outline contours.

        Args:
            normalized: Glyph in em drawing space
            builder: Outline builder of the target style
            letter_spacing: Uniform tracking in spacing units

        Returns:
            Output glyph with TrueType-wound contours

        Raises:
            GlyphProcessingError: If no ring could be built
        """
        char = normalized.char
        rings = builder.build_rings(normalized.strokes)
        if not rings and normalized.strokes:
            raise GlyphProcessingError(char, "no stroke produced an outline")

        try:
            contours = self.merger.merge(rings)
        except UnionError as e:
            self.processing_logger.log_union_fallback(char, str(e))
            contours = raw_contours(rings)

        advance = round(normalized.advance_width + self.spacing_offset(letter_spacing))
        metadata = GlyphMetadata(
            name=glyph_name_for(char),
            unicode=ord(char),
            advance_width=max(advance, 0),
        )
        return Glyph(metadata=metadata, contours=contours)

    def build_glyphs(
        self,
        normalized_glyphs: dict[str, NormalizedGlyph],
        style: StyleConfig,
        letter_spacing: float,
    ) -> list[Glyph]:
        """Build .notdef, space and every drawn glyph in glyph order.

        Characters absent from `normalized_glyphs` or with no strokes are
        omitted from the font.
        """
        builder = OutlineBuilder(style, ascender=self.settings.metrics.ascender)
        glyphs = [notdef_glyph(), self.space_glyph(letter_spacing)]

        for char in CHAR_SET:
            normalized = normalized_glyphs.get(char)
            if normalized is None or normalized.is_empty():
                continue

            self.processing_logger.log_glyph_start(char)
            start_time = time.time()
            try:
                glyph = self.build_glyph(normalized, builder, letter_spacing)
            except Exception as e:
                self.processing_logger.log_glyph_error(char, e, traceback.format_exc())
                continue

            glyphs.append(glyph)
            self.processing_logger.log_glyph_complete(
                char,
                contours=len(glyph.contours),
                advance_width=glyph.metadata.advance_width,
                duration_ms=(time.time() - start_time) * 1000,
            )

        return glyphs

    def font_info(self, font_name: str, style: StyleConfig) -> FontInfo:
        m = self.settings.metrics
        return FontInfo(
            family_name=font_name,
            style_name=style.style_name,
            units_per_em=m.units_per_em,
            ascender=m.ascender,
            descender=m.descender,
            x_height=round(m.x_height),
            cap_height=round(m.cap_height),
            slant=style.slant,
            is_bold=style.is_bold,
        )

    def assemble(
        self,
        font_name: str,
        normalized_glyphs: dict[str, NormalizedGlyph],
        style: StyleConfig,
        letter_spacing: float = 0.0,
    ) -> bytes:
        """Build and serialize one font style.

        Args:
            font_name: Family name
            normalized_glyphs: Character -> normalized glyph
            style: Thickness, slant and name of the style
            letter_spacing: Uniform tracking in spacing units

        Returns:
            TrueType font bytes

        Raises:
            FontAssemblyError: If the binary encoder rejects the font
        """
        glyphs = self.build_glyphs(normalized_glyphs, style, letter_spacing)
        writer = FontWriter(self.font_info(font_name, style))
        return writer.to_bytes(glyphs)
