"""Tests for font assembly."""

import io
from unittest.mock import Mock, patch

import pytest
from fontTools.ttLib import TTFont

from scriptsmith.config import BOLD, ITALIC, REGULAR, ScriptsmithSettings
from scriptsmith.core.assembler import NOTDEF_ADVANCE, FontAssembler, notdef_glyph
from scriptsmith.core.outline import OutlineBuilder
from scriptsmith.domain import NormalizedGlyph, Point, Stroke, WindingDirection
from scriptsmith.exceptions import FontAssemblyError, GlyphProcessingError, UnionError
from scriptsmith.utils import ProcessingLogger


@pytest.fixture
def assembler() -> FontAssembler:
    """Create an assembler with default settings."""
    return FontAssembler(ScriptsmithSettings(), ProcessingLogger())


@pytest.fixture
def normalized_l() -> NormalizedGlyph:
    """Create the normalized lowercase l."""
    return NormalizedGlyph(
        char="l",
        strokes=[Stroke([Point(50, 0), Point(50, 800)])],
        advance_width=100.0,
    )


@pytest.fixture
def normalized_glyphs(normalized_l: NormalizedGlyph) -> dict[str, NormalizedGlyph]:
    """Create a small set of normalized glyphs."""
    return {
        "l": normalized_l,
        "A": NormalizedGlyph(
            char="A",
            strokes=[
                Stroke([Point(50, 800), Point(200, 50), Point(350, 800)]),
                Stroke([Point(120, 500), Point(280, 500)]),
            ],
            advance_width=400.0,
        ),
        ".": NormalizedGlyph(char=".", strokes=[Stroke([Point(60, 790)])], advance_width=120.0),
        "b": NormalizedGlyph(char="b"),
    }


class TestFixedGlyphs:
    """Tests for .notdef and space."""

    def test_notdef(self):
        glyph = notdef_glyph()

        assert glyph.name == ".notdef"
        assert glyph.metadata.unicode == 0
        assert glyph.metadata.advance_width == NOTDEF_ADVANCE
        assert glyph.contours[0].bounding_box() == (200, 0, 400, 700)
        assert glyph.contours[0].winding() == WindingDirection.CLOCKWISE

    @pytest.mark.parametrize("spacing,advance", [(0, 400), (5, 450), (-10, 300), (-100, 0)])
    def test_space_advance(self, assembler: FontAssembler, spacing: float, advance: int):
        glyph = assembler.space_glyph(spacing)

        assert glyph.name == "space"
        assert glyph.metadata.unicode == 0x20
        assert glyph.is_empty()
        assert glyph.metadata.advance_width == advance


class TestBuildGlyph:
    """Tests for per-glyph outline building."""

    def test_advance_with_spacing(self, assembler: FontAssembler, normalized_l: NormalizedGlyph):
        builder = OutlineBuilder(REGULAR)

        assert assembler.build_glyph(normalized_l, builder, 0).metadata.advance_width == 100
        assert assembler.build_glyph(normalized_l, builder, 5).metadata.advance_width == 150
        assert assembler.build_glyph(normalized_l, builder, -3).metadata.advance_width == 70

    def test_advance_independent_of_style(self, assembler: FontAssembler, normalized_l: NormalizedGlyph):
        """Test that Bold and Italic keep the Regular advance."""
        advances = {
            assembler.build_glyph(normalized_l, OutlineBuilder(style), 2).metadata.advance_width
            for style in (REGULAR, BOLD, ITALIC)
        }
        assert advances == {120}

    def test_names_and_encoding(self, assembler: FontAssembler):
        glyph = assembler.build_glyph(
            NormalizedGlyph(char=",", strokes=[Stroke([Point(60, 800), Point(50, 900)])]),
            OutlineBuilder(REGULAR),
            0,
        )
        assert glyph.name == "comma"
        assert glyph.metadata.unicode == ord(",")

    def test_union_failure_falls_back(self, assembler: FontAssembler, normalized_l: NormalizedGlyph):
        """Test that a failed union keeps the raw rings."""
        assembler.merger = Mock()
        assembler.merger.merge.side_effect = UnionError("boom")

        glyph = assembler.build_glyph(normalized_l, OutlineBuilder(REGULAR), 0)

        assert len(glyph.contours) == 1
        assert glyph.contours[0].winding() == WindingDirection.CLOCKWISE
        assert assembler.processing_logger.stats.union_fallbacks == 1

    def test_no_rings_raises(self, assembler: FontAssembler, normalized_l: NormalizedGlyph):
        builder = Mock()
        builder.build_rings.return_value = []

        with pytest.raises(GlyphProcessingError):
            assembler.build_glyph(normalized_l, builder, 0)


class TestBuildGlyphs:
    """Tests for building the glyph list of a style."""

    def test_glyph_order(self, assembler: FontAssembler, normalized_glyphs):
        glyphs = assembler.build_glyphs(normalized_glyphs, REGULAR, 0)
        assert [g.name for g in glyphs] == [".notdef", "space", "A", "l", "period"]

    def test_glyph_error_isolated(self, assembler: FontAssembler, normalized_glyphs):
        """Test that one failing glyph is omitted and the rest are kept."""
        original = assembler.build_glyph

        def failing(normalized, builder, letter_spacing):
            if normalized.char == "A":
                raise GlyphProcessingError("A", "broken")
            return original(normalized, builder, letter_spacing)

        with patch.object(assembler, "build_glyph", side_effect=failing):
            glyphs = assembler.build_glyphs(normalized_glyphs, REGULAR, 0)

        assert [g.name for g in glyphs] == [".notdef", "space", "l", "period"]
        stats = assembler.processing_logger.stats
        assert stats.error_count == 1
        assert stats.errors[0][0] == "A"
        assert stats.processed_count == 2


class TestAssemble:
    """Tests for serializing a style."""

    def test_assemble_returns_truetype(self, assembler: FontAssembler, normalized_glyphs):
        data = assembler.assemble("Test Hand", normalized_glyphs, REGULAR, 0)

        assert data[:4] == b"\x00\x01\x00\x00"
        font = TTFont(io.BytesIO(data))
        assert font.getGlyphOrder() == [".notdef", "space", "A", "l", "period"]
        assert font["hmtx"]["l"][0] == 100
        assert font["hmtx"]["space"][0] == 400
        assert font["hmtx"][".notdef"][0] == 600

    def test_font_info(self, assembler: FontAssembler):
        info = assembler.font_info("Test Hand", ITALIC)

        assert info.family_name == "Test Hand"
        assert info.style_name == "Italic"
        assert info.slant == 0.25
        assert info.x_height == 550
        assert info.cap_height == 750
        assert not info.is_bold

    def test_encoder_failure(self, assembler: FontAssembler, normalized_glyphs):
        """Test that an encoder failure aborts the whole export."""
        with patch("scriptsmith.io.writer.FontBuilder", side_effect=RuntimeError("bad table")):
            with pytest.raises(FontAssemblyError, match="bad table"):
                assembler.assemble("Test Hand", normalized_glyphs, REGULAR, 0)
