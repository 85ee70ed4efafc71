"""Tests for font generation orchestration."""

import io
from unittest.mock import patch

import pytest
from fontTools.ttLib import TTFont

from scriptsmith.config import BOLD, ScriptsmithSettings
from scriptsmith.core.processor import (
    FontProcessor,
    generate_font,
    generate_font_family,
    render_style_variant,
)
from scriptsmith.domain import GlyphRecord, NormalizedGlyph, Point, Stroke
from scriptsmith.exceptions import FontAssemblyError

# Unit circle directions, closed
LOOP = [
    (1, 0), (0.7, 0.7), (0, 1), (-0.7, 0.7), (-1, 0),
    (-0.7, -0.7), (0, -1), (0.7, -0.7), (1, 0),
]


@pytest.fixture
def glyph_map() -> dict[str, GlyphRecord]:
    """Create a glyph map with a few drawn characters."""
    return {
        "l": GlyphRecord("l", [Stroke([Point(50, 50), Point(50, 250)])], 300, 300),
        "o": GlyphRecord("o", [Stroke([Point(50 + 40 * dx, 100 + 40 * dy) for dx, dy in LOOP])], 300, 300),
        "i": GlyphRecord(
            "i",
            [Stroke([Point(50, 100), Point(50, 200)]), Stroke([Point(50, 60)])],
            300,
            300,
        ),
        "q": GlyphRecord("q", [], 300, 300),
        "#": GlyphRecord("#", [Stroke([Point(0, 0), Point(10, 10)])], 300, 300),
    }


@pytest.fixture
def settings() -> ScriptsmithSettings:
    """Create test settings."""
    return ScriptsmithSettings()


class TestRenderStyleVariant:
    """Tests for render_style_variant function."""

    def test_success(self, settings: ScriptsmithSettings):
        normalized = {
            "l": NormalizedGlyph(
                char="l",
                strokes=[Stroke([Point(50, 0), Point(50, 800)])],
                advance_width=100.0,
            ).to_dict()
        }

        result = render_style_variant(
            normalized, settings.model_dump(), BOLD.model_dump(), "Test", 0.0
        )

        assert "error" not in result
        assert result["style"] == "Bold"
        assert result["stats"]["processed"] == 1
        font = TTFont(io.BytesIO(result["buffer"]))
        assert font["OS/2"].fsSelection & (1 << 5)

    def test_error_reported(self, settings: ScriptsmithSettings):
        """Test that failures come back as data instead of raising."""
        result = render_style_variant(
            {"l": {"char": "l"}}, settings.model_dump(), BOLD.model_dump(), "Test", 0.0
        )

        assert result["style"] == "Bold"
        assert "error" in result
        assert "traceback" in result
        assert "buffer" not in result


class TestFontProcessor:
    """Tests for FontProcessor class."""

    def test_init_defaults(self):
        processor = FontProcessor()
        assert isinstance(processor.config, ScriptsmithSettings)
        assert processor.stats.processed_count == 0

    def test_normalize_omits_empty_and_unsupported(self, settings, glyph_map):
        normalized = FontProcessor(settings).normalize(glyph_map)
        assert list(normalized) == ["i", "l", "o"]

    def test_normalize_snapshot(self, settings, glyph_map):
        """Test that the caller's map is not modified."""
        before = dict(glyph_map)
        FontProcessor(settings).normalize(glyph_map)
        assert glyph_map == before

    def test_process(self, settings, glyph_map):
        processor = FontProcessor(settings)
        data = processor.process(glyph_map, font_name="Test Hand")

        font = TTFont(io.BytesIO(data))
        assert font.getGlyphOrder() == [".notdef", "space", "i", "l", "o"]
        assert processor.stats.processed_count == 3
        assert processor.stats.skipped_count == 1
        assert processor.stats.error_count == 0

    def test_process_uses_configured_name(self, glyph_map):
        settings = ScriptsmithSettings()
        settings.generation.font_name = "Configured"
        data = FontProcessor(settings).process(glyph_map)

        font = TTFont(io.BytesIO(data))
        assert font["name"].getDebugName(1) == "Configured"

    def test_process_family_serial(self, settings, glyph_map):
        progress = []
        buffers = FontProcessor(settings).process_family(
            glyph_map,
            font_name="My Hand",
            max_workers=1,
            progress_callback=lambda done, total, style, ok: progress.append((done, total, style, ok)),
        )

        assert list(buffers) == [
            "My_Hand-Regular.ttf",
            "My_Hand-Bold.ttf",
            "My_Hand-Italic.ttf",
        ]
        assert progress[-1] == (3, 3, "Italic", True)

    def test_family_advances_identical(self, settings, glyph_map):
        buffers = FontProcessor(settings).process_family(glyph_map, font_name="x", max_workers=1)
        fonts = [TTFont(io.BytesIO(data)) for data in buffers.values()]

        for glyph_name in ("space", "i", "l", "o"):
            advances = {font["hmtx"][glyph_name][0] for font in fonts}
            assert len(advances) == 1

    def test_family_stats_merged(self, settings, glyph_map):
        processor = FontProcessor(settings)
        processor.process_family(glyph_map, font_name="x", max_workers=1)
        assert processor.stats.processed_count == 9

    def test_process_family_error(self, settings, glyph_map):
        """Test that a failed style aborts the family export."""
        failed = {"style": "Regular", "error": "encoder exploded", "traceback": "", "duration_ms": 0}

        with patch("scriptsmith.core.processor.render_style_variant", return_value=failed):
            with pytest.raises(FontAssemblyError, match="encoder exploded"):
                FontProcessor(settings).process_family(glyph_map, font_name="x", max_workers=1)


class TestConvenienceFunctions:
    def test_generate_font(self, glyph_map):
        data = generate_font("Hand", glyph_map, letter_spacing=5)
        font = TTFont(io.BytesIO(data))
        assert font["hmtx"]["space"][0] == 450

    def test_generate_font_family(self, glyph_map):
        buffers = generate_font_family("Hand", glyph_map, max_workers=1)
        assert set(buffers) == {"Hand-Regular.ttf", "Hand-Bold.ttf", "Hand-Italic.ttf"}

    def test_generate_font_postscript_name(self, glyph_map):
        data = generate_font("My Hand (v2)/Beta", glyph_map)
        font = TTFont(io.BytesIO(data))

        assert font["name"].getDebugName(6) == "MyHandv2Beta-Regular"
        assert font["name"].getDebugName(1) == "My Hand (v2)/Beta"
