"""Tests for the command-line interface."""

import io
import json
import zipfile
from pathlib import Path
from unittest.mock import patch

import pytest
from fontTools.ttLib import TTFont
from typer.testing import CliRunner

from scriptsmith.cli.app import app, resolve_style
from scriptsmith.config import CapStyle

runner = CliRunner()


@pytest.fixture(autouse=True)
def no_logging_setup():
    """Keep the CLI from installing root logging handlers during tests."""
    with patch("scriptsmith.cli.app.configure_logging") as mock_configure:
        yield mock_configure


@pytest.fixture
def glyph_map_file(tmp_path: Path) -> Path:
    """Write a glyph map with a few characters."""

    def record(strokes):
        return {
            "strokes": [{"points": [{"x": x, "y": y} for x, y in s]} for s in strokes],
            "canvasWidth": 300,
            "canvasHeight": 300,
        }

    data = {
        "H": record([[(50, 50), (50, 200)], [(150, 50), (150, 200)], [(50, 125), (150, 125)]]),
        "l": record([[(100, 40), (100, 240)]]),
        "i": record([[(100, 120), (100, 220)], [(100, 80)]]),
        "g": record([[(100, 100), (100, 250)]]),
    }
    path = tmp_path / "glyphs.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestResolveStyle:
    def test_preset(self):
        style = resolve_style("bold", None, None, False)
        assert style.style_name == "Bold"
        assert style.thickness == 90.0

    def test_overrides(self):
        style = resolve_style("Italic", 30.0, 0.1, True)
        assert style.style_name == "Italic"
        assert style.thickness == 30.0
        assert style.slant == 0.1
        assert style.cap_style == CapStyle.ROUND

    def test_custom_name(self):
        style = resolve_style("Light", 20.0, None, False)
        assert style.style_name == "Light"
        assert style.thickness == 20.0
        assert style.slant == 0.0


class TestCompileCommand:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "Scriptsmith" in result.output

    def test_missing_input(self, tmp_path: Path):
        result = runner.invoke(app, [str(tmp_path / "nope.json")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_verbose_and_quiet(self, glyph_map_file: Path):
        result = runner.invoke(app, [str(glyph_map_file), "-v", "-q"])
        assert result.exit_code == 1

    def test_invalid_glyph_map(self, tmp_path: Path):
        path = tmp_path / "broken.json"
        path.write_text("[1, 2", encoding="utf-8")

        result = runner.invoke(app, [str(path)])
        assert result.exit_code == 1
        assert "Could not load glyph map" in result.output

    def test_letter_spacing_out_of_range(self, glyph_map_file: Path):
        result = runner.invoke(app, [str(glyph_map_file), "--letter-spacing", "200"])
        assert result.exit_code == 2

    def test_single_font(self, glyph_map_file: Path):
        result = runner.invoke(app, [str(glyph_map_file), "--name", "Test Hand"])

        assert result.exit_code == 0, result.output
        output = glyph_map_file.parent / "Test_Hand.ttf"
        assert output.exists()
        font = TTFont(output)
        assert font.getGlyphOrder() == [".notdef", "space", "H", "g", "i", "l"]
        assert font["name"].getDebugName(1) == "Test Hand"

    def test_explicit_output_and_style(self, glyph_map_file: Path, tmp_path: Path):
        output = tmp_path / "custom.ttf"
        result = runner.invoke(
            app,
            [str(glyph_map_file), "-o", str(output), "--style", "bold", "-q"],
        )

        assert result.exit_code == 0, result.output
        font = TTFont(output)
        assert font["name"].getDebugName(2) == "Bold"
        assert font["OS/2"].fsSelection & (1 << 5)

    def test_letter_spacing(self, glyph_map_file: Path, tmp_path: Path):
        output = tmp_path / "spaced.ttf"
        result = runner.invoke(
            app, [str(glyph_map_file), "-o", str(output), "--letter-spacing", "-5", "-q"]
        )

        assert result.exit_code == 0, result.output
        assert TTFont(output)["hmtx"]["space"][0] == 350

    def test_family_archive(self, glyph_map_file: Path):
        result = runner.invoke(app, [str(glyph_map_file), "--name", "My Hand", "--family"])

        assert result.exit_code == 0, result.output
        archive = glyph_map_file.parent / "My_Hand_Family.zip"
        with zipfile.ZipFile(archive) as zf:
            names = zf.namelist()
            assert names == [
                "My_Hand/My_Hand-Regular.ttf",
                "My_Hand/My_Hand-Bold.ttf",
                "My_Hand/My_Hand-Italic.ttf",
            ]
            italic = TTFont(io.BytesIO(zf.read(names[2])))
        assert italic["post"].italicAngle < 0

    def test_center(self, glyph_map_file: Path, tmp_path: Path):
        output = tmp_path / "centered.ttf"
        result = runner.invoke(app, [str(glyph_map_file), "-o", str(output), "--center", "-q"])

        assert result.exit_code == 0, result.output
        assert output.exists()

    def test_logging_configured(self, glyph_map_file: Path, tmp_path: Path, no_logging_setup):
        log_file = tmp_path / "run.log"
        runner.invoke(app, [str(glyph_map_file), "--log-file", str(log_file), "-q"])

        no_logging_setup.assert_called_once()
        assert no_logging_setup.call_args.kwargs["log_file"] == log_file
        assert no_logging_setup.call_args.kwargs["quiet"] is True
