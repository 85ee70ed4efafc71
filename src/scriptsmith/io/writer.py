"""Font writer for serializing generated glyphs.

This module provides the FontWriter class, which turns domain glyphs into a
TrueType binary with fontTools, plus helpers for output naming and for
packaging a family into a zip archive.
"""

import io
import math
import re
import zipfile
from pathlib import Path

from fontTools.agl import UV2AGL
from fontTools.fontBuilder import FontBuilder
from fontTools.misc.roundTools import otRound
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib import TTFont

from scriptsmith import __version__
from scriptsmith.domain import FontInfo, Glyph
from scriptsmith.exceptions import FontAssemblyError, FontSaveError

DEFAULT_FONT_NAME = "Handwriting"

# OS/2 fsSelection bits
FS_ITALIC = 1 << 0
FS_BOLD = 1 << 5
FS_REGULAR = 1 << 6

# head.macStyle bits
MAC_BOLD = 1 << 0
MAC_ITALIC = 1 << 1


def glyph_name_for(char: str) -> str:
    """Production glyph name of a character.

    Uses the Adobe Glyph List ("period", "comma", "zero", ...) and falls
    back to uniXXXX.
    """
    code_point = ord(char)
    return UV2AGL.get(code_point, f"uni{code_point:04X}")


def safe_font_name(name: str) -> str:
    """Collapse every run of non-alphanumeric characters into "_".

    Args:
        name: User supplied font name

    Returns:
        Name safe for file names and PostScript names
    """
    cleaned = re.sub(r"[^A-Za-z0-9]+", "_", name).strip("_")
    return cleaned or DEFAULT_FONT_NAME


def _draw_glyph(glyph: Glyph) -> object:
    """Draw domain contours into a TrueType glyph.

    Coordinates are rounded to integers; consecutive points that land on
    the same grid position are dropped.
    """
    pen = TTGlyphPen(None)

    for contour in glyph.contours:
        points: list[tuple[int, int]] = []
        for point in contour.points:
            rounded = (otRound(point.x), otRound(point.y))
            if not points or points[-1] != rounded:
                points.append(rounded)
        if len(points) > 1 and points[0] == points[-1]:
            points.pop()
        if len(points) < 3:
            continue

        pen.moveTo(points[0])
        for point in points[1:]:
            pen.lineTo(point)
        pen.closePath()

    return pen.glyph()


class FontWriter:
    """Serializes glyphs into a TrueType font.

    The FontWriter owns every fontTools detail: glyph order, cmap, glyf/loca,
    horizontal metrics, naming and style flags.

    Example:
        writer = FontWriter(FontInfo(family_name="MyHand"))
        data = writer.to_bytes(glyphs)
    """

    def __init__(self, info: FontInfo) -> None:
        """Initialize the font writer.

        Args:
            info: Naming and metrics of the font to write
        """
        self._info = info

    def build(self, glyphs: list[Glyph]) -> TTFont:
        """Build the fontTools font object.

        Args:
            glyphs: Glyphs in final glyph order (.notdef first)

        Returns:
            TTFont ready to be saved

        Raises:
            FontAssemblyError: If fontTools rejects any table
        """
        info = self._info

        try:
            fb = FontBuilder(info.units_per_em, isTTF=True)
            glyph_order = [g.name for g in glyphs]
            fb.setupGlyphOrder(glyph_order)
            fb.setupCharacterMap(
                {
                    g.metadata.unicode: g.name
                    for g in glyphs
                    if g.metadata.unicode is not None
                }
            )
            tt_glyphs = {g.name: _draw_glyph(g) for g in glyphs}
            fb.setupGlyf(tt_glyphs)

            metrics = {}
            for g in glyphs:
                # hmtx lsb must match the glyph's xMin for TrueType outlines
                coords = getattr(tt_glyphs[g.name], "coordinates", ())
                lsb = min((x for x, _ in coords), default=0)
                metrics[g.name] = (g.metadata.advance_width, lsb)
            fb.setupHorizontalMetrics(metrics)

            fb.setupHorizontalHeader(ascent=info.ascender, descent=info.descender)
            fb.setupNameTable(
                {
                    "familyName": info.family_name,
                    "styleName": info.style_name,
                    "uniqueFontIdentifier": f"{info.postscript_name};{__version__}",
                    "fullName": info.full_name,
                    "psName": info.postscript_name,
                    "version": f"Version {__version__}",
                }
            )
            fb.setupOS2(
                sTypoAscender=info.ascender,
                sTypoDescender=info.descender,
                sTypoLineGap=0,
                usWinAscent=info.ascender,
                usWinDescent=-info.descender,
                sxHeight=info.x_height,
                sCapHeight=info.cap_height,
                fsSelection=self._fs_selection(),
            )
            fb.setupPost(italicAngle=self._italic_angle())
            fb.font["head"].macStyle = self._mac_style()
        except Exception as e:
            raise FontAssemblyError(info.family_name, str(e)) from e

        return fb.font

    def to_bytes(self, glyphs: list[Glyph]) -> bytes:
        """Build and serialize the font.

        All-or-nothing: a partially written font is never returned.

        Raises:
            FontAssemblyError: If the font cannot be built or compiled
        """
        font = self.build(glyphs)
        buffer = io.BytesIO()
        try:
            font.save(buffer)
        except Exception as e:
            raise FontAssemblyError(self._info.family_name, str(e)) from e
        finally:
            font.close()
        return buffer.getvalue()

    def _fs_selection(self) -> int:
        info = self._info
        bits = 0
        if info.is_italic:
            bits |= FS_ITALIC
        if info.is_bold:
            bits |= FS_BOLD
        return bits or FS_REGULAR

    def _mac_style(self) -> int:
        info = self._info
        bits = 0
        if info.is_bold:
            bits |= MAC_BOLD
        if info.is_italic:
            bits |= MAC_ITALIC
        return bits

    def _italic_angle(self) -> float:
        # Shear x += y * slant leans the glyph right, i.e. a negative angle
        return -round(math.degrees(math.atan(self._info.slant)), 2)

    @staticmethod
    def get_output_path(output_dir: Path, font_name: str, style_name: str | None = None) -> Path:
        """Generate the output path of a font file.

        Converts: ("out", "My Hand") -> out/My_Hand.ttf
                  ("out", "My Hand", "Bold") -> out/My_Hand-Bold.ttf

        Args:
            output_dir: Directory to write into
            font_name: User supplied font name
            style_name: Style suffix, or None for a single-style export

        Returns:
            Path of the .ttf file
        """
        stem = safe_font_name(font_name)
        if style_name:
            stem = f"{stem}-{style_name}"
        return output_dir / f"{stem}.ttf"

    @staticmethod
    def get_archive_path(output_dir: Path, font_name: str) -> Path:
        """Path of the family archive, e.g. out/My_Hand_Family.zip."""
        return output_dir / f"{safe_font_name(font_name)}_Family.zip"


def save_font(data: bytes, path: Path) -> None:
    """Write a font buffer to disk.

    Raises:
        FontSaveError: If the file cannot be written
    """
    try:
        path.write_bytes(data)
    except OSError as e:
        raise FontSaveError(str(path), str(e)) from e


def write_family_archive(buffers: dict[str, bytes], font_name: str) -> bytes:
    """Package family font files into a zip archive.

    Files are placed in a folder named after the font, as the drawing
    application offers them for download.

    Args:
        buffers: File name -> font bytes
        font_name: User supplied font name

    Returns:
        Zip archive bytes
    """
    folder = safe_font_name(font_name)
    archive = io.BytesIO()
    with zipfile.ZipFile(archive, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for filename, data in buffers.items():
            zf.writestr(f"{folder}/{filename}", data)
    return archive.getvalue()
