"""I/O layer for scriptsmith.

This module handles reading stroke datasets and writing fonts. fontTools is
used only here, keeping the pipeline independent of the binary encoder.

Key responsibilities:
- Load glyph map JSON files into domain records
- Serialize domain glyphs into TrueType binaries
- Derive output file names and package family archives

Key classes:
- GlyphMapReader: Load glyph maps
- FontWriter: Serialize fonts
"""

from scriptsmith.io.reader import GlyphMapReader, parse_glyph_map
from scriptsmith.io.writer import (
    FontWriter,
    glyph_name_for,
    safe_font_name,
    save_font,
    write_family_archive,
)

__all__ = [
    "FontWriter",
    "GlyphMapReader",
    "glyph_name_for",
    "parse_glyph_map",
    "safe_font_name",
    "save_font",
    "write_family_archive",
]
