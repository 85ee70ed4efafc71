"""Glyph map reader for loading drawn strokes.

This module provides the GlyphMapReader class for loading the per-character
stroke dataset the drawing application persists (a JSON object keyed by
character) into domain models.
"""

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from scriptsmith.domain import CHAR_SET, GlyphMap, GlyphRecord
from scriptsmith.exceptions import GlyphMapLoadError


def parse_glyph_map(data: dict[str, Any], source: str = "<memory>") -> GlyphMap:
    """Convert a decoded glyph map into domain records.

    Args:
        data: Mapping of character -> {char, strokes, canvasWidth, canvasHeight}
        source: Name used in error messages

    Returns:
        GlyphMap keyed by character

    Raises:
        GlyphMapLoadError: If the data does not have the expected shape
    """
    if not isinstance(data, dict):
        raise GlyphMapLoadError(source, "top-level value must be an object")

    glyph_map: GlyphMap = {}
    for key, value in data.items():
        if len(key) != 1:
            raise GlyphMapLoadError(source, f"key {key!r} is not a single character")
        try:
            record = GlyphRecord.from_dict({**value, "char": key})
        except (KeyError, TypeError, ValueError) as e:
            raise GlyphMapLoadError(source, f"invalid record for {key!r}: {e}") from e
        glyph_map[key] = record

    return glyph_map


class GlyphMapReader:
    """Loads a glyph map JSON file.

    Example:
        reader = GlyphMapReader(Path("glyphs.json"))
        reader.load()
        for record in reader.iter_records():
            print(record.char, len(record.strokes))
    """

    def __init__(self, path: Path) -> None:
        """Initialize the reader.

        Args:
            path: Path to the glyph map JSON file
        """
        self._path = path
        self._glyph_map: GlyphMap | None = None

    def load(self) -> GlyphMap:
        """Load and parse the file.

        Returns:
            The loaded glyph map

        Raises:
            FileNotFoundError: If the file does not exist
            GlyphMapLoadError: If the file is not a valid glyph map
        """
        if not self._path.exists():
            raise FileNotFoundError(f"Glyph map not found: {self._path}")

        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise GlyphMapLoadError(str(self._path), str(e)) from e

        self._glyph_map = parse_glyph_map(data, source=str(self._path))
        return self._glyph_map

    @property
    def glyph_map(self) -> GlyphMap:
        """Return the loaded glyph map.

        Raises:
            RuntimeError: If the file has not been loaded yet
        """
        if self._glyph_map is None:
            raise RuntimeError("Glyph map not loaded. Call load() first.")
        return self._glyph_map

    @property
    def drawn_count(self) -> int:
        """Number of supported characters that carry ink."""
        return sum(
            1 for char, record in self.glyph_map.items()
            if char in CHAR_SET and record.has_ink()
        )

    def iter_records(self) -> Iterator[GlyphRecord]:
        """Iterate over records in font glyph order.

        Characters outside the supported set are not yielded.
        """
        glyph_map = self.glyph_map
        for char in CHAR_SET:
            if char in glyph_map:
                yield glyph_map[char]

    @staticmethod
    def save(glyph_map: GlyphMap, path: Path) -> None:
        """Write a glyph map in the format load() reads."""
        data = {char: record.to_dict() for char, record in glyph_map.items()}
        path.write_text(json.dumps(data), encoding="utf-8")
