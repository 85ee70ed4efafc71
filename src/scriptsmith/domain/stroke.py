"""Drawing-space types: points, strokes and per-character records.

This module defines the input side of the pipeline:
- Point: A 2D point in a stroke's local space
- Stroke: One continuous pen gesture
- GlyphRecord: All strokes drawn for one character plus its canvas size
- NormalizedGlyph: Strokes mapped into the 1000-unit em square
- CHAR_SET: The characters a font can contain, in glyph order
"""

from dataclasses import dataclass, field
from typing import Any

CHAR_SET: tuple[str, ...] = (
    *"ABCDEFGHIJKLMNOPQRSTUVWXYZ",
    *"abcdefghijklmnopqrstuvwxyz",
    *"0123456789",
    *".!?,",
)


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Copied by value; drawing space has y growing downward.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        return cls(x=float(data["x"]), y=float(data["y"]))


@dataclass(frozen=True)
class Stroke:
    """An ordered sequence of points from touch-down to touch-up.

    A single-point stroke is a tap (dot).

    Attributes:
        points: Points in the order they were drawn
    """

    points: tuple[Point, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", tuple(self.points))

    def __len__(self) -> int:
        return len(self.points)

    @property
    def is_dot(self) -> bool:
        return len(self.points) == 1

    def to_dict(self) -> dict[str, Any]:
        return {"points": [p.to_dict() for p in self.points]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Stroke":
        return cls(Point.from_dict(p) for p in data["points"])


def strokes_bounding_box(strokes: list[Stroke]) -> tuple[float, float, float, float] | None:
    """Calculate the bounding box of every point of every stroke.

    Args:
        strokes: Strokes to measure

    Returns:
        Tuple of (min_x, min_y, max_x, max_y), or None when there are no points
    """
    xs = [p.x for s in strokes for p in s.points]
    ys = [p.y for s in strokes for p in s.points]
    if not xs:
        return None
    return (min(xs), min(ys), max(xs), max(ys))


@dataclass(frozen=True)
class GlyphRecord:
    """All strokes drawn for one character.

    The canvas dimensions establish the coordinate space the strokes were
    drawn in.

    Attributes:
        char: Single code point this record draws
        strokes: Strokes in drawing order
        canvas_width: Width of the drawing canvas in pixels
        canvas_height: Height of the drawing canvas in pixels
    """

    char: str
    strokes: tuple[Stroke, ...]
    canvas_width: float
    canvas_height: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "strokes", tuple(self.strokes))

    def has_ink(self) -> bool:
        """Check if this record carries anything to render.

        Records without strokes or with a zero-size canvas are treated as
        "no data for this character".
        """
        return (
            len(self.strokes) > 0
            and self.canvas_width > 0
            and self.canvas_height > 0
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the keys the drawing application persists."""
        return {
            "char": self.char,
            "strokes": [s.to_dict() for s in self.strokes],
            "canvasWidth": self.canvas_width,
            "canvasHeight": self.canvas_height,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GlyphRecord":
        """Deserialize from the drawing application's format.

        Empty strokes are dropped so every kept stroke has at least one point.
        """
        strokes = [Stroke.from_dict(s) for s in data.get("strokes", [])]
        return cls(
            char=data["char"],
            strokes=[s for s in strokes if s.points],
            canvas_width=float(data.get("canvasWidth", 0)),
            canvas_height=float(data.get("canvasHeight", 0)),
        )


GlyphMap = dict[str, GlyphRecord]


@dataclass
class NormalizedGlyph:
    """A character's strokes mapped into the em square.

    Derived and ephemeral: produced by the normalizer and consumed by
    outline generation.

    Attributes:
        char: Character the strokes draw
        strokes: Strokes in em drawing space (y down, baseline at 800)
        advance_width: Scaled ink width plus both side bearings
        height: Em height the strokes were normalized to
    """

    char: str
    strokes: list[Stroke] = field(default_factory=list)
    advance_width: float = 0.0
    height: float = 1000.0

    def is_empty(self) -> bool:
        return len(self.strokes) == 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "char": self.char,
            "strokes": [s.to_dict() for s in self.strokes],
            "advance_width": self.advance_width,
            "height": self.height,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NormalizedGlyph":
        return cls(
            char=data["char"],
            strokes=[Stroke.from_dict(s) for s in data["strokes"]],
            advance_width=data["advance_width"],
            height=data["height"],
        )
