"""Mapping of drawn strokes into the 1000-unit em square.

Each character is scaled uniformly so its ink matches the target height of
its category, then placed vertically against the baseline and padded with
fixed side bearings. The output stays in drawing orientation (y grows
downward, baseline at 800); the outline builder flips it into font units.

Key classes:
- GlyphCategory: Vertical placement class of a character
- GlyphNormalizer: Normalizes strokes and computes the corpus-average scale
"""

from enum import Enum

from scriptsmith.config import MetricsConfig, SmoothingConfig
from scriptsmith.core.smoother import apply_smoothing
from scriptsmith.domain import (
    GlyphMap,
    NormalizedGlyph,
    Point,
    Stroke,
    strokes_bounding_box,
)

# Characters pushed below the canvas centre when re-centring a drawing
CENTERING_DESCENDERS = "gjpqy,f"
DESCENDER_CENTER_RATIO = 0.62


class GlyphCategory(str, Enum):
    """Vertical placement class of a character."""

    CAPS = "caps"
    X_HEIGHT = "x_height"
    ASCENDER = "ascender"
    DESCENDER = "descender"
    COMMA = "comma"
    PERIOD = "period"
    PUNCTUATION = "punctuation"


class GlyphNormalizer:
    """Normalizes a character's strokes into em space.

    The normalizer holds no state besides its injected configuration and
    is safe to share between threads.

    Example:
        normalizer = GlyphNormalizer(MetricsConfig(), SmoothingConfig())
        avg_scale = normalizer.compute_avg_scale(glyph_map)
        glyph = normalizer.normalize(glyph_map["A"].strokes, "A", avg_scale)
    """

    def __init__(
        self,
        metrics: MetricsConfig | None = None,
        smoothing: SmoothingConfig | None = None,
    ) -> None:
        self.metrics = metrics if metrics is not None else MetricsConfig()
        self.smoothing = smoothing if smoothing is not None else SmoothingConfig()

    def categorize(self, char: str) -> GlyphCategory:
        """Look up the placement category of a character."""
        m = self.metrics
        if char in m.caps_chars:
            return GlyphCategory.CAPS
        if char in m.x_height_chars:
            return GlyphCategory.X_HEIGHT
        if char in m.ascender_chars:
            return GlyphCategory.ASCENDER
        if char in m.descender_chars:
            return GlyphCategory.DESCENDER
        if char == ",":
            return GlyphCategory.COMMA
        if char == ".":
            return GlyphCategory.PERIOD
        return GlyphCategory.PUNCTUATION

    def target_height(self, category: GlyphCategory) -> float | None:
        """Fixed ink height of a category, or None when it uses the average scale."""
        m = self.metrics
        return {
            GlyphCategory.CAPS: m.cap_height,
            GlyphCategory.X_HEIGHT: m.x_height,
            GlyphCategory.ASCENDER: m.ascender_height,
            # Descenders span x-height plus the tail; scaling to cap height
            # keeps their overall proportion with the capitals.
            GlyphCategory.DESCENDER: m.cap_height,
        }.get(category)

    def compute_avg_scale(self, glyph_map: GlyphMap) -> float:
        """Average ideal scale factor over every sampled character.

        Samples characters with a fixed target height and averages
        target height / raw drawn height. Punctuation uses this value so
        that its size follows the writer's hand.

        Args:
            glyph_map: Mapping of characters to drawn records

        Returns:
            Average scale, or the canvas-to-em fallback when nothing is drawn
        """
        scales: list[float] = []

        for char, record in glyph_map.items():
            target = self.target_height(self.categorize(char))
            if target is None or not record.has_ink():
                continue

            bbox = strokes_bounding_box(list(record.strokes))
            if bbox is None:
                continue

            _, min_y, _, max_y = bbox
            scales.append(target / max(max_y - min_y, 1.0))

        if not scales:
            return self.metrics.fallback_scale
        return sum(scales) / len(scales)

    def normalize(
        self,
        strokes: list[Stroke] | tuple[Stroke, ...],
        char: str,
        avg_scale: float,
    ) -> NormalizedGlyph:
        """Scale and place a character's strokes in em space.

        Args:
            strokes: Raw strokes in canvas pixels
            char: Character the strokes draw
            avg_scale: Corpus-average scale from compute_avg_scale()

        Returns:
            NormalizedGlyph; empty with zero advance width for empty input
        """
        em = float(self.metrics.units_per_em)
        if not strokes:
            return NormalizedGlyph(char=char, advance_width=0.0, height=em)

        smoothed = apply_smoothing(strokes, self.smoothing)
        bbox = strokes_bounding_box(smoothed)
        if bbox is None:
            return NormalizedGlyph(char=char, advance_width=0.0, height=em)

        min_x, min_y, max_x, max_y = bbox
        raw_height = max(max_y - min_y, 1.0)
        raw_width = max_x - min_x

        scale, top = self._placement(self.categorize(char), raw_height, avg_scale)

        m = self.metrics
        offset_x = m.left_side_bearing - min_x * scale
        offset_y = top - min_y * scale

        placed = [
            Stroke(Point(p.x * scale + offset_x, p.y * scale + offset_y) for p in s.points)
            for s in smoothed
        ]
        advance_width = raw_width * scale + m.left_side_bearing + m.right_side_bearing

        return NormalizedGlyph(
            char=char,
            strokes=placed,
            advance_width=advance_width,
            height=em,
        )

    def _placement(
        self,
        category: GlyphCategory,
        raw_height: float,
        avg_scale: float,
    ) -> tuple[float, float]:
        """Return (scale, y of the ink top) for a category."""
        m = self.metrics
        target = self.target_height(category)
        scale = target / raw_height if target is not None else avg_scale

        if category == GlyphCategory.DESCENDER:
            return scale, m.baseline - m.x_height
        if category == GlyphCategory.COMMA:
            return scale, m.baseline
        return scale, m.baseline - raw_height * scale


def center_strokes(
    strokes: list[Stroke] | tuple[Stroke, ...],
    width: float,
    height: float,
    char: str | None = None,
) -> list[Stroke]:
    """Re-centre a drawing on its canvas.

    Descender-like characters are centred lower, at 62% of the canvas
    height, so their tails have room. Offsets below 1 px on both axes are
    ignored.

    Args:
        strokes: Strokes in canvas pixels
        width: Canvas width
        height: Canvas height
        char: Character drawn, if known

    Returns:
        Shifted strokes (the input strokes when no shift is needed)
    """
    bbox = strokes_bounding_box(list(strokes))
    if bbox is None:
        return list(strokes)

    min_x, min_y, max_x, max_y = bbox
    target_y = height * DESCENDER_CENTER_RATIO if char and char in CENTERING_DESCENDERS else height / 2

    offset_x = width / 2 - (min_x + max_x) / 2
    offset_y = target_y - (min_y + max_y) / 2

    if abs(offset_x) < 1 and abs(offset_y) < 1:
        return list(strokes)

    return [
        Stroke(Point(p.x + offset_x, p.y + offset_y) for p in s.points)
        for s in strokes
    ]
