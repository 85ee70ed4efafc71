"""Core processing algorithms for scriptsmith.

This module contains the pipeline that turns drawn strokes into fonts:

- Stroke smoothing (moving average, decimation)
- Glyph normalization (category-based scaling into the em square)
- Outline building (stroke offsetting, caps, dots, flip and shear)
- Outline merging (boolean union of overlapping stroke rings)
- Font assembly and export orchestration

All pipeline stages are designed to be:
- Stateless apart from injected configuration
- Pure (no side effects besides logging)
- Safe to run in worker processes

Key functions:
- smooth_strokes: Smooth and decimate raw strokes
- center_strokes: Re-centre a drawing on its canvas
- build_stroke_outline: Turn one centerline into a closed ring
- generate_font / generate_font_family: One-call font generation

Key classes:
- GlyphNormalizer: Maps strokes into the em square
- OutlineBuilder: Builds stroke rings for one style
- OutlineMerger: Unions the rings of one glyph
- FontAssembler: Builds and serializes one font style
- FontProcessor: Orchestrates single-style and family exports
"""

from scriptsmith.core.assembler import FontAssembler, notdef_glyph
from scriptsmith.core.geometry import (
    perpendicular_offset,
    remove_near_duplicates,
    segment_angle,
    signed_area,
    winding_number,
)
from scriptsmith.core.merger import (
    CascadedUnionEngine,
    OutlineMerger,
    PairwiseUnionEngine,
    RawUnionEngine,
    UnionEngine,
    raw_contours,
)
from scriptsmith.core.normalizer import GlyphCategory, GlyphNormalizer, center_strokes
from scriptsmith.core.outline import OutlineBuilder, build_stroke_outline
from scriptsmith.core.processor import (
    FontProcessor,
    generate_font,
    generate_font_family,
    render_style_variant,
)
from scriptsmith.core.smoother import decimate_stroke, smooth_stroke, smooth_strokes

__all__ = [
    # Union engines
    "CascadedUnionEngine",
    # Assembly
    "FontAssembler",
    "FontProcessor",
    # Normalization
    "GlyphCategory",
    "GlyphNormalizer",
    # Outlines
    "OutlineBuilder",
    "OutlineMerger",
    "PairwiseUnionEngine",
    "RawUnionEngine",
    "UnionEngine",
    "build_stroke_outline",
    "center_strokes",
    # Smoothing
    "decimate_stroke",
    "generate_font",
    "generate_font_family",
    "notdef_glyph",
    # Geometry functions
    "perpendicular_offset",
    "raw_contours",
    "remove_near_duplicates",
    "render_style_variant",
    "segment_angle",
    "signed_area",
    "smooth_stroke",
    "smooth_strokes",
    "winding_number",
]
