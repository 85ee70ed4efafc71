"""Font generation orchestration.

This module coordinates a complete export: snapshot of the glyph map,
corpus-average scale, normalization and assembly of one style or of the
Regular/Bold/Italic family.

Family variants are independent full passes over the same normalized data
and can run in worker processes.

Key components:
- render_style_variant: Top-level picklable function for parallel execution
- FontProcessor: Main orchestrator class
- generate_font / generate_font_family: Convenience entry points
"""

import time
import traceback
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Any

import structlog

from scriptsmith.config import (
    FAMILY_STYLES,
    ScriptsmithSettings,
    StyleConfig,
)
from scriptsmith.core.assembler import FontAssembler
from scriptsmith.core.normalizer import GlyphNormalizer
from scriptsmith.domain import CHAR_SET, GlyphMap, NormalizedGlyph
from scriptsmith.exceptions import FontAssemblyError
from scriptsmith.io.writer import safe_font_name
from scriptsmith.utils import ProcessingLogger, ProcessingStats


def render_style_variant(
    normalized_dicts: dict[str, dict[str, Any]],
    settings_dict: dict[str, Any],
    style_dict: dict[str, Any],
    font_name: str,
    letter_spacing: float,
) -> dict[str, Any]:
    """Render one style of the family.

    Top-level function designed to be picklable for use with
    ProcessPoolExecutor. Deserializes its inputs, assembles the font and
    returns the result.

    Args:
        normalized_dicts: Serialized normalized glyphs (NormalizedGlyph.to_dict())
        settings_dict: Serialized settings (model_dump())
        style_dict: Serialized style
        font_name: Family name
        letter_spacing: Uniform tracking in spacing units

    Returns:
        Dictionary containing either:
        - Success: {"style": str, "buffer": bytes, "stats": dict, "duration_ms": float}
        - Error: {"style": str, "error": str, "traceback": str, "duration_ms": float}
    """
    start_time = time.time()
    style = StyleConfig(**style_dict)

    try:
        settings = ScriptsmithSettings(**settings_dict)
        normalized = {
            char: NormalizedGlyph.from_dict(data) for char, data in normalized_dicts.items()
        }
        processing_logger = ProcessingLogger()
        assembler = FontAssembler(settings, processing_logger)
        buffer = assembler.assemble(font_name, normalized, style, letter_spacing)

        stats = processing_logger.stats
        return {
            "style": style.style_name,
            "buffer": buffer,
            "stats": {
                "processed": stats.processed_count,
                "errors": stats.errors,
                "contours": stats.contours_emitted,
                "union_fallbacks": stats.union_fallbacks,
                "timings": stats.glyph_timings_ms,
            },
            "duration_ms": (time.time() - start_time) * 1000,
        }

    except Exception as e:
        return {
            "style": style.style_name,
            "error": str(e),
            "traceback": traceback.format_exc(),
            "duration_ms": (time.time() - start_time) * 1000,
        }


class FontProcessor:
    """Orchestrates font generation.

    Manages the complete workflow:
    1. Snapshot the glyph map and drop characters without ink
    2. Compute the corpus-average scale once
    3. Normalize every drawn character
    4. Assemble one style, or all family styles (optionally in parallel)
    5. Collect statistics

    Example:
        processor = FontProcessor(ScriptsmithSettings())
        data = processor.process(glyph_map)
        family = processor.process_family(glyph_map)
    """

    def __init__(
        self,
        config: ScriptsmithSettings | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize font processor with configuration.

        Args:
            config: Scriptsmith settings; defaults when None
            logger: Structured logger; the "scriptsmith" logger when None
        """
        self.config = config if config is not None else ScriptsmithSettings()
        self.logger = logger if logger is not None else structlog.get_logger("scriptsmith")
        self.processing_logger = ProcessingLogger(self.logger)
        self.normalizer = GlyphNormalizer(self.config.metrics, self.config.smoothing)

    @property
    def stats(self) -> ProcessingStats:
        return self.processing_logger.stats

    def normalize(self, glyph_map: GlyphMap) -> dict[str, NormalizedGlyph]:
        """Normalize every drawn, supported character.

        The glyph map is copied first so later edits by the caller do not
        affect an export in flight.

        Args:
            glyph_map: Character -> drawn record

        Returns:
            Character -> normalized glyph, in glyph order
        """
        snapshot = dict(glyph_map)
        avg_scale = self.normalizer.compute_avg_scale(snapshot)
        self.logger.info("Average scale computed", avg_scale=round(avg_scale, 4))

        normalized: dict[str, NormalizedGlyph] = {}
        for char in CHAR_SET:
            record = snapshot.get(char)
            if record is None:
                continue
            if not record.has_ink():
                self.processing_logger.log_glyph_skipped(char, "no strokes")
                continue
            normalized[char] = self.normalizer.normalize(list(record.strokes), char, avg_scale)

        unsupported = sorted(set(snapshot) - set(CHAR_SET))
        if unsupported:
            self.logger.info("Ignoring unsupported characters", chars="".join(unsupported))

        return normalized

    def process(
        self,
        glyph_map: GlyphMap,
        style: StyleConfig | None = None,
        font_name: str | None = None,
        letter_spacing: float | None = None,
    ) -> bytes:
        """Generate one font style.

        Args:
            glyph_map: Character -> drawn record
            style: Style to render (config.style when None)
            font_name: Family name (config.generation.font_name when None)
            letter_spacing: Tracking (config.generation.letter_spacing when None)

        Returns:
            TrueType font bytes

        Raises:
            FontAssemblyError: If the binary encoder rejects the font
        """
        style = style if style is not None else self.config.style
        font_name = font_name if font_name is not None else self.config.generation.font_name
        if letter_spacing is None:
            letter_spacing = self.config.generation.letter_spacing

        self.stats.start_time = time.time()
        self.logger.info("Starting font generation", font=font_name, style=style.style_name)

        normalized = self.normalize(glyph_map)
        assembler = FontAssembler(self.config, self.processing_logger)
        buffer = assembler.assemble(font_name, normalized, style, letter_spacing)

        self.stats.end_time = time.time()
        self.logger.info(
            "Font generated",
            font=font_name,
            style=style.style_name,
            glyphs=self.stats.processed_count,
            errors=self.stats.error_count,
            size=len(buffer),
            duration_seconds=round(self.stats.duration_seconds, 2),
        )
        return buffer

    def process_family(
        self,
        glyph_map: GlyphMap,
        font_name: str | None = None,
        letter_spacing: float | None = None,
        styles: tuple[StyleConfig, ...] = FAMILY_STYLES,
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> dict[str, bytes]:
        """Generate the Regular/Bold/Italic family.

        Args:
            glyph_map: Character -> drawn record
            font_name: Family name (config.generation.font_name when None)
            letter_spacing: Tracking (config.generation.letter_spacing when None)
            styles: Styles to render
            max_workers: Worker processes; 1 renders in-process
                (config.processing.max_workers when None)
            progress_callback: Optional callback(completed, total, style_name, success)

        Returns:
            File name ({name}-{Style}.ttf) -> font bytes, in style order

        Raises:
            FontAssemblyError: If any style cannot be serialized
        """
        font_name = font_name if font_name is not None else self.config.generation.font_name
        if letter_spacing is None:
            letter_spacing = self.config.generation.letter_spacing
        if max_workers is None:
            max_workers = self.config.processing.max_workers

        self.stats.start_time = time.time()
        normalized = self.normalize(glyph_map)

        normalized_dicts = {char: g.to_dict() for char, g in normalized.items()}
        settings_dict = self.config.model_dump()
        tasks = [
            (normalized_dicts, settings_dict, style.model_dump(), font_name, letter_spacing)
            for style in styles
        ]

        self.logger.info(
            "Starting family generation",
            font=font_name,
            styles=[s.style_name for s in styles],
            max_workers=max_workers,
        )

        results: dict[str, dict[str, Any]] = {}
        total = len(tasks)

        if max_workers == 1:
            for completed, args in enumerate(tasks, start=1):
                result = render_style_variant(*args)
                results[result["style"]] = result
                if progress_callback is not None:
                    progress_callback(completed, total, result["style"], "error" not in result)
        else:
            with ProcessPoolExecutor(max_workers=max_workers) as executor:
                futures = [executor.submit(render_style_variant, *args) for args in tasks]
                for completed, future in enumerate(as_completed(futures), start=1):
                    result = future.result()
                    results[result["style"]] = result
                    if progress_callback is not None:
                        progress_callback(completed, total, result["style"], "error" not in result)

        safe_name = safe_font_name(font_name)
        buffers: dict[str, bytes] = {}
        for style in styles:
            result = results[style.style_name]
            if "error" in result:
                self.logger.error(
                    "Style generation failed",
                    style=style.style_name,
                    error=result["error"],
                    traceback=result.get("traceback"),
                )
                raise FontAssemblyError(f"{font_name} {style.style_name}", result["error"])

            self._record_variant_stats(style.style_name, result)
            buffers[f"{safe_name}-{style.style_name}.ttf"] = result["buffer"]

        self.stats.end_time = time.time()
        self.logger.info(
            "Family generated",
            font=font_name,
            files=list(buffers),
            duration_seconds=round(self.stats.duration_seconds, 2),
        )
        return buffers

    def _record_variant_stats(self, style_name: str, result: dict[str, Any]) -> None:
        variant = ProcessingStats(
            processed_count=result["stats"]["processed"],
            error_count=len(result["stats"]["errors"]),
            contours_emitted=result["stats"]["contours"],
            union_fallbacks=result["stats"]["union_fallbacks"],
            errors=[tuple(e) for e in result["stats"]["errors"]],
            glyph_timings_ms=list(result["stats"]["timings"]),
        )
        for char, error in variant.errors:
            self.logger.warning("Glyph omitted", style=style_name, glyph=char, error=error)
        self.stats.merge(variant)


def generate_font(
    font_name: str,
    glyph_map: GlyphMap,
    letter_spacing: float = 0.0,
    style: StyleConfig | None = None,
    settings: ScriptsmithSettings | None = None,
) -> bytes:
    """Generate a single TrueType font from a glyph map."""
    processor = FontProcessor(settings)
    return processor.process(
        glyph_map,
        style=style,
        font_name=font_name,
        letter_spacing=letter_spacing,
    )


def generate_font_family(
    font_name: str,
    glyph_map: GlyphMap,
    letter_spacing: float = 0.0,
    settings: ScriptsmithSettings | None = None,
    max_workers: int | None = None,
) -> dict[str, bytes]:
    """Generate {name}-Regular/Bold/Italic.ttf from a glyph map."""
    processor = FontProcessor(settings)
    return processor.process_family(
        glyph_map,
        font_name=font_name,
        letter_spacing=letter_spacing,
        max_workers=max_workers,
    )
