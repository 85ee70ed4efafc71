"""CLI application entry point for scriptsmith.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from scriptsmith import __version__
from scriptsmith.cli.output import (
    console,
    create_progress,
    print_error,
    print_glyph_map_info,
    print_header,
    print_omitted,
    print_step,
    print_style_info,
    print_success,
)
from scriptsmith.config import (
    BOLD,
    FAMILY_STYLES,
    ITALIC,
    REGULAR,
    CapStyle,
    GenerationConfig,
    LoggingConfig,
    ProcessingConfig,
    ScriptsmithSettings,
    StyleConfig,
)
from scriptsmith.core import FontProcessor, center_strokes
from scriptsmith.domain import CHAR_SET, GlyphMap, GlyphRecord
from scriptsmith.exceptions import (
    FontAssemblyError,
    FontSaveError,
    GlyphMapLoadError,
    ScriptsmithError,
)
from scriptsmith.io import FontWriter, GlyphMapReader, save_font, write_family_archive
from scriptsmith.utils import ProcessingStats, configure_logging

app = typer.Typer(
    name="scriptsmith",
    help="Compile hand-drawn glyph strokes into TrueType fonts.",
    add_completion=False,
    no_args_is_help=True,
)

_PRESETS = {preset.style_name.lower(): preset for preset in (REGULAR, BOLD, ITALIC)}


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Scriptsmith[/bold blue] v{__version__}")
        raise typer.Exit()


def resolve_style(
    style: str,
    thickness: float | None,
    slant: float | None,
    round_caps: bool,
) -> StyleConfig:
    """Build the style of a single-style export.

    A preset name (regular, bold, italic) supplies defaults; explicit
    thickness and slant override them. Any other name starts from Regular.

    Raises:
        ValueError: If the resulting style is out of bounds
    """
    preset = _PRESETS.get(style.strip().lower())
    base = preset or REGULAR
    updates: dict[str, object] = {
        "style_name": base.style_name if preset else style.strip() or base.style_name
    }
    if thickness is not None:
        updates["thickness"] = thickness
    if slant is not None:
        updates["slant"] = slant
    if round_caps:
        updates["cap_style"] = CapStyle.ROUND
    return StyleConfig(**{**base.model_dump(), **updates})


def center_glyph_map(glyph_map: GlyphMap) -> GlyphMap:
    """Re-centre every drawing on its canvas."""
    centered: GlyphMap = {}
    for char, record in glyph_map.items():
        if not record.has_ink():
            centered[char] = record
            continue
        centered[char] = GlyphRecord(
            char=record.char,
            strokes=center_strokes(
                record.strokes, record.canvas_width, record.canvas_height, char
            ),
            canvas_width=record.canvas_width,
            canvas_height=record.canvas_height,
        )
    return centered


@app.command()
def compile_font(
    glyph_map_path: Annotated[
        Path,
        typer.Argument(
            help="Path to the glyph map JSON file",
            show_default=False,
        ),
    ],
    name: Annotated[
        str,
        typer.Option(
            "--name",
            "-n",
            help="Font family name",
        ),
    ] = "myhandwriting",
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}.ttf or {name}_Family.zip next to the input)",
        ),
    ] = None,
    letter_spacing: Annotated[
        float,
        typer.Option(
            "--letter-spacing",
            "-s",
            help="Tracking added to every advance width (-100..100, 10 font units per step)",
            min=-100.0,
            max=100.0,
        ),
    ] = 0.0,
    family: Annotated[
        bool,
        typer.Option(
            "--family",
            "-f",
            help="Write Regular, Bold and Italic into a zip archive",
        ),
    ] = False,
    style: Annotated[
        str,
        typer.Option(
            "--style",
            help="Style name of a single-style export (regular|bold|italic or custom)",
        ),
    ] = "Regular",
    thickness: Annotated[
        float | None,
        typer.Option(
            "--thickness",
            "-t",
            help="Stroke thickness in font units (default: from the style)",
            min=1.0,
            max=400.0,
        ),
    ] = None,
    slant: Annotated[
        float | None,
        typer.Option(
            "--slant",
            help="Italic shear per unit of height (default: from the style)",
            min=-1.0,
            max=1.0,
        ),
    ] = None,
    round_caps: Annotated[
        bool,
        typer.Option(
            "--round-caps",
            help="Close stroke ends with round caps instead of straight ones",
        ),
    ] = False,
    center: Annotated[
        bool,
        typer.Option(
            "--center",
            help="Re-centre every drawing on its canvas before compiling",
        ),
    ] = False,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Worker processes for --family (default: 1, in-process)",
            min=1,
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Compile a glyph map into a TrueType font.

    The glyph map is the JSON object the drawing application saves: one
    entry per character with its strokes and canvas size.

    Example:
        scriptsmith glyphs.json --name "My Hand" --family

    This will create My_Hand_Family.zip with My_Hand-Regular.ttf,
    My_Hand-Bold.ttf and My_Hand-Italic.ttf inside.
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if not glyph_map_path.exists():
        print_error(
            f"Input file not found: {glyph_map_path}",
            details=f"The file '{glyph_map_path}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not glyph_map_path.is_file():
        print_error(
            f"Input path is not a file: {glyph_map_path}",
            details="Please provide a path to a glyph map JSON file.",
        )
        raise typer.Exit(code=1)

    try:
        single_style = resolve_style(style, thickness, slant, round_caps)
    except ValueError as e:
        print_error(f"Invalid style: {style}", details=str(e))
        raise typer.Exit(code=1)

    settings = ScriptsmithSettings(
        style=single_style,
        generation=GenerationConfig(font_name=name, letter_spacing=letter_spacing),
        processing=ProcessingConfig(max_workers=workers if workers is not None else 1),
        logging=LoggingConfig(
            log_file=log_file,
            log_level="DEBUG" if verbose else log_level,
        ),
    )

    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    if not quiet:
        print_header(__version__)

    try:
        if not quiet:
            print_step("Loading glyph map")

        reader = GlyphMapReader(glyph_map_path)
        glyph_map = reader.load()

        if not quiet:
            missing = [c for c in CHAR_SET if c not in glyph_map or not glyph_map[c].has_ink()]
            print_glyph_map_info(
                path=str(glyph_map_path),
                drawn=reader.drawn_count,
                total=len(CHAR_SET),
                missing=missing,
                verbose=verbose,
            )

        if center:
            glyph_map = center_glyph_map(glyph_map)

        processor = FontProcessor(settings)
        output_dir = glyph_map_path.parent

        if family:
            if not quiet:
                print_step("Rendering family")
                print_style_info([s.style_name for s in FAMILY_STYLES], None, None)
            output_path = output or FontWriter.get_archive_path(output_dir, name)

            if not quiet:
                with create_progress() as progress:
                    task_id = progress.add_task(
                        f"Rendering {len(FAMILY_STYLES)} styles",
                        total=len(FAMILY_STYLES),
                    )

                    def update_progress(completed: int, *_: object) -> None:
                        progress.update(task_id, completed=completed)

                    buffers = processor.process_family(glyph_map, progress_callback=update_progress)
            else:
                buffers = processor.process_family(glyph_map)

            save_font(write_family_archive(buffers, name), output_path)
        else:
            if not quiet:
                print_step("Rendering font")
                print_style_info(
                    [single_style.style_name], single_style.thickness, single_style.slant
                )
            output_path = output or FontWriter.get_output_path(output_dir, name)
            save_font(processor.process(glyph_map), output_path)

        stats = processor.stats
        if not quiet:
            _print_summary(output_path, stats, verbose)

    except GlyphMapLoadError as e:
        print_error(f"Could not load glyph map: {e.reason}")
        raise typer.Exit(code=1)
    except FontAssemblyError as e:
        print_error(f"Could not build font: {e.reason}")
        raise typer.Exit(code=1)
    except FontSaveError as e:
        print_error(f"Could not save font: {e.reason}")
        raise typer.Exit(code=1)
    except ScriptsmithError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def _print_summary(output_path: Path, stats: ProcessingStats, verbose: bool) -> None:
    print_success(
        output_paths=[str(output_path)],
        file_size=_format_file_size(output_path),
        total_time_s=stats.duration_seconds,
        processed=stats.processed_count,
        contours=stats.contours_emitted,
        errors=stats.error_count,
        avg_time_ms=stats.avg_glyph_time_ms,
        min_time_ms=stats.min_glyph_time_ms,
        max_time_ms=stats.max_glyph_time_ms,
    )
    if verbose and stats.errors:
        print_omitted(stats.errors)


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "42 KB")
    """
    try:
        size_bytes = path.stat().st_size
    except OSError:
        return "unknown"
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
