"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars and formatted messages.
"""


from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.text import Text

console = Console()

SYM_STEP = "▸"
SYM_OK = "✓"
SYM_ERR = "✗"
SYM_DOT = "·"


def create_progress() -> Progress:
    """Create a rich progress bar for style rendering."""
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    console.print(f"\n[bold]Scriptsmith[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    console.print(f"\n{SYM_STEP} {message}")


def print_glyph_map_info(path: str, drawn: int, total: int, missing: list[str], verbose: bool) -> None:
    """Print what the glyph map contains.

    Args:
        path: Path to the glyph map file
        drawn: Number of supported characters with strokes
        total: Number of supported characters
        missing: Supported characters without strokes
        verbose: Whether to list the missing characters
    """
    line = Text("  ")
    line.append(path)
    console.print(line)
    console.print(f"  [green]{drawn}[/green] of {total} characters drawn")
    if verbose and missing:
        console.print(f"  missing: {' '.join(missing)}")


def _format_time(seconds: float) -> str:
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_style_info(styles: list[str], thickness: float | None, slant: float | None) -> None:
    """Print which styles are rendered.

    Args:
        styles: Style names
        thickness: Stroke thickness of a single-style export
        slant: Slant of a single-style export
    """
    console.print(f"  {', '.join(styles)}")
    if thickness is not None and slant is not None:
        console.print(f"  thickness {thickness:g} {SYM_DOT} slant {slant:g}")


def print_success(
    output_paths: list[str],
    file_size: str,
    total_time_s: float,
    processed: int,
    contours: int,
    errors: int,
    avg_time_ms: float | None = None,
    min_time_ms: float | None = None,
    max_time_ms: float | None = None,
) -> None:
    """Print success message with summary.

    Args:
        output_paths: Paths of written files
        file_size: Human-readable size of the written files
        total_time_s: Total processing time in seconds
        processed: Number of glyphs built (summed over styles)
        contours: Number of contours emitted
        errors: Number of glyphs omitted because of errors
        avg_time_ms: Average build time per glyph in milliseconds
        min_time_ms: Minimum build time per glyph in milliseconds
        max_time_ms: Maximum build time per glyph in milliseconds
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    for output_path in output_paths:
        line = Text("  ")
        line.append(output_path, style="bold")
        console.print(line)
    console.print(f"  {file_size}")

    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {processed} glyphs {SYM_DOT} {contours} contours {SYM_DOT} "
        f"[{error_style}]{errors} errors[/{error_style}]"
    )

    if avg_time_ms is not None:
        timing_str = f"{avg_time_ms:.1f}ms avg"
        if min_time_ms is not None and max_time_ms is not None:
            timing_str += f" ({min_time_ms:.1f}–{max_time_ms:.1f}ms range)"
        console.print(f"  {timing_str}")


def print_omitted(errors: list[tuple[str, str]]) -> None:
    """List glyphs left out of the font."""
    for char, error in errors:
        line = Text(f"  {SYM_ERR} ")
        line.append(char, style="bold")
        line.append(f" {error}")
        console.print(line)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
