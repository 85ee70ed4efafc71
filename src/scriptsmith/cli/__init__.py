"""Command-line interface for scriptsmith.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Single-style .ttf or Regular/Bold/Italic family .zip export
- Optional re-centring of drawings before compilation
- Verbose/quiet output modes
- Detailed error reporting
"""

from scriptsmith.cli.app import cli, main

__all__ = ["cli", "main"]
