"""Utility functions for scriptsmith.

This module provides utility functions including:

- Logging setup and configuration
- Processing statistics and per-glyph progress logging
"""

from scriptsmith.utils.logging import (
    ProcessingLogger,
    ProcessingStats,
    configure_logging,
)

__all__ = [
    "ProcessingLogger",
    "ProcessingStats",
    "configure_logging",
]
