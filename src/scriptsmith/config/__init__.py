"""Configuration management for scriptsmith.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- MetricsConfig: Em-square metrics and character categories
- SmoothingConfig: Stroke smoothing and decimation settings
- StyleConfig: Thickness, slant and cap settings of one style
- MergeConfig: Outline union settings
- GenerationConfig: Font name and spacing options
- ScriptsmithSettings: Main application settings
"""

from scriptsmith.config.settings import (
    BOLD,
    FAMILY_STYLES,
    ITALIC,
    REGULAR,
    CapStyle,
    GenerationConfig,
    LoggingConfig,
    MergeConfig,
    MergeStrategy,
    MetricsConfig,
    ProcessingConfig,
    ScriptsmithSettings,
    SmoothingConfig,
    StyleConfig,
    get_default_settings,
)

__all__ = [
    "BOLD",
    "FAMILY_STYLES",
    "ITALIC",
    "REGULAR",
    "CapStyle",
    "GenerationConfig",
    "LoggingConfig",
    "MergeConfig",
    "MergeStrategy",
    "MetricsConfig",
    "ProcessingConfig",
    "ScriptsmithSettings",
    "SmoothingConfig",
    "StyleConfig",
    "get_default_settings",
]
