"""Configuration settings for Scriptsmith."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class CapStyle(str, Enum):
    """How the two ends of an inked stroke are closed."""

    BUTT = "butt"
    ROUND = "round"


class MergeStrategy(str, Enum):
    """Which union engine merges the rings of one glyph."""

    PAIRWISE = "pairwise"
    CASCADED = "cascaded"
    NONE = "none"


class MetricsConfig(BaseModel):
    """Em-square metrics and character categories used for normalization.

    Vertical positions are expressed in drawing space (y grows downward), so
    the baseline sits at 800 in a 1000-unit em and the ascender line at 0.
    """

    model_config = ConfigDict(frozen=True)

    units_per_em: int = Field(default=1000, description="Font units per em")
    ascender: int = Field(default=800, description="Font ascender in font units")
    descender: int = Field(default=-200, description="Font descender in font units")
    baseline: float = Field(default=800.0, description="Baseline y in drawing space")
    cap_height: float = Field(default=750.0, description="Target height of capitals and digits")
    x_height: float = Field(default=550.0, description="Target height of lowercase x-height letters")
    ascender_height: float = Field(default=800.0, description="Target height of ascender letters")
    left_side_bearing: float = Field(default=50.0, ge=0.0, description="Padding left of the ink")
    right_side_bearing: float = Field(default=50.0, ge=0.0, description="Padding right of the ink")
    reference_canvas_size: float = Field(
        default=300.0,
        gt=0.0,
        description="Canvas size used for the fallback canvas-to-em scale",
    )
    caps_chars: str = Field(default="ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789!?")
    x_height_chars: str = Field(default="acemnorsuvwxz")
    ascender_chars: str = Field(default="bdfhiklt")
    descender_chars: str = Field(default="gjpqy")

    @property
    def fallback_scale(self) -> float:
        """Canvas-to-em ratio used when no character can be sampled."""
        return self.units_per_em / self.reference_canvas_size


class SmoothingConfig(BaseModel):
    """Configuration for stroke smoothing."""

    enabled: bool = Field(default=True, description="Apply the 3-point moving average")
    decimation_threshold: float = Field(
        default=4.0,
        ge=0.0,
        le=100.0,
        description="Squared distance (px^2) below which interior points are dropped; 0 disables",
    )


class StyleConfig(BaseModel):
    """Rendering parameters of one font style.

    Bold and Italic are the same centerlines rendered with a larger
    thickness or a non-zero slant.
    """

    style_name: str = Field(default="Regular", description="Style name in the name table")
    thickness: float = Field(default=50.0, gt=0.0, le=400.0, description="Stroke thickness in font units")
    slant: float = Field(default=0.0, ge=-1.0, le=1.0, description="Horizontal shear per font unit of height")
    cap_style: CapStyle = Field(default=CapStyle.BUTT, description="Stroke end cap style")
    cap_segments: int = Field(default=6, ge=2, le=32, description="Arc steps of a round cap")
    dot_sides: int = Field(default=12, ge=3, le=64, description="Sides of the polygon drawn for a dot")
    dot_radius_factor: float = Field(
        default=0.8,
        gt=0.0,
        le=4.0,
        description="Dot radius as a multiple of thickness",
    )

    @property
    def is_bold(self) -> bool:
        return "bold" in self.style_name.lower()

    @property
    def is_italic(self) -> bool:
        return self.slant != 0.0 or "italic" in self.style_name.lower()


REGULAR = StyleConfig(style_name="Regular", thickness=50.0, slant=0.0)
BOLD = StyleConfig(style_name="Bold", thickness=90.0, slant=0.0)
ITALIC = StyleConfig(style_name="Italic", thickness=50.0, slant=0.25)

FAMILY_STYLES: tuple[StyleConfig, ...] = (REGULAR, BOLD, ITALIC)


class MergeConfig(BaseModel):
    """Configuration for the outline union step."""

    strategy: MergeStrategy = Field(
        default=MergeStrategy.PAIRWISE,
        description="Union engine used to merge the rings of one glyph",
    )


class GenerationConfig(BaseModel):
    """Per-export generation options supplied by the application shell."""

    font_name: str = Field(default="myhandwriting", description="Family name of the font")
    letter_spacing: float = Field(
        default=0.0,
        ge=-100.0,
        le=100.0,
        description="Uniform tracking added to every advance width, in spacing units",
    )
    spacing_unit: float = Field(
        default=10.0,
        gt=0.0,
        description="Font units per letter-spacing step",
    )
    space_width: int = Field(default=400, ge=0, description="Base advance width of the space glyph")


class ProcessingConfig(BaseModel):
    """Configuration for font processing."""

    max_workers: int | None = Field(
        default=1,
        description="Max worker processes for family export (None = auto, 1 = in-process)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class ScriptsmithSettings(BaseModel):
    """Main application settings."""

    metrics: MetricsConfig = Field(default_factory=MetricsConfig)
    smoothing: SmoothingConfig = Field(default_factory=SmoothingConfig)
    style: StyleConfig = Field(default_factory=StyleConfig)
    merge: MergeConfig = Field(default_factory=MergeConfig)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> ScriptsmithSettings:
    """Get default application settings."""
    return ScriptsmithSettings()
