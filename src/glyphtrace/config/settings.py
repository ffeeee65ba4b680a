"""Configuration settings for glyphtrace."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class TracingMode(str, Enum):
    """How coverage is judged for a target."""

    LETTER = "letter"
    WORD = "word"


class GeometryConfig(BaseModel):
    """Configuration for outline flattening with scale-relative tolerances.

    Tolerance values are specified at a reference UPM of 1000 and will be
    scaled proportionally for fonts with different UPM values.
    """

    reference_upm: int = Field(
        default=1000,
        description="Reference UPM for tolerance values",
    )
    bezier_flatten_tolerance: float = Field(
        default=1.0,
        ge=0.1,
        le=10.0,
        description="Tolerance for Bezier curve flattening (at reference UPM)",
    )

    def scale_tolerance(self, base_value: float, upm: int) -> float:
        """Scale a tolerance value for the given UPM.

        Args:
            base_value: The tolerance value at reference UPM
            upm: The actual UPM of the font

        Returns:
            Scaled tolerance value
        """
        return base_value * (upm / self.reference_upm)

    def get_bezier_tolerance(self, upm: int) -> float:
        """Get Bezier flattening tolerance scaled for UPM."""
        return self.scale_tolerance(self.bezier_flatten_tolerance, upm)


class RasterConfig(BaseModel):
    """Configuration for guide rasterization."""

    letter_font_size: float = Field(
        default=200.0,
        gt=0.0,
        description="Nominal font size (logical px) for single letters",
    )
    word_font_size: float = Field(
        default=120.0,
        gt=0.0,
        description="Nominal font size (logical px) for words",
    )
    max_width_ratio: float = Field(
        default=0.9,
        gt=0.0,
        le=1.0,
        description="Widest the text may be, as a fraction of the surface width",
    )
    min_font_scale: float = Field(
        default=1.0 / 3.0,
        gt=0.0,
        le=1.0,
        description="Floor for the shrunk font size, as a fraction of nominal",
    )
    supersample: int = Field(
        default=4,
        ge=1,
        le=8,
        description="Supersampling factor used for anti-aliased fills",
    )
    overlay_dot_spacing: float = Field(
        default=6.0,
        gt=0.0,
        description="Distance between dots of the cosmetic outline (logical px)",
    )
    overlay_dot_radius: float = Field(
        default=1.5,
        gt=0.0,
        description="Radius of the cosmetic outline dots (logical px)",
    )
    guide_color: str = Field(
        default="#E0E0E0",
        description="Colour of the cosmetic guide overlay",
    )


class StrokeConfig(BaseModel):
    """Configuration for freehand stroke capture."""

    width: float = Field(
        default=8.0,
        gt=0.0,
        description="Stroke width in logical px (scaled by the pixel ratio)",
    )
    color: str = Field(
        default="#81C784",
        description="Colour used when rendering strokes",
    )
    highlight_radius: int = Field(
        default=3,
        ge=1,
        le=20,
        description="Glow growth around strokes in device px",
    )
    highlight_blur: float = Field(
        default=4.0,
        ge=0.0,
        description="Gaussian blur radius applied to the glow layer",
    )


class CoverageConfig(BaseModel):
    """Configuration for coverage estimation."""

    sample_stride: int = Field(
        default=4,
        ge=1,
        le=16,
        description="Decimation factor applied when sampling guide pixels",
    )
    ink_threshold: int = Field(
        default=50,
        ge=0,
        le=254,
        description="Alpha above which a guide sample counts as ink",
    )
    tolerance_radius: int = Field(
        default=20,
        ge=0,
        le=100,
        description="Half-size of the square searched for stroke ink (device px)",
    )
    search_stride: int = Field(
        default=2,
        ge=1,
        le=10,
        description="Step between offsets inside the tolerance window",
    )


class CompletionConfig(BaseModel):
    """Configuration for the completion controller."""

    pass_threshold: float = Field(
        default=0.85,
        gt=0.0,
        le=1.0,
        description="Coverage ratio needed to complete",
    )
    evaluation_delay: float = Field(
        default=0.15,
        ge=0.0,
        le=2.0,
        description="Seconds between a check request and the evaluation",
    )
    move_check_probability: float = Field(
        default=0.1,
        ge=0.0,
        le=1.0,
        description=(
            "Chance that an inking move requests a check. Higher values give "
            "quicker feedback mid-stroke at the cost of more evaluations"
        ),
    )


class EffectConfig(BaseModel):
    """Timing of the star-burst completion effect."""

    star_count: int = Field(default=12, ge=1, le=64)
    star_duration: float = Field(default=2.0, ge=0.0)
    star_stagger: float = Field(default=0.1, ge=0.0)
    settle_delay: float = Field(default=0.5, ge=0.0)
    message: str = Field(default="Good job!")


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


class TracerSettings(BaseModel):
    """Main application settings."""

    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    raster: RasterConfig = Field(default_factory=RasterConfig)
    stroke: StrokeConfig = Field(default_factory=StrokeConfig)
    coverage: CoverageConfig = Field(default_factory=CoverageConfig)
    completion: CompletionConfig = Field(default_factory=CompletionConfig)
    effect: EffectConfig = Field(default_factory=EffectConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> TracerSettings:
    """Get default application settings."""
    return TracerSettings()
