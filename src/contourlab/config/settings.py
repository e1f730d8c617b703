"""Configuration settings for Contourlab."""

from pathlib import Path

from pydantic import BaseModel, Field


class SimplificationConfig(BaseModel):
    """Configuration for polyline simplification and polygon reduction.

    Distances are in the coordinate units of the input polylines.
    """

    epsilon: float = Field(
        default=1.0,
        ge=0.0,
        description="Douglas-Peucker distance tolerance",
    )
    polygon_sides: int | None = Field(
        default=None,
        ge=3,
        le=64,
        description="Target number of sides for polygon reduction (None = skip)",
    )
    area_tolerance: float = Field(
        default=0.1,
        gt=0.0,
        le=1.0,
        description="Maximum relative area change accepted by polygon reduction",
    )
    clean_tolerance: float | None = Field(
        default=None,
        gt=0.0,
        le=1.0,
        description="Cosine threshold for removing nearly straight vertices (None = skip)",
    )


class FourierConfig(BaseModel):
    """Configuration for Fourier shape descriptors."""

    ellipse_tolerance_per_mille: float = Field(
        default=10.0,
        gt=0.0,
        le=1000.0,
        description="Energy outside the fundamental accepted by the ellipse test (per mille)",
    )
    descriptor_window: int = Field(
        default=8,
        ge=1,
        le=128,
        description="Highest frequency of the reported descriptor magnitudes",
    )
    cache_size: int = Field(
        default=1024,
        ge=1,
        description="Coefficients memoized per descriptor",
    )


class ProcessingConfig(BaseModel):
    """Configuration for batch processing."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto)",
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


class ContourLabSettings(BaseModel):
    """Main application settings."""

    simplification: SimplificationConfig = Field(default_factory=SimplificationConfig)
    fourier: FourierConfig = Field(default_factory=FourierConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> ContourLabSettings:
    """Get default application settings."""
    return ContourLabSettings()
