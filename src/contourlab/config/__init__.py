"""Configuration management for contourlab.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- SimplificationConfig: Douglas-Peucker and polygon reduction settings
- FourierConfig: Fourier descriptor and ellipse test settings
- ProcessingConfig: Batch processing settings
- LoggingConfig: Logging settings
- ContourLabSettings: Main application settings
"""

from contourlab.config.settings import (
    ContourLabSettings,
    FourierConfig,
    LoggingConfig,
    ProcessingConfig,
    SimplificationConfig,
    get_default_settings,
)

__all__ = [
    "ContourLabSettings",
    "FourierConfig",
    "LoggingConfig",
    "ProcessingConfig",
    "SimplificationConfig",
    "get_default_settings",
]
