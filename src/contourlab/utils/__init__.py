"""Utility functions for contourlab.

This module provides utility functions including:

- Logging setup and configuration
- Processing statistics
"""

from contourlab.utils.logging import (
    ProcessingLogger,
    ProcessingStats,
    configure_logging,
)

__all__ = [
    "ProcessingLogger",
    "ProcessingStats",
    "configure_logging",
]
