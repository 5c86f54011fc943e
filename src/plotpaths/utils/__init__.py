"""Utility functions for plotpaths.

This module provides utility functions including:

- Logging setup and configuration
- Render step and statistics tracking
"""

from plotpaths.utils.logging import (
    ProcessingLogger,
    ProcessingStats,
    configure_logging,
)

__all__ = [
    "ProcessingLogger",
    "ProcessingStats",
    "configure_logging",
]
