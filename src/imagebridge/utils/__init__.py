"""Utility functions for imagebridge.

This module provides logging setup and filter run statistics.
"""

from imagebridge.utils.logging import (
    FilterLogger,
    FilterStats,
    configure_logging,
)

__all__ = [
    "FilterLogger",
    "FilterStats",
    "configure_logging",
]
