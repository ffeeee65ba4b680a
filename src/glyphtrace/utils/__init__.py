"""Utility functions for glyphtrace.

This module provides utility functions including:

- Logging setup and configuration
- Tracing statistics helpers
"""

from glyphtrace.utils.logging import (
    TracingLogger,
    TracingStats,
    configure_logging,
)

__all__ = [
    "TracingLogger",
    "TracingStats",
    "configure_logging",
]
