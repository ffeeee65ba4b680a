"""Configuration management for glyphtrace.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- RasterConfig: Guide rendering settings
- StrokeConfig: Freehand stroke settings
- CoverageConfig: Sampling and tolerance settings
- CompletionConfig: Threshold and debounce settings
- TracerSettings: Main application settings
"""

from glyphtrace.config.settings import (
    CompletionConfig,
    CoverageConfig,
    EffectConfig,
    GeometryConfig,
    LoggingConfig,
    RasterConfig,
    StrokeConfig,
    TracerSettings,
    TracingMode,
    get_default_settings,
)

__all__ = [
    "CompletionConfig",
    "CoverageConfig",
    "EffectConfig",
    "GeometryConfig",
    "LoggingConfig",
    "RasterConfig",
    "StrokeConfig",
    "TracerSettings",
    "TracingMode",
    "get_default_settings",
]
