"""Unit tests for settings and logging helpers."""

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from glyphtrace.config import (
    CompletionConfig,
    CoverageConfig,
    GeometryConfig,
    RasterConfig,
    TracerSettings,
    TracingMode,
    get_default_settings,
)
from glyphtrace.core import CoverageReport
from glyphtrace.utils import TracingLogger, configure_logging


class TestSettings:
    """Tests for configuration defaults and validation."""

    def test_defaults(self):
        settings = get_default_settings()
        assert settings.raster.letter_font_size == 200.0
        assert settings.raster.word_font_size == 120.0
        assert settings.raster.max_width_ratio == 0.9
        assert settings.stroke.width == 8.0
        assert settings.coverage.sample_stride == 4
        assert settings.coverage.ink_threshold == 50
        assert settings.coverage.tolerance_radius == 20
        assert settings.coverage.search_stride == 2
        assert settings.completion.pass_threshold == 0.85
        assert settings.effect.star_count == 12
        assert settings.effect.message == "Good job!"

    @pytest.mark.parametrize("threshold", [0.0, 1.5, -0.1])
    def test_threshold_range(self, threshold: float):
        with pytest.raises(ValidationError):
            CompletionConfig(pass_threshold=threshold)

    def test_stride_must_be_positive(self):
        with pytest.raises(ValidationError):
            CoverageConfig(sample_stride=0)

    def test_width_ratio_range(self):
        with pytest.raises(ValidationError):
            RasterConfig(max_width_ratio=1.2)

    def test_nested_override(self):
        settings = TracerSettings.model_validate({"coverage": {"tolerance_radius": 10}})
        assert settings.coverage.tolerance_radius == 10
        assert settings.coverage.sample_stride == 4

    def test_bezier_tolerance_scales_with_upm(self):
        config = GeometryConfig()
        assert config.get_bezier_tolerance(1000) == 1.0
        assert config.get_bezier_tolerance(2048) == pytest.approx(2.048)

    def test_mode_values(self):
        assert TracingMode("word") is TracingMode.WORD


class TestTracingLogger:
    """Tests for tracing statistics."""

    def test_stats(self):
        tracing_logger = TracingLogger()
        tracing_logger.log_check_scheduled("pen_up", 0.15)
        tracing_logger.log_evaluation(CoverageReport(matched=40, total=100), passed=False)
        tracing_logger.log_evaluation(CoverageReport(matched=90, total=100), passed=True)
        tracing_logger.log_evaluation_skipped("no_ink")
        tracing_logger.log_completion(0.9)
        tracing_logger.log_clear("clear")

        stats = tracing_logger.stats
        assert stats.checks_scheduled == 1
        assert stats.evaluations == 2
        assert stats.skipped_evaluations == 1
        assert stats.completions == 1
        assert stats.clears == 1
        assert stats.best_ratio == pytest.approx(0.9)


class TestConfigureLogging:
    """Tests for logging setup."""

    def test_log_file_receives_records(self, tmp_path: Path):
        log_file = tmp_path / "trace.log"
        configure_logging(log_file=log_file, quiet=True)

        TracingLogger().log_completion(0.95)
        for handler in logging.getLogger().handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "Logging initialized" in content
        assert "Tracing complete" in content

    def test_quiet_without_file_adds_no_handlers(self):
        before = list(logging.getLogger().handlers)
        configure_logging(quiet=True)
        assert logging.getLogger().handlers == before
