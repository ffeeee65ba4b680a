"""Logging utilities for glyphtrace."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from glyphtrace.core.coverage import CoverageReport


@dataclass
class TracingStats:
    """Counters for one tracing session."""

    checks_scheduled: int = 0
    evaluations: int = 0
    skipped_evaluations: int = 0
    completions: int = 0
    clears: int = 0
    best_ratio: float = 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("glyphtrace")
    logger.info("Logging initialized", log_file=str(log_file) if log_file else None, level=file_level)

    return logger


class TracingLogger:
    """Logger for tracking completion checks and their outcomes."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._logger = logger if logger is not None else structlog.get_logger("glyphtrace.tracing")
        self._stats = TracingStats()

    def log_check_scheduled(self, reason: str, delay: float) -> None:
        """Log a deferred evaluation being queued."""
        self._logger.debug("Coverage check scheduled", reason=reason, delay=delay)
        self._stats.checks_scheduled += 1

    def log_evaluation(self, report: "CoverageReport", passed: bool) -> None:
        """Log a completed coverage evaluation."""
        per_char = None
        if report.characters is not None:
            per_char = {
                f"{i}:{c.char}": (None if c.ratio is None else round(c.ratio, 3))
                for i, c in enumerate(report.characters)
            }
        self._logger.debug(
            "Coverage evaluated",
            ratio=round(report.ratio, 3),
            sampled=report.total,
            characters=per_char,
            passed=passed,
        )
        self._stats.evaluations += 1
        self._stats.best_ratio = max(self._stats.best_ratio, report.ratio)

    def log_evaluation_skipped(self, reason: str) -> None:
        """Log an evaluation that did not run."""
        self._logger.debug("Coverage evaluation skipped", reason=reason)
        self._stats.skipped_evaluations += 1

    def log_evaluation_error(self, error: Exception) -> None:
        """Log an evaluation that could not be computed."""
        self._logger.warning(
            "Coverage evaluation failed",
            error=str(error),
            error_type=type(error).__name__,
        )
        self._stats.skipped_evaluations += 1

    def log_completion(self, ratio: float) -> None:
        """Log the transition into the complete state."""
        self._logger.info("Tracing complete", ratio=round(ratio, 3))
        self._stats.completions += 1

    def log_clear(self, reason: str) -> None:
        """Log a reset of the clear-cycle."""
        self._logger.debug("Tracing reset", reason=reason)
        self._stats.clears += 1

    @property
    def stats(self) -> TracingStats:
        """Get current tracing statistics."""
        return self._stats
