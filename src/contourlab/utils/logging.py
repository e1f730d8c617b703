"""Logging utilities for Contourlab."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import structlog


@dataclass
class ProcessingStats:
    """Statistics from processing run."""

    processed_count: int = 0
    skipped_count: int = 0
    error_count: int = 0
    cancelled_count: int = 0
    was_cancelled: bool = False
    errors: list[tuple[str, str]] = field(default_factory=list)
    polyline_timings_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_polyline_ms(self) -> float:
        """Average per-polyline processing time."""
        if not self.polyline_timings_ms:
            return 0.0
        return sum(self.polyline_timings_ms) / len(self.polyline_timings_ms)

    @property
    def min_polyline_ms(self) -> float:
        """Fastest per-polyline processing time."""
        return min(self.polyline_timings_ms, default=0.0)

    @property
    def max_polyline_ms(self) -> float:
        """Slowest per-polyline processing time."""
        return max(self.polyline_timings_ms, default=0.0)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (auto-generated if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    if log_file is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = Path(f"contourlab_{timestamp}.log")

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Reconfiguring replaces the handlers installed by a previous call
    for handler in list(root_logger.handlers):
        if getattr(handler, "_contourlab", False):
            root_logger.removeHandler(handler)
            handler.close()

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(getattr(logging, file_level.upper()))
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
    )
    file_handler._contourlab = True  # type: ignore[attr-defined]
    root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        console_handler._contourlab = True  # type: ignore[attr-defined]
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

    logger = structlog.get_logger("contourlab")
    logger.info("Logging initialized", log_file=str(log_file), level=file_level)

    return logger


class ProcessingLogger:
    """Logger for tracking processing progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    def log_polyline_start(self, name: str) -> None:
        """Log start of polyline processing."""
        self._logger.debug("Processing polyline", polyline=name)

    def log_polyline_complete(
        self,
        name: str,
        point_count: int,
        duration_ms: float,
    ) -> None:
        """Log successful polyline processing."""
        self._logger.info(
            "Polyline processed",
            polyline=name,
            points=point_count,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.processed_count += 1
        self._stats.polyline_timings_ms.append(duration_ms)

    def log_polyline_skipped(self, name: str, reason: str) -> None:
        """Log skipped polyline."""
        self._logger.debug("Polyline skipped", polyline=name, reason=reason)
        self._stats.skipped_count += 1

    def log_polyline_error(
        self,
        name: str,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log polyline processing error."""
        self._logger.error(
            "Polyline processing failed",
            polyline=name,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((name, str(error)))

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
