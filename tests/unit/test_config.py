"""Tests for configuration models and logging utilities."""

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from contourlab.config import (
    ContourLabSettings,
    FourierConfig,
    SimplificationConfig,
    get_default_settings,
)
from contourlab.utils import ProcessingLogger, ProcessingStats, configure_logging


class TestSettings:
    """Tests for pydantic settings models."""

    def test_defaults(self):
        """Test default values."""
        settings = get_default_settings()
        assert settings.simplification.epsilon == 1.0
        assert settings.simplification.polygon_sides is None
        assert settings.simplification.clean_tolerance is None
        assert settings.fourier.ellipse_tolerance_per_mille == 10.0
        assert settings.fourier.descriptor_window == 8
        assert settings.processing.max_workers is None
        assert settings.logging.log_level == "WARNING"

    def test_model_dump_roundtrip(self):
        """Test worker configuration survives serialization."""
        config = SimplificationConfig(epsilon=0.25, polygon_sides=5)
        assert SimplificationConfig(**config.model_dump()) == config

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"epsilon": -1.0},
            {"polygon_sides": 2},
            {"polygon_sides": 65},
            {"area_tolerance": 0.0},
            {"clean_tolerance": 1.5},
        ],
    )
    def test_simplification_bounds(self, kwargs: dict):
        """Test out-of-range simplification settings are rejected."""
        with pytest.raises(ValidationError):
            SimplificationConfig(**kwargs)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"ellipse_tolerance_per_mille": 0.0},
            {"descriptor_window": 0},
            {"cache_size": 0},
        ],
    )
    def test_fourier_bounds(self, kwargs: dict):
        """Test out-of-range Fourier settings are rejected."""
        with pytest.raises(ValidationError):
            FourierConfig(**kwargs)

    def test_nested_settings(self):
        """Test nested models are built from plain dictionaries."""
        settings = ContourLabSettings(fourier={"descriptor_window": 3})
        assert settings.fourier.descriptor_window == 3
        assert settings.simplification.epsilon == 1.0


class TestProcessingStats:
    """Tests for ProcessingStats dataclass."""

    def test_empty(self):
        """Test statistics of an empty run."""
        stats = ProcessingStats()
        assert stats.duration_seconds == 0.0
        assert stats.avg_polyline_ms == 0.0
        assert stats.min_polyline_ms == 0.0
        assert stats.max_polyline_ms == 0.0

    def test_timings(self):
        """Test duration and timing aggregates."""
        stats = ProcessingStats(start_time=10.0, end_time=12.5)
        stats.polyline_timings_ms.extend([1.0, 3.0, 5.0])
        assert stats.duration_seconds == pytest.approx(2.5)
        assert stats.avg_polyline_ms == pytest.approx(3.0)
        assert stats.min_polyline_ms == 1.0
        assert stats.max_polyline_ms == 5.0


class TestLogging:
    """Tests for logging configuration."""

    def test_configure_logging_writes_file(self, tmp_path: Path):
        """Test structured log records reach the log file."""
        log_file = tmp_path / "run.log"
        logger = configure_logging(log_file=log_file, console_level="ERROR", quiet=True)
        logger.info("Hello", polyline="a")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "Hello" in log_file.read_text(encoding="utf-8")

    def test_reconfigure_replaces_handlers(self, tmp_path: Path):
        """Test repeated configuration does not stack handlers."""
        configure_logging(log_file=tmp_path / "a.log", quiet=False)
        configure_logging(log_file=tmp_path / "b.log", quiet=False)
        ours = [h for h in logging.getLogger().handlers if getattr(h, "_contourlab", False)]
        assert len(ours) == 2

    def test_processing_logger_tracks_stats(self):
        """Test the processing logger counts outcomes."""
        events: list[str] = []

        class _Recorder:
            def debug(self, event: str, **_: object) -> None:
                events.append(event)

            info = debug
            error = debug

        plog = ProcessingLogger(_Recorder())  # type: ignore[arg-type]
        plog.log_polyline_start("a")
        plog.log_polyline_complete("a", point_count=4, duration_ms=2.0)
        plog.log_polyline_skipped("b", "no points")
        plog.log_polyline_error("c", ValueError("boom"))

        stats = plog.stats
        assert stats.processed_count == 1
        assert stats.skipped_count == 1
        assert stats.error_count == 1
        assert stats.errors == [("c", "boom")]
        assert events[0] == "Processing polyline"
