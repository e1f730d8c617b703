"""Parallel processing orchestration for descriptor batches.

This module runs the descriptor suite over a batch of named polylines, one
worker task per polyline, using ProcessPoolExecutor. Tasks share no state.

Key components:
- describe_polyline: The descriptor suite for one polyline
- process_polyline: Top-level picklable function for parallel execution
- ContourProcessor: Main orchestrator class for batch processing
"""

import time
import traceback
from collections.abc import Callable, Iterable
from concurrent.futures import Future, ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Any

from contourlab.config import ContourLabSettings, FourierConfig, SimplificationConfig
from contourlab.core.fourier import fourier_pl, is_ellipse, normalize_start
from contourlab.core.geometry import bounding_box, oriented_area, perimeter
from contourlab.core.hull import convex_hull
from contourlab.core.kurtosis import ica_angles
from contourlab.core.moments import eig_2x2_dir, moments_contour
from contourlab.core.simplify import clean_polygon, select_polygons, simplify
from contourlab.domain import Polyline
from contourlab.exceptions import InvalidInputError, ProcessingCancelledError
from contourlab.io import PolylineReader, ResultWriter, record_to_polyline
from contourlab.utils import ProcessingLogger, ProcessingStats, configure_logging


def _points(poly: Polyline) -> list[list[float]]:
    return [[p.x, p.y] for p in poly.points]


def _hull_size(poly: Polyline) -> int | None:
    # Collinear or repeated points have no proper hull
    try:
        return len(convex_hull(poly.points))
    except InvalidInputError:
        return None


def describe_polyline(
    poly: Polyline,
    simplification: SimplificationConfig,
    fourier: FourierConfig,
) -> dict[str, Any]:
    """Compute the descriptor suite for one polyline.

    Open polylines get the descriptors defined for them (length, bounding
    box, simplification and hull size). Closed polylines additionally get
    area, moments, principal axes, polygon reduction, the ellipse test,
    kurtosis angles and start-normalized Fourier magnitudes.

    Args:
        poly: Input polyline
        simplification: Simplification settings
        fourier: Fourier descriptor settings

    Returns:
        JSON-serializable descriptor dictionary

    Raises:
        ContourLabError: If a descriptor is undefined for the input
    """
    simplified = simplify(poly, simplification.epsilon)
    result: dict[str, Any] = {
        "kind": poly.kind.value,
        "point_count": len(poly),
        "perimeter": perimeter(poly),
        "bounding_box": list(bounding_box(poly)),
        "simplified": _points(simplified),
        "hull_size": _hull_size(poly),
    }

    if not poly.is_closed:
        return result

    m = moments_contour(poly)
    l1, l2, angle = eig_2x2_dir(m.var_x, m.var_y, m.covar_xy)
    result.update(
        {
            "oriented_area": oriented_area(poly),
            "moments": m._asdict(),
            "principal_axes": {"major_var": l1, "minor_var": l2, "angle": angle},
            "is_ellipse": is_ellipse(fourier.ellipse_tolerance_per_mille, poly),
            "ica_angles": ica_angles(poly),
        }
    )

    if simplification.polygon_sides is not None:
        polygons = select_polygons(
            simplification.area_tolerance, simplification.polygon_sides, [poly]
        )
        result["polygon"] = _points(polygons[0]) if polygons else None

    if simplification.clean_tolerance is not None:
        result["cleaned"] = _points(clean_polygon(simplification.clean_tolerance, poly))

    f = normalize_start(fourier_pl(poly, cache_size=fourier.cache_size))
    window = fourier.descriptor_window
    result["fourier_magnitudes"] = [float(v) for v in abs(f.window(window))]

    return result


def process_polyline(
    record: dict[str, Any],
    config_dict: dict[str, Any],
) -> dict[str, Any]:
    """Compute descriptors for a single polyline record.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.
    Deserializes the record, runs the descriptor suite and returns the result.

    Args:
        record: Batch file record ({"name", "kind", "points"})
        config_dict: Serialized settings with "simplification" and "fourier" keys

    Returns:
        Dictionary containing either:
        - Success: {"name": str, "descriptors": dict, "duration_ms": float}
        - Error: {"error": str, "error_type": str, "name": str, "traceback": str,
          "duration_ms": float}
    """
    start_time = time.time()
    name = str(record.get("name", "unknown"))

    try:
        poly = record_to_polyline(record)
        simplification = SimplificationConfig(**config_dict.get("simplification", {}))
        fourier = FourierConfig(**config_dict.get("fourier", {}))

        descriptors = describe_polyline(poly, simplification, fourier)

        duration_ms = (time.time() - start_time) * 1000
        return {
            "name": name,
            "descriptors": descriptors,
            "duration_ms": duration_ms,
        }

    except Exception as e:
        # Errors are returned, not raised, so one bad polyline does not stop the batch
        duration_ms = (time.time() - start_time) * 1000
        return {
            "error": str(e),
            "error_type": type(e).__name__,
            "name": name,
            "traceback": traceback.format_exc(),
            "duration_ms": duration_ms,
        }


class ContourProcessor:
    """Orchestrates parallel descriptor computation.

    Manages the complete workflow:
    1. Load the batch file
    2. Process polylines in parallel using worker processes
    3. Collect results and update statistics
    4. Save descriptor results

    Example:
        settings = ContourLabSettings()
        processor = ContourProcessor(settings)
        stats = processor.process(
            input_path=Path("contours.json"),
            output_path=Path("contours-descriptors.json"),
            max_workers=4
        )
    """

    def __init__(self, config: ContourLabSettings) -> None:
        """Initialize processor with configuration.

        Args:
            config: Contourlab settings
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=False,
        )

    def process(
        self,
        input_path: Path,
        output_path: Path | None = None,
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> ProcessingStats:
        """Process a batch file with parallel polyline processing.

        Args:
            input_path: Path to the JSON batch file
            output_path: Path for the results (auto-generated if None)
            max_workers: Maximum worker processes (None = use settings)
            progress_callback: Optional callback(completed, total, name, success)
                for progress updates

        Returns:
            ProcessingStats with counts, timing, and error details

        Raises:
            PolylineLoadError: If the batch file cannot be loaded
            ResultSaveError: If the results cannot be written
            ProcessingCancelledError: If processing is cancelled by user
        """
        if output_path is None:
            output_path = ResultWriter.get_default_path(input_path)

        self.logger.info(
            "Starting batch processing",
            input=str(input_path),
            output=str(output_path),
            max_workers=max_workers,
        )

        reader = PolylineReader(input_path)
        reader.load()
        self.logger.info("Batch loaded", polyline_count=reader.count)

        writer = ResultWriter(output_path)
        stats = self.process_records(
            records=reader.iter_records(),
            writer=writer,
            max_workers=max_workers,
            progress_callback=progress_callback,
        )

        writer.save()
        self.logger.info("Results saved", output=str(output_path))

        return stats

    def process_records(
        self,
        records: Iterable[dict[str, Any]],
        writer: ResultWriter,
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> ProcessingStats:
        """Process polyline records in parallel, collecting into a writer.

        Args:
            records: Batch file records
            writer: Receives results and per-polyline errors
            max_workers: Maximum worker processes (None = use settings)
            progress_callback: Optional callback(completed, total, name, success)

        Returns:
            ProcessingStats for this run

        Raises:
            ProcessingCancelledError: If processing is cancelled by user
        """
        processing_logger = ProcessingLogger(self.logger)
        stats = processing_logger.stats
        stats.start_time = time.time()

        if max_workers is None:
            max_workers = self.config.processing.max_workers

        # Serialize configuration for workers
        config_dict = {
            "simplification": self.config.simplification.model_dump(),
            "fourier": self.config.fourier.model_dump(),
        }

        tasks: list[dict[str, Any]] = []
        for record in records:
            if not record.get("points"):
                processing_logger.log_polyline_skipped(
                    str(record.get("name")), "no points"
                )
                writer.add_error(str(record.get("name")), "Polyline has no points")
                continue
            tasks.append(record)

        if tasks:
            self._process_parallel(
                tasks=tasks,
                config_dict=config_dict,
                max_workers=max_workers,
                processing_logger=processing_logger,
                writer=writer,
                progress_callback=progress_callback,
            )
        else:
            self.logger.info("No polylines to process")

        stats.end_time = time.time()

        self.logger.info(
            "Processing complete",
            processed=stats.processed_count,
            skipped=stats.skipped_count,
            errors=stats.error_count,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return stats

    def _process_parallel(
        self,
        tasks: list[dict[str, Any]],
        config_dict: dict[str, Any],
        max_workers: int | None,
        processing_logger: ProcessingLogger,
        writer: ResultWriter,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> None:
        """Process records in parallel using ProcessPoolExecutor.

        Args:
            tasks: Records to process
            config_dict: Serialized worker configuration
            max_workers: Maximum worker processes
            processing_logger: Logs events and accumulates run statistics
            writer: Receives results and errors
            progress_callback: Optional callback(completed, total, name, success)
        """
        self.logger.info(
            "Starting parallel processing",
            polyline_count=len(tasks),
            max_workers=max_workers,
        )

        stats = processing_logger.stats
        total = len(tasks)
        completed = 0
        pending_futures: dict[Future[dict[str, Any]], str] = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for record in tasks:
                name = str(record["name"])
                processing_logger.log_polyline_start(name)
                future = executor.submit(process_polyline, record, config_dict)
                pending_futures[future] = name

            try:
                for future in as_completed(list(pending_futures)):
                    name = pending_futures.pop(future)
                    success = False

                    try:
                        result = future.result()

                        if "error" in result:
                            processing_logger.log_polyline_error(
                                name=name,
                                error=Exception(result["error"]),
                                traceback=result.get("traceback"),
                            )
                            writer.add_error(name, result["error"])
                        else:
                            success = True
                            duration_ms = result.get("duration_ms", 0.0)
                            writer.add_result(
                                {"name": name, **result["descriptors"]}
                            )
                            processing_logger.log_polyline_complete(
                                name=name,
                                point_count=result["descriptors"].get("point_count", 0),
                                duration_ms=duration_ms,
                            )

                    except Exception as e:
                        # Executor-level error (e.g. a worker died)
                        processing_logger.log_polyline_error(
                            name=name,
                            error=e,
                            traceback=traceback.format_exc(),
                        )
                        writer.add_error(name, str(e))

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, name, success)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                for f in pending_futures:
                    f.cancel()

                stats.was_cancelled = True
                stats.cancelled_count = len(pending_futures)
                stats.end_time = time.time()

                executor.shutdown(wait=True, cancel_futures=True)
                raise ProcessingCancelledError(
                    processed_count=stats.processed_count,
                    pending_count=stats.cancelled_count,
                ) from None
