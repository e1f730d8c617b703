"""Result writer for descriptor batches.

This module provides the ResultWriter class for saving descriptor results
and per-polyline errors as JSON.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from contourlab import __version__
from contourlab.exceptions import ResultSaveError


class ResultWriter:
    """Writes descriptor results to a JSON file.

    Example:
        writer = ResultWriter(Path("contours-descriptors.json"))
        writer.add_result(result)
        writer.add_error("blob-3", "Degenerate contour")
        writer.save()
    """

    def __init__(self, output_path: Path) -> None:
        """Initialize the result writer.

        Args:
            output_path: Path where the results will be saved
        """
        self._output_path = output_path
        self._results: list[dict[str, Any]] = []
        self._errors: list[dict[str, str]] = []

    def add_result(self, result: dict[str, Any]) -> None:
        """Queue one descriptor result."""
        self._results.append(result)

    def add_error(self, name: str, error: str) -> None:
        """Queue one per-polyline error."""
        self._errors.append({"name": name, "error": error})

    def save(self) -> None:
        """Write all queued results and errors.

        Results are sorted by polyline name so the output does not depend on
        worker completion order.

        Raises:
            ResultSaveError: If the file cannot be written
        """
        payload = {
            "generator": f"contourlab {__version__}",
            "created": datetime.now().strftime("%Y-%m-%dT%H:%M:%S"),
            "results": sorted(self._results, key=lambda r: r["name"]),
            "errors": sorted(self._errors, key=lambda e: e["name"]),
        }
        try:
            with self._output_path.open("w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
        except (OSError, TypeError, ValueError) as e:
            raise ResultSaveError(str(self._output_path), str(e)) from e

    @staticmethod
    def get_default_path(input_path: Path) -> Path:
        """Generate the default output path for an input batch file.

        Converts: contours.json -> contours-descriptors.json

        Args:
            input_path: Input batch file path

        Returns:
            Path with -descriptors suffix, always with a .json extension
        """
        return input_path.parent / f"{input_path.stem}-descriptors.json"
