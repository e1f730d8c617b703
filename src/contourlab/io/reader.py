"""Batch file reader for polyline collections.

This module provides the PolylineReader class for loading JSON batch files
and iterating over their polyline records.
"""

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from contourlab.domain import Polyline
from contourlab.exceptions import PolylineLoadError
from contourlab.io.converter import record_to_polyline


class PolylineReader:
    """Loads JSON batch files of named polylines.

    The expected layout is {"polylines": [record, ...]} where each record
    has a "points" list and optional "name" and "kind" fields. Records
    without a name are named after their position.

    Example:
        reader = PolylineReader(Path("contours.json"))
        reader.load()
        for record in reader.iter_records():
            print(record["name"])
    """

    def __init__(self, path: Path) -> None:
        """Initialize the reader.

        Args:
            path: Path to the JSON batch file
        """
        self._path = path
        self._records: list[dict[str, Any]] | None = None

    def load(self) -> None:
        """Load and validate the batch file layout.

        Individual records are only checked for being objects; their
        geometry is validated when they are converted.

        Raises:
            PolylineLoadError: If the file is missing, not JSON, or has the
                wrong layout
        """
        if not self._path.exists():
            raise PolylineLoadError(str(self._path), "file not found")

        try:
            with self._path.open(encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise PolylineLoadError(str(self._path), str(e)) from e

        if not isinstance(data, dict) or not isinstance(data.get("polylines"), list):
            raise PolylineLoadError(str(self._path), "expected an object with a 'polylines' list")

        records: list[dict[str, Any]] = []
        for index, record in enumerate(data["polylines"]):
            if not isinstance(record, dict):
                raise PolylineLoadError(str(self._path), f"record {index} is not an object")
            records.append({**record, "name": str(record.get("name", f"polyline_{index}"))})

        self._records = records

    @property
    def count(self) -> int:
        """Number of records in the file.

        Raises:
            RuntimeError: If the file has not been loaded yet
        """
        if self._records is None:
            raise RuntimeError("Batch file not loaded. Call load() first.")
        return len(self._records)

    def iter_records(self) -> Iterator[dict[str, Any]]:
        """Iterate over the raw records in file order.

        Raises:
            RuntimeError: If the file has not been loaded yet
        """
        if self._records is None:
            raise RuntimeError("Batch file not loaded. Call load() first.")
        yield from self._records

    def iter_polylines(self) -> Iterator[tuple[str, Polyline]]:
        """Iterate over (name, polyline) pairs.

        Raises:
            RuntimeError: If the file has not been loaded yet
            InvalidInputError: If a record has invalid geometry
        """
        for record in self.iter_records():
            yield record["name"], record_to_polyline(record)

    def __enter__(self) -> "PolylineReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self._records = None
